#===============================================================================
#  Launcher_Rewriter | command_runner.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-17
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  Runs external tools (compiler, codesign, lipo) and appends their output to
#  a log file so failures can be diagnosed after the fact.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path
from typing import List, Optional

from .constants import TOOLS_LOG_FILE_NAME

log = logging.getLogger(__name__)


def ensure_log_dir(log_dir: Path) -> Path:
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def tools_log_path(log_dir: Path) -> Path:
    return ensure_log_dir(Path(log_dir)) / TOOLS_LOG_FILE_NAME


def run_logged(cmd: List[str], log_file: Path, cwd: Optional[Path] = None, env: Optional[dict] = None) -> None:
    """Run a subprocess and append stdout/stderr to a log file."""
    log.debug("$ %s", shlex.join(cmd))
    with open(log_file, "a", encoding="utf-8", errors="ignore") as f:
        f.write(f"\n$ {shlex.join(cmd)}\n")
        f.flush()
        p = subprocess.Popen(
            cmd,
            cwd=str(cwd) if cwd else None,
            stdout=f,
            stderr=subprocess.STDOUT,
            env=env,
            text=True,
        )
        rc = p.wait()
        if rc != 0:
            raise RuntimeError(f"Command failed (rc={rc}): {cmd[0]}. See log: {log_file}")


def run_captured(cmd: List[str], log_file: Path) -> str:
    """Run a subprocess and return its stdout; stderr goes to the log file."""
    log.debug("$ %s", shlex.join(cmd))
    with open(log_file, "a", encoding="utf-8", errors="ignore") as f:
        f.write(f"\n$ {shlex.join(cmd)}\n")
        f.flush()
        p = subprocess.run(cmd, stdout=subprocess.PIPE, stderr=f, text=True)
    if p.returncode != 0:
        raise RuntimeError(f"Command failed (rc={p.returncode}): {cmd[0]}. See log: {log_file}")
    return p.stdout
