#===============================================================================
#  Launcher_Rewriter | toolchain.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-17
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  Resolves a usable C compiler for the native launcher stub.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import shutil
import subprocess
import sys
from pathlib import Path
from typing import Optional


def _xcrun_clang() -> Optional[str]:
    if not shutil.which("xcrun"):
        return None
    try:
        p = subprocess.run(
            ["xcrun", "--find", "clang"],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
        )
    except OSError:
        return None
    found = p.stdout.strip()
    if p.returncode == 0 and found and Path(found).exists():
        return found
    return None


def resolve_compiler(configured: Optional[str] = None) -> str:
    """Return the compiler executable to build the stub with.

    Resolution order:
      1) configured path/name if set + exists (or found on PATH)
      2) clang from the active Xcode / Command Line Tools (macOS)
      3) 'cc', 'clang', 'gcc' in PATH
    """
    if configured:
        if Path(configured).exists():
            return configured
        found = shutil.which(configured)
        if found:
            return found
        raise RuntimeError(f"Configured compiler not found: {configured}")

    if sys.platform == "darwin":
        clang = _xcrun_clang()
        if clang:
            return clang

    for name in ("cc", "clang", "gcc"):
        found = shutil.which(name)
        if found:
            return found

    raise RuntimeError(
        "No C compiler found. Install the Xcode Command Line Tools (xcode-select --install) "
        "or set 'compiler' in the configuration."
    )
