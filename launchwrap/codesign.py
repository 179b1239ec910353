#===============================================================================
#  Launcher_Rewriter | codesign.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-17
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  Re-signs a freshly generated entry point. Apple Silicon refuses to run
#  unsigned native code, and a replaced main executable invalidates the
#  bundle signature anyway.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import shutil
from pathlib import Path
from typing import List

from .command_runner import run_logged
from .errors import SigningFailed


def codesign_command(path: Path, identity: str) -> List[str]:
    return ["codesign", "--force", "--sign", identity or "-", str(path)]


def sign_entry_point(path: Path, identity: str, log_file: Path) -> None:
    if not shutil.which("codesign"):
        raise SigningFailed("codesign not found (Xcode Command Line Tools missing?)")
    try:
        run_logged(codesign_command(path, identity), log_file)
    except (OSError, RuntimeError) as e:
        raise SigningFailed(f"Signing {path} failed: {e}") from e
