#===============================================================================
#  Launcher_Rewriter | models.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-17
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  Shared data models used across the rewriter (targets, settings, outcomes).
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

from .constants import (
    DEFAULT_CODESIGN,
    DEFAULT_LOG_DIR,
    DEFAULT_PACKAGE_MANAGER_DIRS,
    DEFAULT_PROFILES,
    DEFAULT_SHELL,
    DEFAULT_SIGNING_IDENTITY,
    DEFAULT_SYSTEM_DIRS,
)


class Strategy(Enum):
    """How the new entry point is produced."""
    SCRIPT = "script"       # interpreted forwarding script
    COMPILED = "compiled"   # native forwarding stub


class RewriteOutcome(Enum):
    WRAPPED = "wrapped"
    ALREADY_WRAPPED = "already_wrapped"


@dataclass(frozen=True)
class InstallTarget:
    """An installed application and the paths the rewrite touches."""
    app_path: Path      # what the caller handed in (.app bundle, folder or file)
    exec_dir: Path      # folder holding the entry point
    entry_point: Path   # current launchable executable
    backup_path: Path   # reserved name of the preserved original


@dataclass(frozen=True)
class RewriteConfig:
    profiles: Tuple[str, ...] = DEFAULT_PROFILES
    strategy: Strategy = Strategy.SCRIPT
    shell: str = DEFAULT_SHELL
    package_manager_dirs: Tuple[str, ...] = DEFAULT_PACKAGE_MANAGER_DIRS
    system_dirs: Tuple[str, ...] = DEFAULT_SYSTEM_DIRS
    codesign: bool = DEFAULT_CODESIGN
    signing_required: bool = False
    signing_identity: str = DEFAULT_SIGNING_IDENTITY
    compiler: Optional[str] = None
    log_dir: Path = field(default=DEFAULT_LOG_DIR)

    def with_overrides(self, profiles=None, strategy: Optional[Strategy] = None) -> "RewriteConfig":
        """Return a copy with the per-call profile list / strategy applied."""
        changes = {}
        if profiles is not None:
            changes["profiles"] = tuple(profiles)
        if strategy is not None:
            changes["strategy"] = strategy
        return replace(self, **changes) if changes else self
