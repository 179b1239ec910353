#===============================================================================
#  Launcher_Rewriter | config.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-17
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  Load/save of persistent rewriter settings (launchwrap_config.json) and
#  conversion into a RewriteConfig.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from .constants import (
    DEFAULT_CODESIGN,
    DEFAULT_LOG_DIR,
    DEFAULT_PACKAGE_MANAGER_DIRS,
    DEFAULT_PROFILES,
    DEFAULT_SHELL,
    DEFAULT_SIGNING_IDENTITY,
    DEFAULT_SYSTEM_DIRS,
)
from .models import RewriteConfig, Strategy

log = logging.getLogger(__name__)


def default_config() -> Dict[str, Any]:
    return {
        "profiles": list(DEFAULT_PROFILES),        # relative to $HOME, sourced in order
        "strategy": Strategy.SCRIPT.value,         # "script" | "compiled"
        "shell": DEFAULT_SHELL,
        "package_manager_dirs": list(DEFAULT_PACKAGE_MANAGER_DIRS),  # lowest priority first
        "system_dirs": list(DEFAULT_SYSTEM_DIRS),
        "codesign": DEFAULT_CODESIGN,
        "signing_required": False,
        "signing_identity": DEFAULT_SIGNING_IDENTITY,
        "compiler": "",                            # empty -> auto-detect
        "log_dir": str(DEFAULT_LOG_DIR),
        "last_app_path": "",
    }


def load_config(config_path: Path) -> Dict[str, Any]:
    """Load settings from disk (or create defaults)."""
    d = default_config()
    if not config_path.exists():
        return d
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        log.warning("Ignoring unreadable config %s: %s", config_path, e)
        return d
    if not isinstance(data, dict):
        log.warning("Ignoring config %s: expected a JSON object", config_path)
        return d
    for k in d:
        if k not in data:
            data[k] = d[k]
    return data


def save_config(config_path: Path, config: Dict[str, Any]) -> None:
    """Persist settings to disk."""
    config_path.write_text(json.dumps(config, indent=2), encoding="utf-8")


def _str_list(value) -> tuple:
    if isinstance(value, str):
        value = [value]
    return tuple(str(v).strip() for v in (value or []) if str(v).strip())


def config_to_rewrite_config(config: Dict[str, Any]) -> RewriteConfig:
    """Build a RewriteConfig; raises ValueError on an unknown strategy."""
    d = default_config()
    merged = {**d, **(config or {})}
    try:
        strategy = Strategy(str(merged["strategy"]).strip().lower())
    except ValueError:
        raise ValueError(
            f"Unknown strategy {merged['strategy']!r} (expected 'script' or 'compiled')"
        ) from None
    return RewriteConfig(
        profiles=_str_list(merged["profiles"]),
        strategy=strategy,
        shell=str(merged["shell"] or DEFAULT_SHELL),
        package_manager_dirs=_str_list(merged["package_manager_dirs"]),
        system_dirs=_str_list(merged["system_dirs"]),
        codesign=bool(merged["codesign"]),
        signing_required=bool(merged["signing_required"]),
        signing_identity=str(merged["signing_identity"] or DEFAULT_SIGNING_IDENTITY),
        compiler=(str(merged["compiler"]).strip() or None),
        log_dir=Path(str(merged["log_dir"] or DEFAULT_LOG_DIR)).expanduser(),
    )
