#===============================================================================
#  Launcher_Rewriter | fs_discovery.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-17
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  Filesystem discovery: locate the entry-point executable of an installed
#  application and the reserved backup name next to it.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import plistlib
from pathlib import Path
from typing import Optional

from .constants import BACKUP_SUFFIX
from .errors import MissingBinary
from .models import InstallTarget


def bundle_executable_name(bundle: Path) -> Optional[str]:
    """Read CFBundleExecutable from <bundle>/Contents/Info.plist, if any."""
    info = bundle / "Contents" / "Info.plist"
    if not info.is_file():
        return None
    try:
        with open(info, "rb") as f:
            data = plistlib.load(f)
    except (OSError, plistlib.InvalidFileException, ValueError):
        return None
    name = data.get("CFBundleExecutable") if isinstance(data, dict) else None
    if isinstance(name, str) and name.strip():
        return name.strip()
    return None


def find_entry_point(app_path: Path) -> Path:
    """Return the conventional entry-point location for *app_path*.

    Rules:
    - .app bundle (has Contents/): Contents/MacOS/<CFBundleExecutable>,
      falling back to the bundle name without its extension
    - any other folder: <folder>/<folder name>
    - a file: the file itself

    The returned path does not have to exist; the caller decides what a
    missing entry point means.
    """
    if app_path.is_dir():
        if (app_path / "Contents").is_dir():
            name = bundle_executable_name(app_path) or app_path.stem
            return app_path / "Contents" / "MacOS" / name
        return app_path / app_path.name
    return app_path


def backup_path_for(entry_point: Path) -> Path:
    return entry_point.with_name(entry_point.name + BACKUP_SUFFIX)


def resolve_target(app_path) -> InstallTarget:
    app_path = Path(app_path).expanduser()
    entry = find_entry_point(app_path)
    if entry.name in ("", ".", ".."):
        # ".", "/" and friends have no name to derive an entry point from
        raise MissingBinary(f"No executable name can be derived from {app_path}")
    return InstallTarget(
        app_path=app_path,
        exec_dir=entry.parent,
        entry_point=entry,
        backup_path=backup_path_for(entry),
    )
