#===============================================================================
#  Launcher_Rewriter | constants.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-17
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  Central place for naming conventions, default shell profiles and the
#  directories the generated launchers put on PATH.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import sys
from pathlib import Path

APP_TITLE = "Launcher Rewriter"
CONFIG_FILE_NAME = "launchwrap_config.json"

# Appended to the entry point name; its presence marks an already wrapped app.
BACKUP_SUFFIX = ".original"

# Value of $0 inside the interpreter that sources the profiles.
# Must stay a valid shell identifier (profiles do things like `export $0`).
ARGV0_TOKEN = "launchwrap"

# Login / non-interactive profiles only. Interactive files (.zshrc, .bashrc)
# print prompts and banners that break a GUI launch.
DEFAULT_PROFILES = (
    ".zshenv",
    ".profile",
    ".bash_profile",
    ".zprofile",
)

# Lowest priority first: every existing entry is prepended in turn,
# so the last one listed ends up at the front of PATH.
DEFAULT_PACKAGE_MANAGER_DIRS = (
    "/opt/local/bin",      # MacPorts
    "/usr/local/bin",      # Homebrew (Intel)
    "/opt/homebrew/bin",   # Homebrew (Apple Silicon)
)

DEFAULT_SYSTEM_DIRS = (
    "/usr/bin",
    "/bin",
    "/usr/sbin",
    "/sbin",
)

# The wrapper script itself only needs POSIX sh; profiles are sourced by this.
SCRIPT_INTERPRETER = "/bin/sh"
DEFAULT_SHELL = "/bin/zsh" if sys.platform == "darwin" else "/bin/sh"

DEFAULT_SIGNING_IDENTITY = "-"  # ad-hoc
DEFAULT_CODESIGN = sys.platform == "darwin"

DEFAULT_LOG_DIR = Path.home() / ".launchwrap" / "logs"
LOG_FILE_NAME = "launchwrap.log"
TOOLS_LOG_FILE_NAME = "tools.log"

# Temporary artifacts live next to the entry point so the final move is atomic.
TMP_WRAPPER_SUFFIX = ".launchwrap-tmp"
TMP_SOURCE_SUFFIX = ".launchwrap-stub.c"

# --- UI (Metro style) ---
METRO_BG = "#101010"
WINDOW_SIZE = (720, 520)
