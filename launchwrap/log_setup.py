#===============================================================================
#  Launcher_Rewriter | log_setup.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-17
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  Logging configuration: console output plus a rotating log file next to
#  the external tool log.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .command_runner import ensure_log_dir
from .constants import LOG_FILE_NAME

FORMATTERS = {
    "console": logging.Formatter("%(asctime)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"),
    "file": logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ),
}


def setup_logging(log_dir: Path, debug: bool = False) -> Path:
    """Configure the 'launchwrap' logger tree. Returns the log file path."""
    log_file = ensure_log_dir(Path(log_dir)) / LOG_FILE_NAME

    logger = logging.getLogger("launchwrap")
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    console = logging.StreamHandler()
    console.setFormatter(FORMATTERS["console"])
    logger.addHandler(console)

    file_handler = RotatingFileHandler(log_file, maxBytes=1024 * 1024, backupCount=3, encoding="utf-8")
    file_handler.setFormatter(FORMATTERS["file"])
    logger.addHandler(file_handler)

    logger.propagate = False
    return log_file
