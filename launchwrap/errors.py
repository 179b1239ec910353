#===============================================================================
#  Launcher_Rewriter | errors.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-17
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  Error kinds raised by the rewrite operation.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations


class RewriteError(Exception):
    """Base class for rewrite failures."""


class MissingBinary(RewriteError):
    """The entry point is absent at its conventional location."""


class UnsupportedBinaryFormat(RewriteError):
    """Architecture inspection of the original executable failed."""


class GenerationFailed(RewriteError):
    """Writing or compiling the new entry point failed (already rolled back)."""


class SigningFailed(RewriteError):
    """Re-signing the new entry point failed."""


class CorruptedInstallation(RewriteError):
    """Rollback failed; the target may have neither original nor wrapper."""

    def __init__(self, message: str, entry_point=None, backup_path=None):
        super().__init__(message)
        self.entry_point = entry_point
        self.backup_path = backup_path
