#===============================================================================
#  Launcher_Rewriter | rewriter.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-17
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  Rewrites an installed application so its entry point runs inside the
#  user's login-shell environment. The original executable is moved to
#  <name>.original and a forwarding launcher (script or native stub) takes
#  its place. Running it again on a wrapped app is a no-op.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from typing import Iterable, List, Optional

from .arch_inspector import ArchInspector, MachOInspector
from .codesign import sign_entry_point
from .command_runner import tools_log_path
from .constants import TMP_SOURCE_SUFFIX, TMP_WRAPPER_SUFFIX
from .errors import CorruptedInstallation, GenerationFailed, MissingBinary, SigningFailed
from .fs_discovery import resolve_target
from .models import InstallTarget, RewriteConfig, RewriteOutcome, Strategy
from .script_gen import render_forwarding_script
from .stub_gen import build_stub, render_stub_source
from .toolchain import resolve_compiler

log = logging.getLogger(__name__)


def _tmp_path(entry_point: Path, suffix: str) -> Path:
    return entry_point.with_name("." + entry_point.name + suffix)


def _partial_artifacts(target: InstallTarget) -> List[Path]:
    return [
        _tmp_path(target.entry_point, TMP_WRAPPER_SUFFIX),
        _tmp_path(target.entry_point, TMP_SOURCE_SUFFIX),
    ]


def _exists(p: Path) -> bool:
    return p.exists() or p.is_symlink()


def is_wrapped(app_path) -> bool:
    return _exists(resolve_target(app_path).backup_path)


def _restore_original(target: InstallTarget) -> None:
    """Drop any wrapper/partial files and move the preserved original back."""
    try:
        for p in _partial_artifacts(target):
            if _exists(p):
                p.unlink()
        if _exists(target.entry_point):
            target.entry_point.unlink()
        os.rename(target.backup_path, target.entry_point)
    except OSError as e:
        raise CorruptedInstallation(
            f"Could not restore {target.entry_point} from {target.backup_path}: {e}",
            entry_point=target.entry_point,
            backup_path=target.backup_path,
        ) from e


def _write_script(target: InstallTarget, cfg: RewriteConfig) -> Path:
    text = render_forwarding_script(
        target.backup_path.name,
        cfg.profiles,
        cfg.shell,
        cfg.package_manager_dirs,
        cfg.system_dirs,
    )
    tmp = _tmp_path(target.entry_point, TMP_WRAPPER_SUFFIX)
    tmp.write_text(text, encoding="utf-8")
    return tmp


def _build_native(target: InstallTarget, cfg: RewriteConfig, archs: List[str], compiler: str) -> Path:
    source_text = render_stub_source(
        target.backup_path.name,
        cfg.profiles,
        cfg.shell,
        cfg.package_manager_dirs,
        cfg.system_dirs,
    )
    source = _tmp_path(target.entry_point, TMP_SOURCE_SUFFIX)
    output = _tmp_path(target.entry_point, TMP_WRAPPER_SUFFIX)
    try:
        return build_stub(source_text, source, output, archs, compiler, tools_log_path(cfg.log_dir))
    finally:
        if _exists(source):
            source.unlink()


def rewrite(
    app_path,
    profiles: Optional[Iterable[str]] = None,
    strategy: Optional[Strategy] = None,
    config: Optional[RewriteConfig] = None,
    inspector: Optional[ArchInspector] = None,
) -> RewriteOutcome:
    """Wrap the entry point of *app_path* with an environment-injecting launcher.

    profiles / strategy override the matching fields of *config*.

    Raises:
      MissingBinary           - no executable at the conventional location
      UnsupportedBinaryFormat - compiled strategy could not read the architectures
      GenerationFailed        - writing/compiling the launcher failed (rolled back)
      SigningFailed           - re-signing failed and signing is required (rolled back)
      CorruptedInstallation   - rollback itself failed
    """
    cfg = (config or RewriteConfig()).with_overrides(profiles, strategy)
    target = resolve_target(app_path)

    if _exists(target.backup_path):
        log.info("Already wrapped, leaving untouched: %s", target.entry_point)
        return RewriteOutcome.ALREADY_WRAPPED

    if not target.entry_point.is_file():
        raise MissingBinary(f"No executable at {target.entry_point}")

    archs: List[str] = []
    compiler = ""
    if cfg.strategy is Strategy.COMPILED:
        # Must happen before the move: the header belongs to the original.
        archs = (inspector or MachOInspector()).architectures(target.entry_point)
        try:
            compiler = resolve_compiler(cfg.compiler)
        except RuntimeError as e:
            raise GenerationFailed(str(e)) from e
        log.info("Compiling launcher stub for %s with %s", ", ".join(archs), compiler)

    mode = stat.S_IMODE(target.entry_point.stat().st_mode)
    try:
        os.rename(target.entry_point, target.backup_path)
    except OSError as e:
        raise GenerationFailed(f"Could not move {target.entry_point} aside: {e}") from e
    log.debug("Moved %s -> %s", target.entry_point.name, target.backup_path.name)

    try:
        if cfg.strategy is Strategy.COMPILED:
            tmp = _build_native(target, cfg, archs, compiler)
        else:
            tmp = _write_script(target, cfg)
        os.chmod(tmp, mode | 0o755)
        os.replace(tmp, target.entry_point)
    except Exception as e:
        log.error("Launcher generation failed for %s: %s. Restoring original.", target.entry_point, e)
        _restore_original(target)
        raise GenerationFailed(f"Could not generate launcher for {target.entry_point}: {e}") from e

    if cfg.codesign:
        try:
            sign_entry_point(target.entry_point, cfg.signing_identity, tools_log_path(cfg.log_dir))
        except SigningFailed as e:
            if cfg.signing_required:
                log.error("%s. Restoring original.", e)
                _restore_original(target)
                raise
            log.warning("%s (signing optional, launcher left unsigned)", e)

    log.info("Wrapped %s (%s)", target.entry_point, cfg.strategy.value)
    return RewriteOutcome.WRAPPED


def restore(app_path) -> bool:
    """Undo a previous rewrite. Returns False when the app was not wrapped."""
    target = resolve_target(app_path)
    if not _exists(target.backup_path):
        return False
    _restore_original(target)
    log.info("Restored original executable: %s", target.entry_point)
    return True
