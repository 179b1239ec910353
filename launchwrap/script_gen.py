#===============================================================================
#  Launcher_Rewriter | script_gen.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-17
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  Generates the shell text used by both launcher flavours:
#    - the environment logic run by `<shell> -c` (profiles, PATH, exec)
#    - the forwarding script that replaces the entry point (script strategy)
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import shlex
from typing import Iterable, List

from .constants import ARGV0_TOKEN, SCRIPT_INTERPRETER

TARGET_VAR = "__launchwrap_target"
ARGC_VAR = "__launchwrap_n"
INDEX_VAR = "__launchwrap_i"
ARG_PREFIX = "__launchwrap_arg_"


def _profile_lines(profiles: Iterable[str]) -> List[str]:
    lines: List[str] = []
    for profile in profiles:
        profile = (profile or "").strip()
        if not profile:
            continue
        path = '"$HOME"/' + shlex.quote(profile.lstrip("/"))
        lines.append(f"if [ -f {path} ]; then . {path} >/dev/null 2>&1; fi")
    return lines


def _path_lines(package_manager_dirs: Iterable[str], system_dirs: Iterable[str]) -> List[str]:
    lines: List[str] = []
    for d in package_manager_dirs:
        q = shlex.quote(d)
        lines.append(f'if [ -d {q} ]; then PATH={q}:"$PATH"; fi')
    tail = "".join(":" + shlex.quote(d) for d in system_dirs)
    if tail:
        lines.append(f'PATH="$PATH"{tail}')
    lines.append("export PATH")
    return lines


def _save_args_lines() -> List[str]:
    # Profiles may run `set --` or `shift`; keep the user's arguments out of their reach.
    return [
        f"{ARGC_VAR}=$#",
        f"{INDEX_VAR}=0",
        'for __launchwrap_a in "$@"; do',
        f'    eval "{ARG_PREFIX}${INDEX_VAR}=\\$__launchwrap_a"',
        f"    {INDEX_VAR}=$(({INDEX_VAR} + 1))",
        "done",
        "set --",
    ]


def _restore_args_lines() -> List[str]:
    return [
        f"{INDEX_VAR}=0",
        f'while [ "${INDEX_VAR}" -lt "${ARGC_VAR}" ]; do',
        f'    eval "set -- \\"\\$@\\" \\"\\${ARG_PREFIX}${INDEX_VAR}\\""',
        f"    {INDEX_VAR}=$(({INDEX_VAR} + 1))",
        "done",
    ]


def render_environment_logic(
    profiles: Iterable[str],
    package_manager_dirs: Iterable[str],
    system_dirs: Iterable[str],
) -> str:
    """Shell logic run as `<shell> -c LOGIC <token> <original> [args...]`.

    $1 is the preserved original. It is saved and shifted off, and the user
    arguments are stashed in numbered variables while the profiles run, so
    "$@" at the exec is exactly the user's argument list.
    """
    lines = [f'{TARGET_VAR}="$1"', "shift"]
    lines += _save_args_lines()
    lines += _profile_lines(profiles)
    lines += _path_lines(package_manager_dirs, system_dirs)
    lines += _restore_args_lines()
    lines.append(f'exec "${TARGET_VAR}" "$@"')
    return "\n".join(lines) + "\n"


def interpreter_prefix(shell: str, logic: str) -> List[str]:
    """Leading argument vector for execv(shell, ...).

    The preserved original and the user arguments follow it. Slot $0 of the
    interpreter is ARGV0_TOKEN, never a filesystem path. zsh gets -f so it
    reads no startup files beyond the configured profile list.
    """
    name = shell.rstrip("/").rsplit("/", 1)[-1] or shell
    flags = ["-f"] if name == "zsh" else []
    return [name, *flags, "-c", logic, ARGV0_TOKEN]


def render_forwarding_script(
    backup_name: str,
    profiles: Iterable[str],
    shell: str,
    package_manager_dirs: Iterable[str],
    system_dirs: Iterable[str],
) -> str:
    """Full text of the wrapper script written over the entry point."""
    logic = render_environment_logic(profiles, package_manager_dirs, system_dirs)
    args = " ".join(shlex.quote(a) for a in interpreter_prefix(shell, logic)[1:])
    shown = "".join(c if c.isprintable() else "?" for c in backup_name)
    return f"""#!{SCRIPT_INTERPRETER}
# Generated by launchwrap. The original executable is {shown}, next to this file.
self="$0"
while [ -h "$self" ]; do
    link=$(readlink "$self")
    case "$link" in
        /*) self="$link" ;;
        *) self=$(dirname "$self")/"$link" ;;
    esac
done
here=$(CDPATH= cd -P "$(dirname "$self")" && pwd -P) || exit 126
exec {shlex.quote(shell)} {args} "$here"/{shlex.quote(backup_name)} "$@"
"""
