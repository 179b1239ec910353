#===============================================================================
#  Launcher_Rewriter | stub_gen.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-17
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  Native launcher stub (compiled strategy). The stub finds its own folder,
#  then execs the configured shell with the same environment logic the
#  forwarding script uses; the shell in turn execs the preserved original.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from .command_runner import run_logged
from .script_gen import interpreter_prefix, render_environment_logic

STUB_TEMPLATE = r"""/* Generated by launchwrap. The original executable is %(backup_comment)s, next to this file. */
#include <limits.h>
#include <stdint.h>
#include <stdio.h>
#include <stdlib.h>
#include <string.h>
#include <unistd.h>
#ifdef __APPLE__
#include <mach-o/dyld.h>
#endif

static const char *SHELL_PATH = %(shell)s;
static const char *BACKUP_NAME = %(backup)s;
static const char *PREFIX[] = {
%(prefix)s
};

static int self_path(char *out)
{
#ifdef __APPLE__
    char raw[PATH_MAX];
    uint32_t size = sizeof(raw);
    if (_NSGetExecutablePath(raw, &size) != 0)
        return -1;
    return realpath(raw, out) ? 0 : -1;
#else
    return realpath("/proc/self/exe", out) ? 0 : -1;
#endif
}

int main(int argc, char *argv[])
{
    char self[PATH_MAX];
    char target[PATH_MAX];
    size_t nprefix = sizeof(PREFIX) / sizeof(PREFIX[0]);
    char **args;
    char *slash;
    size_t i, n = 0;

    if (self_path(self) != 0) {
        perror("launchwrap: cannot locate own executable");
        return 126;
    }
    slash = strrchr(self, '/');
    if (slash != NULL)
        *slash = '\0';
    if (snprintf(target, sizeof(target), "%%s/%%s", self, BACKUP_NAME) >= (int)sizeof(target)) {
        fprintf(stderr, "launchwrap: path too long\n");
        return 126;
    }

    args = calloc(nprefix + (size_t)argc + 1, sizeof(char *));
    if (args == NULL) {
        perror("launchwrap");
        return 126;
    }
    for (i = 0; i < nprefix; i++)
        args[n++] = (char *)PREFIX[i];
    args[n++] = target;
    for (i = 1; i < (size_t)argc; i++)
        args[n++] = argv[i];
    args[n] = NULL;

    execv(SHELL_PATH, args);
    perror("launchwrap: exec failed");
    return 127;
}
"""


def c_string_literal(value: str) -> str:
    """Encode *value* as a C string literal (UTF-8, octal escapes for the rest)."""
    out = ['"']
    for b in value.encode("utf-8"):
        ch = chr(b)
        if ch == "\\":
            out.append("\\\\")
        elif ch == '"':
            out.append('\\"')
        elif ch == "\n":
            out.append("\\n")
        elif ch == "\t":
            out.append("\\t")
        elif 0x20 <= b < 0x7F and ch != "?":
            out.append(ch)
        else:
            # fixed-width octal cannot swallow a following digit; covers '?' (trigraphs)
            out.append(f"\\{b:03o}")
    out.append('"')
    return "".join(out)


def render_stub_source(
    backup_name: str,
    profiles: Iterable[str],
    shell: str,
    package_manager_dirs: Iterable[str],
    system_dirs: Iterable[str],
) -> str:
    logic = render_environment_logic(profiles, package_manager_dirs, system_dirs)
    prefix = interpreter_prefix(shell, logic)
    return STUB_TEMPLATE % {
        "backup_comment": backup_name.replace("*/", "* /"),
        "shell": c_string_literal(shell),
        "backup": c_string_literal(backup_name),
        "prefix": ",\n".join("    " + c_string_literal(p) for p in prefix),
    }


def compile_command(compiler: str, source: Path, output: Path, archs: List[str]) -> List[str]:
    cmd = [compiler, "-Os", "-Wall"]
    for arch in archs:
        cmd += ["-arch", arch]
    cmd += ["-o", str(output), str(source)]
    return cmd


def build_stub(
    source_text: str,
    source_path: Path,
    output_path: Path,
    archs: List[str],
    compiler: str,
    log_file: Path,
) -> Path:
    """Write the C source and compile it to *output_path*. Leaves cleanup to the caller."""
    if not archs:
        raise RuntimeError("No target architectures to compile the launcher stub for.")
    source_path.write_text(source_text, encoding="utf-8")
    run_logged(compile_command(compiler, source_path, output_path, archs), log_file, cwd=source_path.parent)
    if not output_path.is_file():
        raise RuntimeError(f"Compiler reported success but produced no output: {output_path}")
    return output_path
