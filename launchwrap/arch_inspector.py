#===============================================================================
#  Launcher_Rewriter | arch_inspector.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-17
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  Reports the instruction-set architectures an executable was built for, so
#  the native launcher stub can be compiled for exactly the same set.
#
#    - MachOInspector : reads the Mach-O / universal header with LIEF
#    - LipoInspector  : asks `lipo -archs` (macOS developer tools)
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Protocol

import lief

from .command_runner import run_captured, tools_log_path
from .constants import DEFAULT_LOG_DIR
from .errors import UnsupportedBinaryFormat

CPU_ARCH_ABI64 = 0x01000000
CPU_ARCH_ABI64_32 = 0x02000000
CPU_SUBTYPE_MASK = 0xFF000000

CPU_TYPE_X86 = 7
CPU_TYPE_ARM = 12
CPU_TYPE_POWERPC = 18

ARM_SUBTYPES = {6: "armv6", 9: "armv7", 11: "armv7s", 12: "armv7k"}


class ArchInspector(Protocol):
    def architectures(self, path: Path) -> List[str]:
        ...


def arch_name(cputype: int, cpusubtype: int) -> Optional[str]:
    """Map a Mach-O cputype/cpusubtype pair to the name `-arch` accepts."""
    sub = cpusubtype & ~CPU_SUBTYPE_MASK
    if cputype == CPU_TYPE_X86:
        return "i386"
    if cputype == CPU_TYPE_X86 | CPU_ARCH_ABI64:
        return "x86_64h" if sub == 8 else "x86_64"
    if cputype == CPU_TYPE_ARM:
        return ARM_SUBTYPES.get(sub, "arm")
    if cputype == CPU_TYPE_ARM | CPU_ARCH_ABI64:
        return "arm64e" if sub == 2 else "arm64"
    if cputype == CPU_TYPE_ARM | CPU_ARCH_ABI64_32:
        return "arm64_32"
    if cputype == CPU_TYPE_POWERPC:
        return "ppc"
    if cputype == CPU_TYPE_POWERPC | CPU_ARCH_ABI64:
        return "ppc64"
    return None


def _dedup(names: List[str]) -> List[str]:
    seen = set()
    out: List[str] = []
    for n in names:
        if n not in seen:
            seen.add(n)
            out.append(n)
    return out


def _as_int(value) -> int:
    # LIEF exposes cpu_type as an enum; older releases and cpu_subtype are plain ints
    return int(getattr(value, "value", value)) & 0xFFFFFFFF


class MachOInspector:
    """Reads thin and universal (fat) Mach-O headers through LIEF."""

    def architectures(self, path: Path) -> List[str]:
        path = Path(path)
        if not path.is_file():
            raise UnsupportedBinaryFormat(f"{path}: not a file")
        try:
            fat = lief.MachO.parse(str(path))
        except Exception as e:
            raise UnsupportedBinaryFormat(f"{path}: LIEF could not parse the binary: {e}") from e
        if fat is None:
            raise UnsupportedBinaryFormat(f"{path}: not a Mach-O executable")

        names: List[str] = []
        for binary in fat:
            cputype = _as_int(binary.header.cpu_type)
            name = arch_name(cputype, _as_int(binary.header.cpu_subtype))
            if name is None:
                raise UnsupportedBinaryFormat(f"{path}: unknown CPU type 0x{cputype:08x}")
            names.append(name)
        if not names:
            raise UnsupportedBinaryFormat(f"{path}: no Mach-O slices found")
        return _dedup(names)


class LipoInspector:
    """Delegates to `lipo -archs`; only available with the macOS developer tools."""

    def __init__(self, log_dir: Path = DEFAULT_LOG_DIR, lipo: str = "lipo"):
        self.log_dir = Path(log_dir)
        self.lipo = lipo

    def architectures(self, path: Path) -> List[str]:
        try:
            out = run_captured([self.lipo, "-archs", str(path)], tools_log_path(self.log_dir))
        except (OSError, RuntimeError) as e:
            raise UnsupportedBinaryFormat(f"{path}: lipo could not read the binary: {e}") from e
        names = _dedup(out.split())
        if not names or "unknown" in names:
            raise UnsupportedBinaryFormat(f"{path}: lipo reported no usable architectures")
        return names
