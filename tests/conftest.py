from __future__ import annotations

import json
import os
import plistlib
import stat
import struct
import subprocess
import sys
from pathlib import Path

import pytest

from launchwrap.models import RewriteConfig

# Stand-in for the real app binary: records what it was started with.
RECORDER = """#!{python}
import json, os, sys
with open(os.environ["LAUNCHWRAP_TEST_OUT"], "w") as f:
    json.dump({{"argv": sys.argv[1:], "env": dict(os.environ), "pid": os.getpid()}}, f)
"""


def make_bundle(root: Path, name: str = "Demo App", executable: str = "Demo", content: bytes = None) -> Path:
    """Create <root>/<name>.app with Info.plist and an executable entry point."""
    app = root / f"{name}.app"
    macos = app / "Contents" / "MacOS"
    macos.mkdir(parents=True)
    with open(app / "Contents" / "Info.plist", "wb") as f:
        plistlib.dump({"CFBundleExecutable": executable, "CFBundleName": name}, f)
    entry = macos / executable
    if content is None:
        content = RECORDER.format(python=sys.executable).encode("utf-8")
    entry.write_bytes(content)
    entry.chmod(0o755)
    return app


def snapshot(root: Path) -> dict:
    """Relative path -> (bytes, mode) for every file below *root*."""
    out = {}
    for p in sorted(root.rglob("*")):
        if p.is_file() or p.is_symlink():
            out[str(p.relative_to(root))] = (p.read_bytes(), stat.S_IMODE(p.lstat().st_mode))
    return out


def launch(entry: Path, args, home: Path, out: Path, cwd: Path) -> dict:
    env = {
        "HOME": str(home),
        "PATH": "/usr/bin:/bin",
        "LAUNCHWRAP_TEST_OUT": str(out),
    }
    p = subprocess.run([str(entry), *args], env=env, cwd=str(cwd), capture_output=True, text=True)
    assert p.returncode == 0, p.stderr
    return json.loads(out.read_text(encoding="utf-8"))


@pytest.fixture
def home(tmp_path):
    h = tmp_path / "home"
    h.mkdir()
    return h


@pytest.fixture
def elsewhere(tmp_path):
    d = tmp_path / "elsewhere"
    d.mkdir()
    return d


@pytest.fixture
def cfg(tmp_path):
    return RewriteConfig(
        profiles=(),
        shell="/bin/sh",
        package_manager_dirs=(),
        system_dirs=("/usr/bin", "/bin"),
        codesign=False,
        log_dir=tmp_path / "logs",
    )


posix_only = pytest.mark.skipif(
    sys.platform == "win32" or not os.path.exists("/bin/sh"),
    reason="generated launchers need a POSIX shell",
)


X86_64 = 0x01000007
ARM64 = 0x0100000C
MH_EXECUTE = 2


def thin_macho(cputype: int, subtype: int = 0, is64: bool = True) -> bytes:
    """Minimal little-endian Mach-O executable header without load commands."""
    if is64:
        header = struct.pack("<8I", 0xFEEDFACF, cputype, subtype, MH_EXECUTE, 0, 0, 0, 0)
    else:
        header = struct.pack("<7I", 0xFEEDFACE, cputype, subtype, MH_EXECUTE, 0, 0, 0)
    return header + b"\0" * (4096 - len(header))


def fat_macho(slices) -> bytes:
    """Universal binary with one page-aligned thin slice per (cputype, subtype)."""
    out = struct.pack(">II", 0xCAFEBABE, len(slices))
    bodies = [thin_macho(cputype, subtype) for cputype, subtype in slices]
    for i, ((cputype, subtype), body) in enumerate(zip(slices, bodies)):
        out += struct.pack(">IIIII", cputype, subtype, 4096 * (i + 1), len(body), 12)
    out += b"\0" * (4096 - len(out))
    return out + b"".join(bodies)
