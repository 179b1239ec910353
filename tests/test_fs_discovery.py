from __future__ import annotations

import plistlib

import pytest

from launchwrap.errors import MissingBinary
from launchwrap.fs_discovery import bundle_executable_name, find_entry_point, resolve_target


def test_bundle_uses_info_plist(tmp_path):
    app = tmp_path / "Thing.app"
    (app / "Contents" / "MacOS").mkdir(parents=True)
    with open(app / "Contents" / "Info.plist", "wb") as f:
        plistlib.dump({"CFBundleExecutable": "thing-bin"}, f)

    target = resolve_target(app)
    assert target.entry_point == app / "Contents" / "MacOS" / "thing-bin"
    assert target.backup_path == app / "Contents" / "MacOS" / "thing-bin.original"
    assert target.exec_dir == app / "Contents" / "MacOS"


def test_bundle_without_plist_falls_back_to_name(tmp_path):
    app = tmp_path / "Thing.app"
    (app / "Contents" / "MacOS").mkdir(parents=True)
    assert find_entry_point(app) == app / "Contents" / "MacOS" / "Thing"


def test_broken_plist_is_ignored(tmp_path):
    app = tmp_path / "Thing.app"
    (app / "Contents").mkdir(parents=True)
    (app / "Contents" / "Info.plist").write_bytes(b"garbage")
    assert bundle_executable_name(app) is None


def test_plain_folder(tmp_path):
    folder = tmp_path / "tool"
    folder.mkdir()
    assert find_entry_point(folder) == folder / "tool"


def test_file_path_is_its_own_entry_point(tmp_path):
    exe = tmp_path / "run"
    exe.write_bytes(b"x")
    target = resolve_target(str(exe))
    assert target.entry_point == exe
    assert target.backup_path == tmp_path / "run.original"


@pytest.mark.parametrize("path", [".", "/", ".."])
def test_paths_without_a_name_have_no_entry_point(tmp_path, monkeypatch, path):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(MissingBinary):
        resolve_target(path)
