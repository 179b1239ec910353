from __future__ import annotations

import logging
import sys

import pytest

from launchwrap import codesign, toolchain
from launchwrap.command_runner import run_captured, run_logged, tools_log_path
from launchwrap.errors import SigningFailed
from launchwrap.log_setup import setup_logging


def test_run_logged_appends_command_and_output(tmp_path):
    log_file = tools_log_path(tmp_path / "logs")
    run_logged([sys.executable, "-c", "print('hello')"], log_file)
    text = log_file.read_text(encoding="utf-8")
    assert "$ " in text
    assert "hello" in text


def test_run_logged_raises_on_failure(tmp_path):
    log_file = tools_log_path(tmp_path / "logs")
    with pytest.raises(RuntimeError) as exc:
        run_logged([sys.executable, "-c", "import sys; sys.exit(3)"], log_file)
    assert "rc=3" in str(exc.value)
    assert str(log_file) in str(exc.value)


def test_run_captured_returns_stdout(tmp_path):
    log_file = tools_log_path(tmp_path / "logs")
    assert run_captured([sys.executable, "-c", "print('x86_64 arm64')"], log_file).split() == ["x86_64", "arm64"]


def test_codesign_command():
    assert codesign.codesign_command("/a/b", "") == ["codesign", "--force", "--sign", "-", "/a/b"]


def test_sign_without_codesign_tool(tmp_path, monkeypatch):
    monkeypatch.setattr(codesign.shutil, "which", lambda name: None)
    with pytest.raises(SigningFailed):
        codesign.sign_entry_point(tmp_path / "x", "-", tmp_path / "tools.log")


def test_sign_failure_is_wrapped(tmp_path, monkeypatch):
    def fail(cmd, log_file, cwd=None, env=None):
        raise RuntimeError("Command failed (rc=1)")

    monkeypatch.setattr(codesign.shutil, "which", lambda name: "/usr/bin/codesign")
    monkeypatch.setattr(codesign, "run_logged", fail)
    with pytest.raises(SigningFailed):
        codesign.sign_entry_point(tmp_path / "x", "-", tmp_path / "tools.log")


def test_configured_compiler_must_exist(tmp_path):
    with pytest.raises(RuntimeError):
        toolchain.resolve_compiler(str(tmp_path / "missing-cc"))
    cc = tmp_path / "my-cc"
    cc.write_text("", encoding="utf-8")
    assert toolchain.resolve_compiler(str(cc)) == str(cc)


def test_no_compiler_anywhere(monkeypatch):
    monkeypatch.setattr(toolchain.sys, "platform", "linux")
    monkeypatch.setattr(toolchain.shutil, "which", lambda name: None)
    with pytest.raises(RuntimeError):
        toolchain.resolve_compiler()


def test_compiler_search_order(monkeypatch):
    monkeypatch.setattr(toolchain.sys, "platform", "linux")
    monkeypatch.setattr(toolchain.shutil, "which", lambda name: f"/usr/bin/{name}" if name != "cc" else None)
    assert toolchain.resolve_compiler() == "/usr/bin/clang"


def test_setup_logging_writes_file(tmp_path):
    log_file = setup_logging(tmp_path / "logs", debug=True)
    logging.getLogger("launchwrap.test").info("hello from test")
    for h in logging.getLogger("launchwrap").handlers:
        h.flush()
    assert "hello from test" in log_file.read_text(encoding="utf-8")
    logger = logging.getLogger("launchwrap")
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
