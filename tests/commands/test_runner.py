"""Tests for the shell command runner."""

import sys
from pathlib import Path

import pytest

from command_context.commands.runner import ShellCommandRunner
from command_context.config import settings

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="POSIX shell commands")


@pytest.mark.asyncio
async def test_run_captures_stdout_and_stderr(tmp_path: Path) -> None:
    """Test stdout and stderr are combined."""
    runner = ShellCommandRunner()

    output = await runner.run("echo out; echo err 1>&2", cwd=tmp_path)

    assert output is not None
    assert "out" in output
    assert "err" in output


@pytest.mark.asyncio
async def test_run_returns_output_on_failure() -> None:
    """Test output is returned for non-zero exit status."""
    runner = ShellCommandRunner()

    output = await runner.run("echo '1 failed'; exit 1")

    assert output is not None
    assert "1 failed" in output


@pytest.mark.asyncio
async def test_run_uses_cwd(tmp_path: Path) -> None:
    """Test the command runs in the given directory."""
    (tmp_path / "marker.txt").write_text("x")
    runner = ShellCommandRunner()

    output = await runner.run("ls", cwd=tmp_path)

    assert output is not None
    assert "marker.txt" in output


@pytest.mark.asyncio
async def test_run_times_out() -> None:
    """Test a command exceeding the timeout yields None."""
    runner = ShellCommandRunner(timeout=0.2)

    assert await runner.run("exec sleep 5") is None


@pytest.mark.asyncio
async def test_run_missing_cwd(tmp_path: Path) -> None:
    """Test a command that cannot start yields None."""
    runner = ShellCommandRunner()

    assert await runner.run("echo hi", cwd=tmp_path / "missing") is None


def test_default_timeout_from_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test the timeout defaults to the configured value."""
    monkeypatch.setattr(settings.context, "command_timeout_seconds", 7.5)

    assert ShellCommandRunner()._timeout == 7.5
