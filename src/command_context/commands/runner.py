"""Capture the output of a command named by an inclusion policy."""

import asyncio
from abc import ABC, abstractmethod
from pathlib import Path

import structlog

from command_context.config import settings

logger = structlog.get_logger()


class CommandRunner(ABC):
    """Runs a shell command and returns its output."""

    @abstractmethod
    async def run(self, command: str, cwd: Path | None = None) -> str | None:
        """Return the combined output of command, or None when it cannot run."""


class ShellCommandRunner(CommandRunner):
    """Runs commands through the system shell.

    Output is returned regardless of the exit status.
    """

    def __init__(self, timeout: float | None = None):
        """
        Initialize runner.

        Args:
            timeout: Seconds before the command is killed; defaults to
                settings.context.command_timeout_seconds
        """
        self._timeout = timeout if timeout is not None else settings.context.command_timeout_seconds
        self._logger = logger.bind(component="shell_command_runner")

    async def run(self, command: str, cwd: Path | None = None) -> str | None:
        try:
            proc = await asyncio.create_subprocess_shell(
                command,
                cwd=str(cwd) if cwd is not None else None,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except OSError as e:
            self._logger.warning("command_start_failed", command=command, error=str(e))
            return None

        try:
            stdout, _ = await asyncio.wait_for(proc.communicate(), timeout=self._timeout)
        except asyncio.TimeoutError:
            proc.kill()
            await proc.wait()
            self._logger.warning("command_timed_out", command=command, timeout=self._timeout)
            return None

        self._logger.debug("command_completed", command=command, returncode=proc.returncode)
        return stdout.decode("utf-8", errors="replace")
