"""Leveled console output shared by the command line tools."""
from __future__ import annotations

from typing import Sequence, TextIO
import sys

from .command_runner import format_command


class Console:
    """Simple console output handler with configurable log level.

    Levels: none < error < info < debug
    """

    LEVELS = {
        "none": 0,
        "error": 1,
        "info": 2,
        "debug": 3,
    }

    def __init__(
        self,
        level: str = "info",
        *,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        if level not in self.LEVELS:
            choices = ", ".join(self.LEVELS)
            raise ValueError(f"Unknown log level '{level}'. Expected one of: {choices}")
        self.level_name = level
        self.level = self.LEVELS[level]
        self._stdout = stdout
        self._stderr = stderr

    @property
    def stdout(self) -> TextIO:
        return self._stdout or sys.stdout

    @property
    def stderr(self) -> TextIO:
        return self._stderr or sys.stderr

    def enabled(self, level: str) -> bool:
        return self.level >= self.LEVELS[level]

    def info(self, message: str) -> None:
        if self.enabled("info"):
            print(f"[INFO] {message}", file=self.stdout, flush=True)

    def error(self, message: str) -> None:
        if self.enabled("error"):
            print(f"[ERROR] {message}", file=self.stderr, flush=True)

    def debug(self, message: str) -> None:
        if self.enabled("debug"):
            print(f"[DEBUG] {message}", file=self.stdout, flush=True)

    def trace(self, command: Sequence[str]) -> None:
        """Echo a command to stderr before it runs, shell ``set -x`` style."""
        if self.enabled("info"):
            print(f"+ {format_command(command)}", file=self.stderr, flush=True)

    def plain(self, message: str) -> None:
        print(message, file=self.stdout, flush=True)
