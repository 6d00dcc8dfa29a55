"""Recursive permission reset of the build output directory."""
from __future__ import annotations

from pathlib import Path
from typing import List

from core.command_runner import CommandRunner
from core.console import Console

from .settings import PermissionSettings


class PermissionResetter:
    def __init__(self, *, settings: PermissionSettings, command_runner: CommandRunner, console: Console) -> None:
        self._settings = settings
        self._command_runner = command_runner
        self._console = console

    def command(self) -> List[str]:
        return [*self._settings.elevate, "chmod", "-R", self._settings.mode, self._settings.target_dir]

    def reset(self, root: Path, *, note: str = "Reset permissions") -> bool:
        """Open up permissions on the target directory under ``root``.

        Returns ``False`` without running anything when the directory does
        not exist yet. A failing command raises
        :class:`~core.command_runner.CommandError`.
        """

        target = root / self._settings.target_dir
        if not target.is_dir():
            self._console.info(f"{note}: '{target}' does not exist, nothing to do")
            return False

        command = self.command()
        self._console.trace(command)
        self._command_runner.run(command, cwd=root, check=True, note=note)
        return True
