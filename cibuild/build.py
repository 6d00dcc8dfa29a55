"""Release build of the Cargo workspace with optional permission resets around it."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Sequence

from core.command_runner import CommandRunner
from core.console import Console

from .paths import ProjectLayout
from .permissions import PermissionResetter
from .settings import CargoBuildSettings, CiSettings

CLEAR_ARGUMENT = "clear"


def wants_clear(args: Sequence[str]) -> bool:
    """Only an exact ``clear`` as the first token enables the permission resets."""
    return bool(args) and args[0] == CLEAR_ARGUMENT


def cargo_build_command(settings: CargoBuildSettings) -> List[str]:
    command = [settings.program, "build"]
    if settings.workspace:
        command.append("--all")
    command.extend(settings.targets)
    if settings.profile == "release":
        command.append("--release")
    elif settings.profile != "dev":
        command.extend(["--profile", settings.profile])
    if settings.verbose:
        command.append("--verbose")
    if settings.features:
        command.extend(["--features", ",".join(settings.features)])
    command.extend(settings.extra_args)
    return command


@dataclass(slots=True)
class BuildStep:
    description: str
    command: Sequence[str]
    cwd: Path
    env: Dict[str, str]


class BuildRunner:
    def __init__(
        self,
        *,
        layout: ProjectLayout,
        settings: CiSettings,
        command_runner: CommandRunner,
        console: Console,
    ) -> None:
        self._layout = layout
        self._settings = settings
        self._command_runner = command_runner
        self._console = console
        self._permissions = PermissionResetter(
            settings=settings.permissions,
            command_runner=command_runner,
            console=console,
        )

    @property
    def root(self) -> Path:
        return self._layout.root

    def build_step(self) -> BuildStep:
        return BuildStep(
            description="Build workspace",
            command=cargo_build_command(self._settings.build),
            cwd=self.root,
            env=dict(self._settings.build.environment),
        )

    def run(self, args: Sequence[str]) -> int:
        """Run the build and return its exit status.

        With ``clear`` the target directory's permissions are reset before
        the build and again afterwards, whatever the build's outcome, unless
        the build was interrupted. A failing reset raises and stops the run
        where it is.
        """

        clear = wants_clear(args)
        self._console.debug(f"Project root: {self.root}")
        if clear:
            self._permissions.reset(self.root, note="Reset permissions before build")

        step = self.build_step()
        interrupted = False
        try:
            self._console.trace(step.command)
            result = self._command_runner.run(
                step.command,
                cwd=step.cwd,
                env=step.env or None,
                check=False,
                note=step.description,
            )
        except KeyboardInterrupt:
            interrupted = True
            raise
        finally:
            if clear and interrupted:
                self._console.info("Build interrupted, skipping permission reset")
            elif clear:
                self._permissions.reset(self.root, note="Reset permissions after build")

        if result.returncode != 0:
            self._console.debug(f"Build exited with status {result.returncode}")
        return result.returncode
