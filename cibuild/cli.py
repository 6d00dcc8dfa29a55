"""Command line entry point for the CI build helper.

Usage: ``ci/build.py [clear]``. Only the first argument is inspected.
"""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Mapping
import os
import sys

from core.command_runner import CommandError, RecordingCommandRunner, SubprocessCommandRunner
from core.console import Console

from .build import BuildRunner
from .paths import RootResolutionError, resolve_layout
from .settings import load_settings

EXIT_ROOT_UNRESOLVED = 1
EXIT_BAD_CONFIG = 2
EXIT_COMMAND_NOT_FOUND = 127
EXIT_INTERRUPTED = 130


def exit_status(returncode: int) -> int:
    """Translate a child's return code into a shell-style exit status.

    :mod:`subprocess` reports death by signal ``N`` as ``-N``; shells report
    it as ``128 + N``.
    """
    if returncode < 0:
        return 128 - returncode
    return returncode


def _emit_dry_run_output(runner: RecordingCommandRunner, console: Console, *, workspace: Path) -> None:
    for line in runner.iter_formatted(workspace=workspace):
        console.plain(line)


def main(
    argv: Iterable[str] | None = None,
    *,
    script_path: str | os.PathLike[str],
    environ: Mapping[str, str] | None = None,
    console: Console | None = None,
) -> int:
    """Run the build for the project that ``script_path`` lives in."""

    args = list(sys.argv[1:] if argv is None else argv)
    environ = os.environ if environ is None else environ
    console = console or Console("error")

    try:
        layout = resolve_layout(script_path)
    except RootResolutionError as exc:
        console.error(str(exc))
        return EXIT_ROOT_UNRESOLVED

    try:
        settings = load_settings(layout.script_dir, environ)
    except (ValueError, TypeError, RuntimeError, OSError) as exc:
        console.error(f"Invalid configuration: {exc}")
        return EXIT_BAD_CONFIG

    if settings.project_root:
        try:
            layout = resolve_layout(layout.script_path, root_override=settings.project_root)
        except RootResolutionError as exc:
            console.error(str(exc))
            return EXIT_ROOT_UNRESOLVED

    console = Console(settings.log_level, stdout=console.stdout, stderr=console.stderr)
    if settings.source is not None:
        console.debug(f"Loaded configuration from {settings.source}")

    runner: SubprocessCommandRunner | RecordingCommandRunner
    if settings.dry_run:
        runner = RecordingCommandRunner()
    else:
        runner = SubprocessCommandRunner()

    build_runner = BuildRunner(layout=layout, settings=settings, command_runner=runner, console=console)
    try:
        status = build_runner.run(args)
    except CommandError as exc:
        console.error(str(exc))
        return exit_status(exc.returncode)
    except FileNotFoundError as exc:
        console.error(f"Command not found: {exc.filename or exc}")
        return EXIT_COMMAND_NOT_FOUND
    except KeyboardInterrupt:
        console.error("Interrupted")
        return EXIT_INTERRUPTED

    if isinstance(runner, RecordingCommandRunner):
        _emit_dry_run_output(runner, console, workspace=layout.root)
    return exit_status(status)
