"""Shared core utilities for command execution, configuration and console output."""

from .command_runner import (
    CommandError,
    CommandResult,
    CommandRunner,
    RecordedCommand,
    RecordingCommandRunner,
    SubprocessCommandRunner,
    format_command,
)
from .config_loader import (
    FILE_LOADERS,
    find_config_file,
    load_config_file,
    normalize_string_list,
    parse_bool,
)
from .console import Console

__all__ = [
    "CommandError",
    "CommandResult",
    "CommandRunner",
    "RecordedCommand",
    "RecordingCommandRunner",
    "SubprocessCommandRunner",
    "format_command",
    "FILE_LOADERS",
    "find_config_file",
    "load_config_file",
    "normalize_string_list",
    "parse_bool",
    "Console",
]
