"""CI helper that runs the release build of the Cargo workspace."""

from .build import CLEAR_ARGUMENT, BuildRunner, cargo_build_command, wants_clear
from .cli import main
from .paths import ProjectLayout, RootResolutionError, resolve_layout
from .settings import CiSettings, load_settings

__all__ = [
    "CLEAR_ARGUMENT",
    "BuildRunner",
    "CiSettings",
    "ProjectLayout",
    "RootResolutionError",
    "cargo_build_command",
    "load_settings",
    "main",
    "resolve_layout",
    "wants_clear",
]
