"""Settings for the CI build helper and their loading from files and the environment."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping
import os
import re

from core.config_loader import (
    find_config_file,
    load_config_file,
    normalize_string_list,
    parse_bool,
)
from core.console import Console

CONFIG_STEM = "cibuild"

ENV_CONFIG = "CIBUILD_CONFIG"
ENV_LOG_LEVEL = "CIBUILD_LOG_LEVEL"
ENV_DRY_RUN = "CIBUILD_DRY_RUN"
ENV_PROJECT_ROOT = "CIBUILD_PROJECT_ROOT"

_MODE_PATTERN = re.compile(r"^[0-7]{3,4}$")


def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = data.get(name, {}) if isinstance(data, Mapping) else {}
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise TypeError(f"[{name}] must be a table")
    return value


@dataclass(frozen=True, slots=True)
class CargoBuildSettings:
    program: str = "cargo"
    workspace: bool = True
    targets: List[str] = field(default_factory=lambda: ["--lib", "--bins"])
    profile: str = "release"
    verbose: bool = True
    features: List[str] = field(default_factory=lambda: ["masq_lib/no_test_share"])
    extra_args: List[str] = field(default_factory=list)
    environment: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CargoBuildSettings":
        defaults = cls()
        program = str(data.get("program", defaults.program)).strip()
        if not program:
            raise ValueError("build.program must not be empty")
        profile = str(data.get("profile", defaults.profile)).strip()
        if not profile:
            raise ValueError("build.profile must not be empty")

        environment_section = data.get("environment") or {}
        if not isinstance(environment_section, Mapping):
            raise TypeError("build.environment must be a table")

        return cls(
            program=program,
            workspace=parse_bool(data.get("workspace", defaults.workspace), field_name="build.workspace"),
            targets=normalize_string_list(data.get("targets", defaults.targets), field_name="build.targets"),
            profile=profile,
            verbose=parse_bool(data.get("verbose", defaults.verbose), field_name="build.verbose"),
            features=normalize_string_list(data.get("features", defaults.features), field_name="build.features"),
            extra_args=normalize_string_list(data.get("extra_args"), field_name="build.extra_args"),
            environment={str(key): str(value) for key, value in environment_section.items()},
        )


@dataclass(frozen=True, slots=True)
class PermissionSettings:
    target_dir: str = "target"
    mode: str = "777"
    elevate: List[str] = field(default_factory=lambda: ["sudo"])

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PermissionSettings":
        defaults = cls()
        target_dir = str(data.get("target_dir", defaults.target_dir)).strip()
        if not target_dir:
            raise ValueError("permissions.target_dir must not be empty")
        if Path(target_dir).is_absolute():
            raise ValueError("permissions.target_dir must be relative to the project root")

        mode = data.get("mode", defaults.mode)
        # TOML readers may hand back 777 as an integer.
        mode = str(mode).strip()
        if not _MODE_PATTERN.match(mode):
            raise ValueError(f"permissions.mode must be an octal mode such as '777', got {mode!r}")

        return cls(
            target_dir=target_dir,
            mode=mode,
            elevate=normalize_string_list(data.get("elevate", defaults.elevate), field_name="permissions.elevate"),
        )


@dataclass(frozen=True, slots=True)
class CiSettings:
    log_level: str = "info"
    dry_run: bool = False
    project_root: str | None = None
    build: CargoBuildSettings = field(default_factory=CargoBuildSettings)
    permissions: PermissionSettings = field(default_factory=PermissionSettings)
    source: Path | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, source: Path | None = None) -> "CiSettings":
        global_section = _section(data, "global")
        log_level = str(global_section.get("log_level", "info")).strip().lower()
        _validate_log_level(log_level)
        return cls(
            log_level=log_level,
            dry_run=parse_bool(global_section.get("dry_run", False), field_name="global.dry_run"),
            build=CargoBuildSettings.from_mapping(_section(data, "build")),
            permissions=PermissionSettings.from_mapping(_section(data, "permissions")),
            source=source,
        )

    def with_environment(self, environ: Mapping[str, str]) -> "CiSettings":
        """Apply the ``CIBUILD_*`` environment overrides."""

        updated = self
        level = environ.get(ENV_LOG_LEVEL)
        if level:
            level = level.strip().lower()
            _validate_log_level(level)
            updated = replace(updated, log_level=level)
        dry_run = environ.get(ENV_DRY_RUN)
        if dry_run is not None:
            updated = replace(updated, dry_run=parse_bool(dry_run, field_name=ENV_DRY_RUN))
        root = environ.get(ENV_PROJECT_ROOT)
        if root:
            updated = replace(updated, project_root=root)
        return updated


def _validate_log_level(level: str) -> None:
    if level not in Console.LEVELS:
        choices = ", ".join(Console.LEVELS)
        raise ValueError(f"log_level must be one of: {choices}; got '{level}'")


def load_settings(config_dir: Path, environ: Mapping[str, str] | None = None) -> CiSettings:
    """Build the settings for one invocation.

    ``CIBUILD_CONFIG`` names an explicit file; otherwise ``cibuild.<ext>`` is
    looked up in ``config_dir``. Missing files leave the defaults in place.
    """

    environ = os.environ if environ is None else environ

    explicit = environ.get(ENV_CONFIG)
    if explicit:
        path = Path(explicit).expanduser()
        if not path.is_file():
            raise ValueError(f"{ENV_CONFIG} points to a missing file: {path}")
    else:
        path = find_config_file(config_dir, CONFIG_STEM)

    if path is None:
        settings = CiSettings()
    else:
        settings = CiSettings.from_mapping(load_config_file(path), source=path)
    return settings.with_environment(environ)


__all__ = [
    "CONFIG_STEM",
    "CargoBuildSettings",
    "CiSettings",
    "ENV_CONFIG",
    "ENV_DRY_RUN",
    "ENV_LOG_LEVEL",
    "ENV_PROJECT_ROOT",
    "PermissionSettings",
    "load_settings",
]
