"""Locating the project root from the location of the entry script."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os


class RootResolutionError(RuntimeError):
    """Raised when the project root cannot be derived from the script location."""


@dataclass(frozen=True, slots=True)
class ProjectLayout:
    script_path: Path
    script_dir: Path
    root: Path


def resolve_layout(
    script_path: str | os.PathLike[str],
    *,
    root_override: str | os.PathLike[str] | None = None,
) -> ProjectLayout:
    """Resolve the script's real directory and the project root above it.

    Relative paths are taken against the current working directory and
    symlinks are followed, so the result does not depend on how or from
    where the script was invoked. ``root_override`` replaces the derived
    root but must name an existing directory.
    """

    try:
        script = Path(script_path).resolve(strict=True)
    except (OSError, RuntimeError) as exc:
        raise RootResolutionError(f"Cannot resolve script location '{script_path}': {exc}") from exc

    script_dir = script.parent
    if root_override:
        try:
            root = Path(root_override).expanduser().resolve(strict=True)
        except (OSError, RuntimeError) as exc:
            raise RootResolutionError(f"Cannot resolve project root '{root_override}': {exc}") from exc
        if not root.is_dir():
            raise RootResolutionError(f"Project root '{root}' is not a directory")
    else:
        root = script_dir.parent

    return ProjectLayout(script_path=script, script_dir=script_dir, root=root)
