#!/usr/bin/env python3
"""Entry-point script for the CI build helper.

Lives one level below the project root; the root is derived from this
file's own location.
"""
from __future__ import annotations

from pathlib import Path
import sys

_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from cibuild.cli import main as cli_main


def main() -> int:
    """Delegate to the CLI with this script as the location anchor."""
    return cli_main(sys.argv[1:], script_path=__file__)


if __name__ == "__main__":  # pragma: no cover - exercised via integration tests
    raise SystemExit(main())
