#!/usr/bin/env python3
"""Local CLI entrypoint to run the scanner from a checkout.

Usage:
  python scripts/scan.py --kind Deployment [--path .] [--group apps] [--api-version v1]

This calls the same findkind.cli.main used by the installed console script.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

from findkind.cli import main


def _checkout_version() -> str:
    try:
        result = subprocess.run(
            ["git", "describe", "--tags", "--always", "--dirty"],
            cwd=Path(__file__).resolve().parent,
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError:
        return "dev"
    return result.stdout.strip() or "dev"


if __name__ == "__main__":
    raise SystemExit(main(version=_checkout_version()))
