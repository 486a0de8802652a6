"""Console entrypoint: ``findkind`` / ``python -m findkind``."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .cli import main


def _installed_version() -> str:
    try:
        return version("findkind")
    except PackageNotFoundError:
        return "dev"


def run() -> int:
    return main(version=_installed_version())


if __name__ == "__main__":
    raise SystemExit(run())
