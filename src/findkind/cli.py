"""Command line interface for findkind."""

from __future__ import annotations

import argparse
import logging
import sys

from .core import run_scan
from .errors import ConfigError, FindKindError
from .models import OutputFormat, ScanRequest
from .settings import Settings, load_settings

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_SCAN_FAILED = 2


def parse_args(argv: list[str] | None = None, version: str = "dev") -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="findkind",
        description="Find Kubernetes-style YAML manifests by group, version and kind, "
        "on disk and across every branch of the git repositories below a directory.",
    )
    parser.add_argument("--path", default=".", help="root directory to search")
    parser.add_argument("--kind", default="", help="kind to match (required)")
    parser.add_argument("--group", default=None, help="API group to match (default: *)")
    parser.add_argument(
        "--api-version", default=None, help="API version to match (default: *)"
    )
    parser.add_argument(
        "--branch-filters",
        default=None,
        help="comma-separated keywords that must appear in a branch name",
    )
    parser.add_argument(
        "--max-procs", type=int, default=None, help="maximum concurrent git/YAML workers"
    )
    parser.add_argument(
        "--no-git",
        action="store_true",
        default=None,
        help="disable git branch scanning (disk files only)",
    )
    parser.add_argument(
        "--stream",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="emit results as they are found (default: on)",
    )
    parser.add_argument(
        "-0", dest="null_term", action="store_true", help="NUL-terminate each record"
    )
    parser.add_argument("--jsonl", action="store_true", help="output newline-delimited JSON records")
    parser.add_argument(
        "--output-json",
        action="store_true",
        help="emit one final JSON array of records (implies buffering)",
    )
    parser.add_argument("--quiet", action="store_true", help="only log errors")
    parser.add_argument("--verbose", action="store_true", help="enable debug logging")
    parser.add_argument("--settings", default=None, help="path to a JSON settings file")
    parser.add_argument("--version", action="version", version=f"findkind {version}")
    return parser.parse_args(argv)


def configure_logging(args: argparse.Namespace) -> None:
    level = logging.WARNING
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _output_format(args: argparse.Namespace) -> OutputFormat:
    selected = [
        fmt
        for flag, fmt in (
            (args.null_term, OutputFormat.NUL),
            (args.jsonl, OutputFormat.JSON_LINES),
            (args.output_json, OutputFormat.JSON_ARRAY),
        )
        if flag
    ]
    if len(selected) > 1:
        raise ConfigError("flags -0, --jsonl and --output-json are mutually exclusive")
    return selected[0] if selected else OutputFormat.PLAIN


def build_request(args: argparse.Namespace, settings: Settings) -> ScanRequest:
    """Merge flags over settings and validate the result.

    Raises:
        ConfigError: If required options are missing or conflict.
    """
    if not args.kind.strip():
        raise ConfigError("--kind is required")

    output_format = _output_format(args)

    if args.branch_filters is not None:
        keywords: tuple[str, ...] = tuple(args.branch_filters.split(","))
    else:
        keywords = settings.branch_filters

    try:
        return ScanRequest.from_options(
            root=args.path,
            kind=args.kind,
            group=args.group if args.group is not None else settings.group,
            version=args.api_version if args.api_version is not None else settings.api_version,
            branch_keywords=keywords,
            max_concurrency=args.max_procs if args.max_procs is not None else settings.max_procs,
            git_enabled=not (args.no_git if args.no_git is not None else settings.no_git),
            stream=args.stream if args.stream is not None else settings.stream,
            output_format=output_format,
        )
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc


def main(argv: list[str] | None = None, version: str = "dev") -> int:
    args = parse_args(argv, version)
    configure_logging(args)

    try:
        request = build_request(args, load_settings(args.settings))
    except ConfigError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_USAGE

    if not request.root.is_dir():
        print(f"ERROR: {request.root} is not a directory", file=sys.stderr)
        return EXIT_USAGE

    try:
        run_scan(request, sys.stdout)
    except FindKindError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_SCAN_FAILED

    return EXIT_OK
