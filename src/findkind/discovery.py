"""Filesystem walk that dispatches manifest matches and repository scans."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .dispatch import Dispatcher
from .errors import TraversalError
from .git import GIT_DIR_NAME
from .models import Candidate, ScanRequest
from .parsers.manifest import match
from .report import ResultSink
from .repository import scan_repository

logger = logging.getLogger(__name__)

MANIFEST_EXTENSIONS = {".yaml", ".yml"}


def is_manifest(name: str) -> bool:
    return os.path.splitext(name)[1].lower() in MANIFEST_EXTENSIONS


def inspect_file(path: str, request: ScanRequest, sink: ResultSink) -> None:
    """Match a single file on disk and report it if any document matches."""
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise TraversalError(f"Failed to read {path}: {exc}") from exc
    if match(data, request.group, request.version, request.kind):
        sink.put(Candidate.from_file(path).record)


def _raise_traversal_error(exc: OSError) -> None:
    raise TraversalError(f"Failed to walk {exc.filename}: {exc.strerror or exc}") from exc


def walk(request: ScanRequest, dispatcher: Dispatcher, sink: ResultSink) -> None:
    """Walk ``request.root`` depth-first and dispatch work for every hit.

    Each directory containing a ``.git`` directory is handed to the repository
    scanner (when git scanning is enabled) and ``.git`` itself is not entered.
    Repositories nested inside another repository's working tree are scanned
    on their own as well; nothing is de-duplicated across them.

    Raises:
        TraversalError: If a directory cannot be listed.
    """
    context = dispatcher.context
    for dirpath, dirnames, filenames in os.walk(str(request.root), onerror=_raise_traversal_error):
        if context.cancelled:
            return
        dirnames.sort()

        if request.git_enabled and GIT_DIR_NAME in dirnames:
            dirnames.remove(GIT_DIR_NAME)
            logger.debug("Found repository %s", dirpath)
            dispatcher.dispatch(scan_repository, dirpath, request, dispatcher, sink)

        for name in sorted(filenames):
            if not is_manifest(name):
                continue
            if not dispatcher.dispatch(inspect_file, os.path.join(dirpath, name), request, sink):
                return
