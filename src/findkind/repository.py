"""Scan every selected branch of one git repository."""

from __future__ import annotations

import logging

from .dispatch import Dispatcher
from .git import branch_matches, grep_candidates, list_branches, show_blob
from .models import Candidate, ScanRequest
from .parsers.manifest import match
from .report import ResultSink

logger = logging.getLogger(__name__)


def scan_repository(
    repo: str,
    request: ScanRequest,
    dispatcher: Dispatcher,
    sink: ResultSink,
) -> None:
    """Enumerate branches of ``repo`` and dispatch a scan for each kept one."""
    branches = list_branches(repo)
    kept = [b for b in branches if branch_matches(b, request.branch_keywords)]
    logger.debug("Repository %s: %d of %d branches selected", repo, len(kept), len(branches))

    for branch in kept:
        if not dispatcher.dispatch(scan_branch, repo, branch, request, sink):
            break


def scan_branch(repo: str, branch: str, request: ScanRequest, sink: ResultSink) -> None:
    """Shortlist candidate files on ``branch`` with git grep and match each blob."""
    for path in grep_candidates(repo, branch, request.kind):
        blob = show_blob(repo, branch, path)
        if blob is None:
            continue
        if match(blob, request.group, request.version, request.kind):
            sink.put(Candidate.from_blob(repo, branch, path).record)
