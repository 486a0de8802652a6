"""Thin wrappers around the three git commands the scanner relies on.

All operations are read-only: list branch refs, search content at a
revision, and fetch one blob.
"""

from __future__ import annotations

import logging
import os
import re
import subprocess
from collections.abc import Iterable

from .errors import GREP_NO_HITS, GitCommandError

logger = logging.getLogger(__name__)

GIT_DIR_NAME = ".git"
MANIFEST_PATHSPECS = (":(icase)*.yaml", ":(icase)*.yml")

_ERE_SPECIAL = re.compile(r"([.\[\]()*+?{}|^$\\])")


def _run(repo: str, *args: str) -> subprocess.CompletedProcess[bytes]:
    cmd = ["git", "-C", repo, *args]
    try:
        return subprocess.run(cmd, capture_output=True, check=False)
    except FileNotFoundError as exc:
        raise GitCommandError(cmd, 127, "git executable not found") from exc


def _decode_stderr(result: subprocess.CompletedProcess[bytes]) -> str:
    return (result.stderr or b"").decode("utf-8", errors="replace")


def list_branches(repo: str) -> list[str]:
    """Return local and remote branch short names.

    Symbolic refs such as ``refs/remotes/origin/HEAD`` and alias entries of
    the form ``A -> B`` are left out.
    """
    result = _run(
        repo,
        "for-each-ref",
        "--format=%(refname:short)%09%(symref)",
        "refs/heads",
        "refs/remotes",
    )
    if result.returncode != 0:
        raise GitCommandError(result.args, result.returncode, _decode_stderr(result))

    branches: list[str] = []
    for raw in result.stdout.decode("utf-8", errors="replace").splitlines():
        name, _, target = raw.partition("\t")
        name = name.strip()
        if not name or target.strip() or " -> " in name:
            continue
        branches.append(name)
    return branches


def branch_matches(branch: str, keywords: Iterable[str]) -> bool:
    """True if ``keywords`` is empty or any keyword occurs in the lowercased name."""
    words = list(keywords)
    if not words:
        return True
    lowered = branch.lower()
    return any(word in lowered for word in words)


def kind_pattern(kind: str) -> str:
    """POSIX ERE for a ``kind:`` line naming ``kind``, optionally quoted, as a whole word."""
    escaped = _ERE_SPECIAL.sub(r"\\\1", kind)
    return f"kind:[[:space:]]*[\"']?{escaped}([^[:alnum:]_]|$)"


def grep_candidates(repo: str, branch: str, kind: str) -> list[str]:
    """Shortlist YAML paths on ``branch`` that may declare ``kind``.

    Returns an empty list when git reports no hits.
    """
    result = _run(
        repo,
        "grep",
        "-I",
        "-l",
        "-z",
        "-i",
        "-E",
        "-e",
        kind_pattern(kind),
        branch,
        "--",
        *MANIFEST_PATHSPECS,
    )
    if result.returncode == GREP_NO_HITS:
        return []
    if result.returncode != 0:
        raise GitCommandError(result.args, result.returncode, _decode_stderr(result))

    prefix = f"{branch}:"
    paths: list[str] = []
    for raw in result.stdout.split(b"\0"):
        if not raw:
            continue
        name = os.fsdecode(raw)
        if name.startswith(prefix):
            name = name[len(prefix):]
        paths.append(name)
    return paths


def show_blob(repo: str, branch: str, path: str) -> bytes | None:
    """Return the content of ``path`` at ``branch``, or None if it cannot be read."""
    result = _run(repo, "show", f"{branch}:{path}")
    if result.returncode != 0:
        logger.debug(
            "Skipping %s:%s in %s: %s", branch, path, repo, _decode_stderr(result).strip()
        )
        return None
    return result.stdout
