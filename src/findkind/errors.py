"""Error types raised by the scanning engine."""

from __future__ import annotations

from collections.abc import Sequence


# ``git grep`` exits with 1 when nothing matched; that is an answer, not a failure.
GREP_NO_HITS = 1


class FindKindError(RuntimeError):
    """Base error for failures that abort a scan."""


class TraversalError(FindKindError):
    """Raised when the filesystem walk cannot read a directory or file."""


class ConfigError(FindKindError):
    """Raised when settings or a scan request are invalid."""


class GitCommandError(FindKindError):
    """Raised when git exits with a status the scanner does not expect."""

    def __init__(self, args: Sequence[str], returncode: int, stderr: str = "") -> None:
        self.command = list(args)
        self.returncode = returncode
        self.stderr = stderr.strip()
        message = f"{' '.join(self.command)} exited with status {returncode}"
        if self.stderr:
            message = f"{message}: {self.stderr}"
        super().__init__(message)
