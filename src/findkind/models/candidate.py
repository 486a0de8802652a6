"""Candidate model: a unit of content eligible for matching."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Candidate:
    """A plain file on disk, or a blob at ``branch`` inside ``repository``."""

    path: str
    repository: str | None = None
    branch: str | None = None

    def __post_init__(self) -> None:
        if not self.path:
            raise ValueError("path must be provided")
        if (self.repository is None) != (self.branch is None):
            raise ValueError("repository and branch must be given together")

    @property
    def record(self) -> str:
        """The match record string; also the de-duplication key."""
        if self.repository is None:
            return self.path
        return f"{self.repository}:{self.branch}:{self.path}"

    @classmethod
    def from_file(cls, path: str) -> Candidate:
        return cls(path=path)

    @classmethod
    def from_blob(cls, repository: str, branch: str, path: str) -> Candidate:
        return cls(path=path, repository=repository, branch=branch)
