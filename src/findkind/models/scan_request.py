"""Scan request model."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from collections.abc import Iterable

WILDCARD = "*"


class OutputFormat(str, Enum):
    """Physical encoding of emitted records."""

    PLAIN = "plain"
    NUL = "nul"
    JSON_LINES = "jsonl"
    JSON_ARRAY = "json"


def default_max_concurrency() -> int:
    return (os.cpu_count() or 1) * 4


@dataclass(frozen=True)
class ScanRequest:
    """Immutable description of one scan."""

    root: Path
    kind: str
    group: str = WILDCARD
    version: str = WILDCARD
    branch_keywords: tuple[str, ...] = ()
    max_concurrency: int = field(default_factory=default_max_concurrency)
    git_enabled: bool = True
    stream: bool = True
    output_format: OutputFormat = OutputFormat.PLAIN

    def __post_init__(self) -> None:
        if not self.kind or not self.kind.strip():
            raise ValueError("kind must be non-empty")
        if self.kind == WILDCARD:
            raise ValueError("kind cannot be a wildcard")
        if self.max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        if any(not word or word != word.lower() for word in self.branch_keywords):
            raise ValueError("Branch keywords must be non-empty lowercase strings")

    @property
    def buffered(self) -> bool:
        """True when results must be collected and emitted once at the end."""
        return self.output_format is OutputFormat.JSON_ARRAY or not self.stream

    def to_dict(self) -> dict[str, object]:
        return {
            "root": str(self.root),
            "kind": self.kind,
            "group": self.group,
            "version": self.version,
            "branchKeywords": list(self.branch_keywords),
            "maxConcurrency": self.max_concurrency,
            "gitEnabled": self.git_enabled,
            "stream": self.stream,
            "outputFormat": self.output_format.value,
        }

    @classmethod
    def from_options(
        cls,
        *,
        root: Path | str,
        kind: str,
        group: str = WILDCARD,
        version: str = WILDCARD,
        branch_keywords: Iterable[str] = (),
        max_concurrency: int | None = None,
        git_enabled: bool = True,
        stream: bool = True,
        output_format: OutputFormat = OutputFormat.PLAIN,
    ) -> ScanRequest:
        """Build a request from loosely formatted user input.

        Keywords are stripped, lowercased and de-duplicated in first-seen
        order; blank keywords are dropped.
        """
        words: list[str] = []
        for raw in branch_keywords:
            word = raw.strip().lower()
            if word and word not in words:
                words.append(word)
        return cls(
            root=Path(os.path.normpath(str(root))),
            kind=kind.strip(),
            group=group,
            version=version,
            branch_keywords=tuple(words),
            max_concurrency=(
                max_concurrency if max_concurrency is not None else default_max_concurrency()
            ),
            git_enabled=git_enabled,
            stream=stream,
            output_format=output_format,
        )
