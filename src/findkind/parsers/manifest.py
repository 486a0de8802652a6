"""Match YAML manifests against group / version / kind filters."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from collections.abc import Iterator
from typing import Any

import yaml

from ..models import WILDCARD

logger = logging.getLogger(__name__)

# "---" or "..." at line start, followed by whitespace or end of line, bounds a document.
_DOCUMENT_BOUNDARY = re.compile(r"^(?:---|\.\.\.)(?=[ \t\r]|$)", re.MULTILINE)

_ASCII_FOLD = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ",
    "abcdefghijklmnopqrstuvwxyz",
)


@dataclass(slots=True, frozen=True)
class ManifestMeta:
    """The two identifying fields of one document."""

    api_version: str
    kind: str

    @classmethod
    def from_document(cls, document: Any) -> ManifestMeta:
        if not isinstance(document, dict):
            return cls(api_version="", kind="")
        return cls(
            api_version=_scalar(document.get("apiVersion")),
            kind=_scalar(document.get("kind")),
        )


def _scalar(value: Any) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def split_api_version(api_version: str) -> tuple[str, str]:
    """Return (group, version); the core group is the empty string."""
    group, sep, version = api_version.partition("/")
    if not sep:
        return "", api_version
    return group, version


def equals_fold(a: str, b: str) -> bool:
    """ASCII case-insensitive equality."""
    return len(a) == len(b) and a.translate(_ASCII_FOLD) == b.translate(_ASCII_FOLD)


def iter_documents(content: bytes) -> Iterator[ManifestMeta]:
    """Yield metadata for every document in ``content`` that parses.

    Documents that fail to parse are skipped; iteration continues with the
    next one.
    """
    text = content.decode("utf-8-sig", errors="replace")
    for index, chunk in enumerate(_DOCUMENT_BOUNDARY.split(text)):
        if not chunk.strip():
            continue
        try:
            document = yaml.safe_load(chunk)
        except (yaml.YAMLError, ValueError, RecursionError) as exc:
            logger.debug("Skipping malformed document %d: %s", index, exc)
            continue
        if document is None:
            continue
        yield ManifestMeta.from_document(document)


def has_kind_marker(content: bytes) -> bool:
    return b"kind:" in content.lower()


def document_matches(meta: ManifestMeta, group: str, version: str, kind: str) -> bool:
    if not equals_fold(meta.kind, kind):
        return False
    if group == WILDCARD and version == WILDCARD:
        return True
    doc_group, doc_version = split_api_version(meta.api_version)
    if group != WILDCARD and group != doc_group:
        return False
    if version != WILDCARD and version != doc_version:
        return False
    return True


def match(content: bytes, group: str, version: str, kind: str) -> bool:
    """Return True when any document in ``content`` matches the filters.

    ``group`` and ``version`` accept the wildcard ``*``; ``kind`` is compared
    case-insensitively.
    """
    if not has_kind_marker(content):
        return False
    return any(document_matches(meta, group, version, kind) for meta in iter_documents(content))
