"""Data models shared by the scanner components."""

from __future__ import annotations

from .candidate import Candidate
from .scan_request import WILDCARD, OutputFormat, ScanRequest, default_max_concurrency

__all__ = [
    "Candidate",
    "OutputFormat",
    "ScanRequest",
    "WILDCARD",
    "default_max_concurrency",
]
