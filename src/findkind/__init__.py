"""findkind core package.

Locates YAML manifests by group, version and kind across a directory tree and
across the branches of any git repositories inside it. The scanning engine is
usable from the command line wrapper and directly from Python.
"""

from .core import run_scan
from .errors import ConfigError, FindKindError, GitCommandError, TraversalError
from .models import OutputFormat, ScanRequest

__all__ = [
    "ConfigError",
    "FindKindError",
    "GitCommandError",
    "OutputFormat",
    "ScanRequest",
    "TraversalError",
    "run_scan",
]
