"""Core scanning entrypoint.

This module MUST NOT depend on the command line layer so the engine can be
driven from the CLI, from scripts, or from tests.
"""

from __future__ import annotations

import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from typing import TextIO

from .discovery import walk
from .dispatch import Dispatcher, ScanContext
from .errors import FindKindError
from .limiter import ConcurrencyLimiter
from .models import ScanRequest
from .report import make_sink

logger = logging.getLogger(__name__)


def run_scan(request: ScanRequest, out: TextIO | None = None) -> None:
    """Scan ``request.root`` and write matching records to ``out``.

    Params:
        request: what to look for and how to report it
        out: text stream for records; defaults to stdout

    In streaming mode records are written as they are found and whatever was
    written before a failure stays written. In buffered mode nothing is
    written unless the whole scan succeeds.

    Raises:
        FindKindError: the first fatal error seen anywhere in the scan, after
            all work already in flight has settled.
    """
    out = out if out is not None else sys.stdout
    sink = make_sink(request, out)
    context = ScanContext()
    limiter = ConcurrencyLimiter(request.max_concurrency)

    logger.debug("Starting scan: %s", request.to_dict())
    with ThreadPoolExecutor(
        max_workers=request.max_concurrency, thread_name_prefix="findkind"
    ) as executor:
        dispatcher = Dispatcher(executor, limiter, context)
        try:
            walk(request, dispatcher, sink)
        except FindKindError as exc:
            context.fail(exc)
        finally:
            dispatcher.join()

    if context.error is not None:
        raise context.error

    sink.flush()
