"""Result sinks: streaming output and buffered, de-duplicated collection."""

from __future__ import annotations

import json
import threading
from typing import Protocol, TextIO

from .models import OutputFormat, ScanRequest


def encode_record(record: str, output_format: OutputFormat) -> str:
    """Return the text for one record, including its terminator."""
    if output_format is OutputFormat.JSON_LINES:
        return json.dumps({"path": record}) + "\n"
    if output_format is OutputFormat.NUL:
        return record + "\0"
    return record + "\n"


def encode_array(records: list[str]) -> str:
    return json.dumps(records, indent=2) + "\n"


class ResultSet:
    """Insertion-ordered set of match records, safe for concurrent writers."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._order: list[str] = []
        self._seen: set[str] = set()

    def add(self, record: str) -> bool:
        """Add ``record``; return False if it was already present."""
        with self._lock:
            if record in self._seen:
                return False
            self._seen.add(record)
            self._order.append(record)
            return True

    def records(self) -> list[str]:
        with self._lock:
            return list(self._order)


class ResultSink(Protocol):
    def put(self, record: str) -> None: ...

    def flush(self) -> None: ...


class StreamingSink:
    """Write each record as soon as it is produced.

    Records are neither de-duplicated nor ordered; each write is a single
    locked unit so records from different workers never interleave.
    """

    def __init__(self, out: TextIO, output_format: OutputFormat) -> None:
        self._out = out
        self._format = output_format
        self._lock = threading.Lock()

    def put(self, record: str) -> None:
        text = encode_record(record, self._format)
        with self._lock:
            self._out.write(text)
            self._out.flush()

    def flush(self) -> None:
        with self._lock:
            self._out.flush()


class BufferedSink:
    """Collect records and write them once, after the scan has settled."""

    def __init__(self, out: TextIO, output_format: OutputFormat) -> None:
        self._out = out
        self._format = output_format
        self.results = ResultSet()

    def put(self, record: str) -> None:
        self.results.add(record)

    def flush(self) -> None:
        records = self.results.records()
        if self._format is OutputFormat.JSON_ARRAY:
            self._out.write(encode_array(records))
        else:
            self._out.write("".join(encode_record(r, self._format) for r in records))
        self._out.flush()


def make_sink(request: ScanRequest, out: TextIO) -> StreamingSink | BufferedSink:
    if request.buffered:
        return BufferedSink(out, request.output_format)
    return StreamingSink(out, request.output_format)
