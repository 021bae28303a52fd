"""FASTQ input and output.

Parsing is delegated to Biopython's ``FastqGeneralIterator``, which works on
plain strings and skips building ``SeqRecord`` objects. Any parse failure is
fatal for the run.
"""

from __future__ import annotations

import threading
from typing import Iterator, TextIO

from Bio.SeqIO.QualityIO import FastqGeneralIterator

from readsieve.core.record import Emit, Record
from readsieve.exceptions import EncodingError, RecordParseError


def read_fastq(handle: TextIO) -> Iterator[Record]:
    """Lazily yield records from a FASTQ text handle."""
    try:
        for title, sequence, quality in FastqGeneralIterator(handle):
            yield Record.from_title(title, sequence, quality)
    except (ValueError, UnicodeDecodeError) as e:
        raise RecordParseError(f"Malformed FASTQ input: {e}") from e


class FastqSink:
    """Thread-safe writer of formatted FASTQ records.

    Each record is written with a single ``write`` call while holding the
    lock, so concurrent workers never interleave partial records.
    """

    def __init__(self, handle: TextIO) -> None:
        self.handle = handle
        self._lock = threading.Lock()
        self.records_written = 0

    def write(self, record: Emit) -> None:
        text = record.to_fastq()
        with self._lock:
            try:
                self.handle.write(text)
            except UnicodeEncodeError as e:
                raise EncodingError(f"Cannot encode record {record.header!r}: {e}") from e
            self.records_written += 1

    def flush(self) -> None:
        with self._lock:
            self.handle.flush()
