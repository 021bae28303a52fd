"""Core record types, quality scoring and FASTQ I/O (readsieve).

The pipeline driver lives in ``readsieve.core.pipeline`` and is not
re-exported here because it depends on ``readsieve.modules``.
"""

from readsieve.core.fastq import FastqSink, read_fastq
from readsieve.core.quality import average_quality, decode_quality
from readsieve.core.record import Drop, DropReason, Emit, Record

__all__ = [
    "FastqSink",
    "read_fastq",
    "average_quality",
    "decode_quality",
    "Drop",
    "DropReason",
    "Emit",
    "Record",
]
