"""
Read Filter - per-record accept/reject decisions

Evaluates one FASTQ record against the configured thresholds and, if it
passes, returns the trimmed record to emit.

Checks, in order:
1. Empty reads are dropped.
2. Reads that head/tail cropping would consume entirely are dropped.
3. Average quality (probability space) below ``minqual`` is dropped.
4. Reads shorter than ``minlength`` or longer than ``maxlength`` are dropped.
5. Reads whose best alignment hits the contamination reference are dropped.

Quality and length are always judged on the untrimmed read.
"""

from __future__ import annotations

import logging
import threading
from collections import Counter
from dataclasses import dataclass, field
from typing import Optional

from readsieve.config import FilterConfig
from readsieve.core.quality import average_quality, decode_quality
from readsieve.core.record import Decision, Drop, DropReason, Emit, Record
from readsieve.external.base import AlignmentIndex
from readsieve.modules.contamination import ContaminationScreener
from readsieve.utils.logging import LogTemplates, get_logger


@dataclass
class FilterStats:
    """Statistics for a filtering run."""

    total_reads: int = 0
    retained_reads: int = 0
    dropped: Counter = field(default_factory=Counter)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def filtered_reads(self) -> int:
        return sum(self.dropped.values())

    @property
    def retained_percentage(self) -> float:
        if self.total_reads == 0:
            return 0.0
        return (self.retained_reads / self.total_reads) * 100

    def record(self, decision: Decision) -> None:
        with self._lock:
            self.total_reads += 1
            if isinstance(decision, Emit):
                self.retained_reads += 1
            else:
                self.dropped[decision.reason] += 1

    def log_summary(self, logger: logging.Logger) -> None:
        logger.info(
            LogTemplates.FILTERING_STATS.format(
                kept=self.retained_reads,
                removed=self.filtered_reads,
                percent=self.retained_percentage,
            )
        )
        for reason in DropReason:
            if self.dropped[reason]:
                logger.info(LogTemplates.DROP_REASON.format(reason=reason.value, count=self.dropped[reason]))


class ReadFilter:
    """Decide whether a record is emitted, and how it is trimmed."""

    def __init__(
        self,
        config: FilterConfig,
        screener: Optional[ContaminationScreener] = None,
        index: Optional[AlignmentIndex] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if index is not None and screener is None:
            raise ValueError("A contamination index requires a screener")
        self.config = config
        self.screener = screener
        self.index = index
        self.logger = logger or get_logger(self.__class__.__name__)

    @property
    def screening(self) -> bool:
        return self.index is not None

    def evaluate(self, record: Record) -> Decision:
        """Return Emit with the trimmed record, or Drop with the reason."""
        cfg = self.config

        if record.is_empty():
            return Drop(DropReason.EMPTY)

        read_len = len(record.sequence)
        # A read that cropping would consume entirely is filtered out
        if cfg.headcrop + cfg.tailcrop >= read_len:
            return Drop(DropReason.CROP)

        quality = average_quality(decode_quality(record.quality, cfg.phred_offset))
        if quality < cfg.minqual:
            return Drop(DropReason.QUALITY)

        if read_len < cfg.minlength or read_len > cfg.maxlength:
            return Drop(DropReason.LENGTH)

        if self.screening and self.screener.is_contaminant(record.sequence, self.index):
            self.logger.debug(f"Dropping contaminant read {record.id}")
            return Drop(DropReason.CONTAMINANT)

        end = read_len - cfg.tailcrop
        return Emit(
            header=record.header,
            sequence=record.sequence[cfg.headcrop:end],
            quality=record.quality[cfg.headcrop:end],
        )


def evaluate(
    record: Record,
    config: FilterConfig,
    index: Optional[AlignmentIndex] = None,
    screener: Optional[ContaminationScreener] = None,
) -> Decision:
    """Evaluate a single record without keeping a ReadFilter around."""
    return ReadFilter(config, screener=screener, index=index).evaluate(record)
