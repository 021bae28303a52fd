"""Pipeline driver: stream records through the filter into a sink.

Two execution modes:

- screened (contamination reference set): records are evaluated one at a
  time in input order, so output order matches input order;
- unscreened: records are spread over a thread pool and each worker writes
  its own result as soon as it is ready, so output order is not guaranteed.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import Iterable, Optional

from readsieve.config import FilterConfig
from readsieve.core.fastq import FastqSink
from readsieve.core.record import Emit, Record
from readsieve.external.base import Aligner
from readsieve.external.minimap2 import MappyAligner
from readsieve.modules.contamination import ContaminationScreener
from readsieve.modules.read_filter import FilterStats, ReadFilter
from readsieve.utils.logging import LogTemplates, get_logger


class PipelineDriver:
    """Run a filtering pass over a record stream."""

    # Records queued per worker before the reader waits
    PENDING_PER_WORKER = 64

    def __init__(
        self,
        config: FilterConfig,
        aligner: Optional[Aligner] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.config = config
        self.aligner = aligner
        self.logger = logger or get_logger("pipeline")

    def build_filter(self) -> ReadFilter:
        """Create the evaluator, indexing the contamination reference if configured."""
        if not self.config.screening:
            return ReadFilter(self.config)

        aligner = self.aligner
        if aligner is None:
            aligner = MappyAligner(threads=self.config.aligner_threads)
        screener = ContaminationScreener(aligner)
        index = screener.build(self.config.contam)
        return ReadFilter(self.config, screener=screener, index=index)

    def run(self, records: Iterable[Record], sink: FastqSink) -> FilterStats:
        """
        Filter ``records`` into ``sink``.

        Args:
            records: Single-pass record stream; parse errors abort the run
            sink: Destination for accepted records

        Returns:
            FilterStats for the run
        """
        read_filter = self.build_filter()
        stats = FilterStats()
        start = time.perf_counter()

        if read_filter.screening:
            self.logger.info(LogTemplates.RUN_START.format(mode="screened", threads=1))
            self._run_sequential(read_filter, records, sink, stats)
        else:
            self.logger.info(
                LogTemplates.RUN_START.format(mode="unscreened", threads=self.config.threads)
            )
            self._run_parallel(read_filter, records, sink, stats)

        sink.flush()
        self.logger.info(LogTemplates.RUN_COMPLETE.format(duration=time.perf_counter() - start))
        stats.log_summary(self.logger)
        return stats

    @staticmethod
    def _process(
        read_filter: ReadFilter, record: Record, sink: FastqSink, stats: FilterStats
    ) -> None:
        decision = read_filter.evaluate(record)
        stats.record(decision)
        if isinstance(decision, Emit):
            sink.write(decision)

    def _run_sequential(
        self,
        read_filter: ReadFilter,
        records: Iterable[Record],
        sink: FastqSink,
        stats: FilterStats,
    ) -> None:
        for record in records:
            self._process(read_filter, record, sink, stats)

    def _run_parallel(
        self,
        read_filter: ReadFilter,
        records: Iterable[Record],
        sink: FastqSink,
        stats: FilterStats,
    ) -> None:
        max_pending = self.config.threads * self.PENDING_PER_WORKER
        pending: set[Future] = set()

        with ThreadPoolExecutor(
            max_workers=self.config.threads, thread_name_prefix="readsieve"
        ) as executor:
            try:
                for record in records:
                    if len(pending) >= max_pending:
                        done, pending = wait(pending, return_when=FIRST_COMPLETED)
                        for future in done:
                            future.result()
                    pending.add(executor.submit(self._process, read_filter, record, sink, stats))

                done, pending = wait(pending)
                for future in done:
                    future.result()
            except BaseException:
                for future in pending:
                    future.cancel()
                raise
