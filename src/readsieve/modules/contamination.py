"""
Contamination Screener

Flags reads that align to a reference set of unwanted sequences (adapters,
spike-ins, host genome, lambda control, ...). A read is a contaminant when its
best alignment names a reference target; alignment score is not considered.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Optional

from readsieve.exceptions import IndexBuildError
from readsieve.external.base import Aligner, AlignmentIndex
from readsieve.utils.logging import LogTemplates, get_logger


class ContaminationScreener:
    """Screen read sequences against a contamination reference."""

    def __init__(self, aligner: Aligner, logger: Optional[logging.Logger] = None) -> None:
        self.aligner = aligner
        self.logger = logger or get_logger(self.__class__.__name__)
        self._query_lock = threading.Lock()
        self.queries = 0
        self.hits = 0

    def build(self, reference_path: Path) -> AlignmentIndex:
        """
        Index the contamination reference.

        Args:
            reference_path: FASTA of contaminant sequences

        Returns:
            Index to pass to is_contaminant()
        """
        reference_path = Path(reference_path)
        self.logger.info(LogTemplates.INDEX_START.format(path=reference_path))
        index = self.aligner.build_index(reference_path)
        if index is None:
            raise IndexBuildError(
                f"Aligner returned no index for {reference_path}", reference=reference_path
            )
        self.logger.info(LogTemplates.INDEX_SUCCESS.format(count=len(index.target_names)))
        return index

    def is_contaminant(self, sequence: str, index: AlignmentIndex) -> bool:
        """Return True if the best alignment of ``sequence`` hits a named target."""
        # Queries against one index never overlap
        with self._query_lock:
            hits = self.aligner.align(sequence, index)
            self.queries += 1
            contaminant = bool(hits) and hits[0].target_name is not None
            if contaminant:
                self.hits += 1

        if contaminant:
            self.logger.debug(f"Contaminant hit on {hits[0].target_name}")
        return contaminant
