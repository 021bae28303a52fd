"""
Minimap2 aligner backed by mappy

Builds an in-memory minimap2 index from a FASTA (or prebuilt .mmi) reference
and maps individual read sequences against it. Used for contamination
screening, where only the best hit matters.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import mappy

from readsieve.constants import CONTAM_BEST_N, CONTAM_PRESET, DEFAULT_ALIGNER_THREADS
from readsieve.exceptions import AlignmentError, IndexBuildError
from readsieve.external.base import Aligner, AlignmentHit, AlignmentIndex


class MappyAligner(Aligner):
    """mappy wrapper configured for long, error-tolerant reads."""

    tool_name = "minimap2"

    def __init__(
        self,
        preset: str = CONTAM_PRESET,
        best_n: int = CONTAM_BEST_N,
        threads: int = DEFAULT_ALIGNER_THREADS,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(logger=logger, threads=threads)
        self.preset = preset
        self.best_n = best_n

    def build_index(self, reference: Path) -> AlignmentIndex:
        """
        Build a minimap2 index for the reference.

        Args:
            reference: Reference FASTA or .mmi index

        Returns:
            AlignmentIndex wrapping the loaded mappy.Aligner
        """
        reference = Path(reference)
        if not reference.is_file():
            raise IndexBuildError(f"Reference file not found: {reference}", reference=reference)

        self.logger.debug(
            f"mappy.Aligner({reference}, preset={self.preset}, "
            f"best_n={self.best_n}, n_threads={self.threads})"
        )
        try:
            aligner = mappy.Aligner(
                str(reference),
                preset=self.preset,
                best_n=self.best_n,
                n_threads=self.threads,
            )
        except Exception as e:
            raise IndexBuildError(
                f"Unable to build index from {reference}: {e}", reference=reference
            ) from e

        # mappy signals a failed load with a falsy Aligner rather than raising
        if not aligner:
            raise IndexBuildError(f"Unable to build index from {reference}", reference=reference)

        names = tuple(aligner.seq_names or ())
        self.logger.debug(f"Indexed {len(names)} sequence(s) from {reference}")
        return AlignmentIndex(reference=reference, handle=aligner, target_names=names)

    def align(self, query: str, index: AlignmentIndex) -> list[AlignmentHit]:
        """Map one query and return its hits, best first."""
        try:
            return [
                AlignmentHit(
                    target_name=hit.ctg,
                    query_start=hit.q_st,
                    query_end=hit.q_en,
                    target_start=hit.r_st,
                    target_end=hit.r_en,
                    mapq=hit.mapq,
                    is_primary=bool(hit.is_primary),
                )
                for hit in index.handle.map(query)
            ]
        except Exception as e:
            raise AlignmentError(
                f"Unable to align query of length {len(query)}: {e}", query_length=len(query)
            ) from e
