"""Base class and result types for external aligners."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from readsieve.utils.logging import get_logger


@dataclass(frozen=True)
class AlignmentHit:
    """A candidate alignment of a query against the reference set."""

    target_name: Optional[str]
    query_start: int = 0
    query_end: int = 0
    target_start: int = 0
    target_end: int = 0
    mapq: int = 0
    is_primary: bool = True


@dataclass(frozen=True)
class AlignmentIndex:
    """Opaque, read-only index built once from a reference set.

    ``handle`` is whatever the aligner needs to answer queries; callers never
    look inside it.
    """

    reference: Path
    handle: Any = field(repr=False, compare=False)
    target_names: tuple[str, ...] = ()


class Aligner(ABC):
    """Capability interface for sequence aligners.

    Implementations build an index from a reference once and then map query
    sequences against it, returning hits ordered best first.
    """

    tool_name: str = ""

    def __init__(self, logger: Optional[logging.Logger] = None, threads: int = 1):
        self.threads = threads
        self.logger = logger or get_logger(f"external.{self.tool_name or 'aligner'}")

    @abstractmethod
    def build_index(self, reference: Path) -> AlignmentIndex:
        """Index ``reference``; raise IndexBuildError on failure."""

    @abstractmethod
    def align(self, query: str, index: AlignmentIndex) -> list[AlignmentHit]:
        """Map ``query``; raise AlignmentError if the aligner cannot process it."""
