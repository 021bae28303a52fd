"""Record and filter-decision types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from readsieve.exceptions import RecordParseError


@dataclass(frozen=True)
class Record:
    """One sequencing read."""

    id: str
    description: Optional[str]
    sequence: str
    quality: str

    def __post_init__(self) -> None:
        if len(self.sequence) != len(self.quality):
            raise RecordParseError(
                f"Record {self.id!r}: sequence length {len(self.sequence)} "
                f"differs from quality length {len(self.quality)}"
            )

    @classmethod
    def from_title(cls, title: str, sequence: str, quality: str) -> "Record":
        """Build a record from a FASTQ title line (without the leading '@')."""
        read_id, _, description = title.rstrip().partition(" ")
        return cls(read_id, description or None, sequence, quality)

    @property
    def header(self) -> str:
        if self.description:
            return f"{self.id} {self.description}"
        return self.id

    def __len__(self) -> int:
        return len(self.sequence)

    def is_empty(self) -> bool:
        return len(self.sequence) == 0


class DropReason(str, Enum):
    """Why a record was filtered out."""

    EMPTY = "empty"
    CROP = "crop"
    QUALITY = "quality"
    LENGTH = "length"
    CONTAMINANT = "contaminant"


@dataclass(frozen=True)
class Drop:
    reason: DropReason


@dataclass(frozen=True)
class Emit:
    """An accepted, trimmed record ready to be written."""

    header: str
    sequence: str
    quality: str

    def to_fastq(self) -> str:
        """Format as a 4-line FASTQ record, including the final newline."""
        return f"@{self.header}\n{self.sequence}\n+\n{self.quality}\n"


Decision = Union[Emit, Drop]
