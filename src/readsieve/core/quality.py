"""Average read quality in probability space.

Phred scores are logarithmic, so averaging them directly overstates the
quality of reads with a few bad bases. Each score is converted to an error
probability (10^(q/-10)), the probabilities are averaged, and the mean is
converted back with -10*log10(mean).
"""

from __future__ import annotations

import math
from typing import Sequence

from readsieve.constants import PHRED_OFFSET


def average_quality(quality_codes: Sequence[int]) -> float:
    """Return the mean Phred quality of ``quality_codes``.

    ``quality_codes`` must be non-empty.
    """
    probability_sum = sum(10 ** (q / -10) for q in quality_codes)
    return -10 * math.log10(probability_sum / len(quality_codes))


def decode_quality(quality: str, offset: int = PHRED_OFFSET) -> list[int]:
    """Convert a FASTQ quality string into integer Phred codes."""
    return [ord(c) - offset for c in quality]
