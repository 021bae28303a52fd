"""External aligner wrappers (readsieve).

- Aligner: capability interface used by contamination screening
- MappyAligner: minimap2 through its mappy Python binding
"""

from readsieve.external.base import Aligner, AlignmentHit, AlignmentIndex
from readsieve.external.minimap2 import MappyAligner

__all__ = [
    "Aligner",
    "AlignmentHit",
    "AlignmentIndex",
    "MappyAligner",
]
