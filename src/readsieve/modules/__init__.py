"""readsieve filtering modules."""

from readsieve.modules.contamination import ContaminationScreener
from readsieve.modules.read_filter import FilterStats, ReadFilter

__all__ = ["ContaminationScreener", "FilterStats", "ReadFilter"]
