"""Unified constants for readsieve.

Defaults shared by the configuration, the CLI and the YAML template.
"""

# ================== Filter Defaults ==================

DEFAULT_MIN_QUALITY: float = 0.0
DEFAULT_MIN_LENGTH: int = 1

# Largest signed 32-bit integer; effectively "no maximum"
DEFAULT_MAX_LENGTH: int = 2147483647

DEFAULT_HEADCROP: int = 0
DEFAULT_TAILCROP: int = 0
DEFAULT_THREADS: int = 4


# ================== Quality Encoding ==================

# Sanger / Illumina 1.8+ FASTQ encoding
PHRED_OFFSET: int = 33


# ================== Contamination Screening ==================

# minimap2 preset for long, error-tolerant reads
CONTAM_PRESET: str = "map-ont"

# Only the best candidate alignment is inspected
CONTAM_BEST_N: int = 1

# Threads used by minimap2 while indexing the reference
DEFAULT_ALIGNER_THREADS: int = 8
