"""Version information for readsieve."""

__version__ = "0.3.0"
__license__ = "MIT"
__description__ = "Streaming quality, length and contamination filtering of FASTQ reads"
