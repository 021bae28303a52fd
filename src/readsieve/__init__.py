"""readsieve: streaming filtering and trimming of FASTQ sequencing reads.

Reads FASTQ records from a stream, drops those failing average-quality, length
or contamination checks, trims the survivors and writes them back out.
"""

from readsieve.__version__ import __version__, __license__, __description__
from readsieve.config import FilterConfig
from readsieve.exceptions import ReadSieveError

__all__ = [
    "__version__",
    "__license__",
    "__description__",
    "FilterConfig",
    "ReadSieveError",
]
