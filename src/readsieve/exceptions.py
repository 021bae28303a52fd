"""Custom exceptions for readsieve."""


class ReadSieveError(Exception):
    """Base exception for all readsieve errors."""

    pass


class ConfigurationError(ReadSieveError):
    """Raised when configuration is invalid or missing."""

    pass


class IndexBuildError(ReadSieveError):
    """Raised when the contamination reference cannot be indexed."""

    def __init__(self, message="", reference=None):
        """Initialize IndexBuildError.

        Args:
            message: Error message
            reference: Reference path that failed to index
        """
        super().__init__(message)
        self.reference = reference


class RecordParseError(ReadSieveError):
    """Raised when an input record cannot be parsed."""

    pass


class AlignmentError(ReadSieveError):
    """Raised when the aligner cannot process a query sequence."""

    def __init__(self, message="", query_length=None):
        super().__init__(message)
        self.query_length = query_length


class EncodingError(ReadSieveError):
    """Raised when a trimmed record is not valid FASTQ text."""

    pass
