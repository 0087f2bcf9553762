"""
Custom exception hierarchy for media-dater.

Per-file metadata problems never surface as exceptions; these types cover
setup, copying and the final directory rename.
"""


class MediaDaterError(Exception):
    """Base exception for all media-dater errors."""
    pass


class SetupError(MediaDaterError):
    """Raised when the staging directory cannot be prepared."""
    pass


class ScanError(MediaDaterError):
    """Raised when the source directory itself cannot be listed."""
    pass


class MetadataExtractionError(MediaDaterError):
    """Raised when metadata cannot be extracted from a file."""
    pass


class FileOperationError(MediaDaterError):
    """Raised when file copy operations fail."""
    pass


class BatchAbortedError(FileOperationError):
    """Raised under the 'abort' policy once any copy in the batch failed."""

    def __init__(self, failures, result=None):
        self.failures = list(failures)
        self.result = result
        names = ", ".join(str(r.source.name) for r in self.failures[:5])
        more = "" if len(self.failures) <= 5 else f" (+{len(self.failures) - 5} more)"
        super().__init__(f"{len(self.failures)} copies failed: {names}{more}")


class FinalizationError(MediaDaterError):
    """Raised when the staging directory cannot be renamed to its final name."""
    pass
