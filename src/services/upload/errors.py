class UploadError(Exception):
    """Base class for errors raised while relaying uploads."""


class NoFilesError(UploadError):
    """The request carried no files."""


class TempStoreError(UploadError, OSError):
    """Scratch directory or temp file operation failed."""


class ProviderError(UploadError):
    """The hosting provider rejected the file or returned no result."""
