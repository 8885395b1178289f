class StorageError(Exception):
    """Raised when the object storage API rejects an operation."""


class StorageNetworkError(StorageError):
    """Raised when the object storage API cannot be reached."""
