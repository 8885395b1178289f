class TableError(Exception):
    """Raised when the table API rejects an operation; carries its message verbatim."""


class TableNetworkError(TableError):
    """Raised when the table API cannot be reached."""
