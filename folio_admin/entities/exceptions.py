class RepositoryError(Exception):
    """Base exception for entity repository failures."""


class ValidationError(RepositoryError):
    """Raised when required metadata is missing or malformed; detected before any I/O."""


class PersistenceError(RepositoryError):
    """Raised when the table API rejects a create/update/delete; message is verbatim."""


class NotFoundError(RepositoryError):
    """Raised when the target record of a read, update or delete does not exist."""
