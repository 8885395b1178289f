class ContentError(Exception):
    """Base exception for rich document content errors."""


class DocumentDecodeError(ContentError):
    """Raised when a stored value does not have the shape of a document tree."""
