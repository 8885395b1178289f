class AuthError(Exception):
    """Raised when the auth API rejects a sign-in or cannot be reached."""


class NotAuthenticatedError(AuthError):
    """Raised when there is no valid session."""


class NotAuthorizedError(AuthError):
    """Raised when the signed-in user is not the site admin."""
