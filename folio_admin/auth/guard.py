from folio_admin.auth.base import BaseAuthClient
from folio_admin.auth.exceptions import NotAuthenticatedError, NotAuthorizedError
from folio_admin.auth.models import AuthUser
from folio_admin.logging.logger import Log


class SessionGuard:
    """Single-admin session check in front of the admin operations."""

    def __init__(self, auth: BaseAuthClient, admin_email: str = "") -> None:
        self._auth = auth
        self._admin_email = admin_email.strip().lower()

    async def require_admin(self, access_token: str | None) -> AuthUser:
        """Return the signed-in admin.

        Raises:
            NotAuthenticatedError: if there is no valid session.
            NotAuthorizedError: if an admin email is configured and differs.
        """
        user = await self._auth.get_current_user(access_token or "")
        if user is None:
            raise NotAuthenticatedError("Sign in to access the admin area")
        if self._admin_email and (user.email or "").lower() != self._admin_email:
            Log.warning("Rejected non-admin session", user_id=user.id)
            raise NotAuthorizedError("This account cannot access the admin area")
        return user
