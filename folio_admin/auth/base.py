from abc import ABC, abstractmethod

from folio_admin.auth.models import AuthSession, AuthUser


class BaseAuthClient(ABC):
    """Contract for session-based auth adapters."""

    @abstractmethod
    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """Raises AuthError on bad credentials."""

    @abstractmethod
    async def get_current_user(self, access_token: str) -> AuthUser | None:
        """Return the session's user, or None if the token is missing or expired."""

    @abstractmethod
    async def sign_out(self, access_token: str) -> None:
        ...
