"""In-memory auth adapter for local development and tests."""

import secrets
import uuid

from folio_admin.auth.base import BaseAuthClient
from folio_admin.auth.exceptions import AuthError
from folio_admin.auth.models import AuthSession, AuthUser


class InMemoryAuthAdapter(BaseAuthClient):
    """Accounts and sessions held in dicts; tokens are random strings."""

    def __init__(self, accounts: dict[str, str] | None = None) -> None:
        self._accounts = dict(accounts or {})
        self._users = {
            email: AuthUser(id=str(uuid.uuid4()), email=email) for email in self._accounts
        }
        self._sessions: dict[str, AuthUser] = {}

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        if self._accounts.get(email) != password:
            raise AuthError("Invalid login credentials")
        user = self._users[email]
        token = secrets.token_urlsafe(24)
        self._sessions[token] = user
        return AuthSession(
            access_token=token,
            refresh_token=secrets.token_urlsafe(24),
            expires_in=3600,
            user=user,
        )

    async def get_current_user(self, access_token: str) -> AuthUser | None:
        return self._sessions.get(access_token)

    async def sign_out(self, access_token: str) -> None:
        self._sessions.pop(access_token, None)
