from typing import Any

import httpx

from folio_admin.auth.base import BaseAuthClient
from folio_admin.auth.exceptions import AuthError
from folio_admin.auth.models import AuthSession, AuthUser


def _user_from_payload(payload: dict[str, Any]) -> AuthUser:
    return AuthUser(id=str(payload["id"]), email=payload.get("email"))


class SupabaseAuthAdapter(BaseAuthClient):
    """Auth adapter for the Supabase GoTrue REST API (`/auth/v1`)."""

    def __init__(self, *, client: httpx.AsyncClient, base_url: str, api_key: str) -> None:
        self._client = client
        self._base_url = f"{base_url.rstrip('/')}/auth/v1"
        self._api_key = api_key

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        response = await self._send(
            "POST",
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        if not response.is_success:
            raise AuthError(self._error_message(response))
        body = response.json()
        return AuthSession(
            access_token=body["access_token"],
            refresh_token=body.get("refresh_token", ""),
            expires_in=int(body.get("expires_in", 0)),
            user=_user_from_payload(body["user"]),
        )

    async def get_current_user(self, access_token: str) -> AuthUser | None:
        if not access_token:
            return None
        response = await self._send("GET", "/user", token=access_token)
        if response.status_code in (401, 403):
            return None
        if not response.is_success:
            raise AuthError(self._error_message(response))
        return _user_from_payload(response.json())

    async def sign_out(self, access_token: str) -> None:
        response = await self._send("POST", "/logout", token=access_token)
        if not response.is_success and response.status_code != 401:
            raise AuthError(self._error_message(response))

    async def _send(
        self,
        method: str,
        path: str,
        *,
        token: str | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        headers = {
            "apikey": self._api_key,
            "Authorization": f"Bearer {token or self._api_key}",
        }
        try:
            return await self._client.request(
                method, f"{self._base_url}{path}", headers=headers, **kwargs
            )
        except httpx.HTTPError as exc:
            raise AuthError(f"Auth API network error: {exc}") from exc

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or f"HTTP {response.status_code}"
        if isinstance(body, dict):
            for key in ("error_description", "msg", "message", "error"):
                if body.get(key):
                    return str(body[key])
        return f"HTTP {response.status_code}"
