from typing import Any
from urllib.parse import quote, unquote

import httpx

from folio_admin.storage.base import BaseStorageClient
from folio_admin.storage.exceptions import StorageError, StorageNetworkError


class SupabaseStorageAdapter(BaseStorageClient):
    """Object storage adapter for the Supabase Storage REST API."""

    def __init__(self, *, client: httpx.AsyncClient, base_url: str, api_key: str) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key

    async def upload(
        self,
        bucket: str,
        object_name: str,
        content: bytes,
        *,
        content_type: str,
        overwrite: bool = True,
    ) -> str:
        headers = {
            **self._auth_headers(),
            "Content-Type": content_type,
            "x-upsert": "true" if overwrite else "false",
        }
        response = await self._send(
            "POST",
            f"{self._object_url(bucket)}/{quote(object_name)}",
            headers=headers,
            content=content,
        )
        self._raise_for_error(response, f"upload of '{object_name}'")
        return object_name

    def get_public_address(self, bucket: str, stored_path: str) -> str:
        return f"{self._public_prefix(bucket)}{quote(stored_path)}"

    async def delete(self, bucket: str, paths: list[str]) -> None:
        if not paths:
            return
        response = await self._send(
            "DELETE",
            self._object_url(bucket),
            headers=self._auth_headers(),
            json={"prefixes": paths},
        )
        self._raise_for_error(response, f"delete of {len(paths)} object(s)")

    def path_from_public_address(self, bucket: str, address: str) -> str | None:
        prefix = self._public_prefix(bucket)
        if not address.startswith(prefix):
            return None
        path = address[len(prefix):].split("?", 1)[0]
        return unquote(path) or None

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._client.request(method, url, **kwargs)
        except (httpx.ConnectError, httpx.TimeoutException) as exc:
            raise StorageNetworkError(f"Storage network error: {exc}") from exc
        except httpx.HTTPError as exc:
            raise StorageNetworkError(f"Storage transport error: {exc}") from exc

    @staticmethod
    def _raise_for_error(response: httpx.Response, action: str) -> None:
        if response.is_success:
            return
        message = response.text
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = str(body.get("message") or body.get("error") or message)
        raise StorageError(f"Storage {action} failed ({response.status_code}): {message}")

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._api_key}", "apikey": self._api_key}

    def _object_url(self, bucket: str) -> str:
        return f"{self._base_url}/storage/v1/object/{bucket}"

    def _public_prefix(self, bucket: str) -> str:
        return f"{self._base_url}/storage/v1/object/public/{bucket}/"
