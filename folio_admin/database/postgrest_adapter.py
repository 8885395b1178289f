from collections.abc import Mapping, Sequence
from typing import Any

import httpx

from folio_admin.database.base import BaseTableClient, OrderBy, Row
from folio_admin.database.exceptions import TableError, TableNetworkError


def _filter_value(value: Any) -> str:
    if value is None:
        return "is.null"
    if isinstance(value, bool):
        return f"eq.{str(value).lower()}"
    return f"eq.{value}"


class PostgrestTableAdapter(BaseTableClient):
    """Table adapter for the hosted PostgREST endpoint (`/rest/v1`)."""

    def __init__(self, *, client: httpx.AsyncClient, base_url: str, api_key: str) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key

    async def select(
        self,
        table: str,
        columns: Sequence[str] | None = None,
        filters: Mapping[str, Any] | None = None,
        order: Sequence[OrderBy] = (),
        limit: int | None = None,
    ) -> list[Row]:
        params = self._filter_params(filters)
        params["select"] = ",".join(columns) if columns else "*"
        if order:
            params["order"] = ",".join(
                f"{o.column}.{'asc' if o.ascending else 'desc'}" for o in order
            )
        if limit is not None:
            params["limit"] = str(limit)
        return await self._request("GET", table, params=params)

    async def insert(self, table: str, record: Mapping[str, Any]) -> Row:
        rows = await self._request(
            "POST",
            table,
            json=dict(record),
            headers={"Prefer": "return=representation"},
        )
        if not rows:
            raise TableError(f"Insert into {table} returned no row")
        return rows[0]

    async def update(
        self,
        table: str,
        filters: Mapping[str, Any],
        patch: Mapping[str, Any],
    ) -> list[Row]:
        return await self._request(
            "PATCH",
            table,
            params=self._filter_params(filters),
            json=dict(patch),
            headers={"Prefer": "return=representation"},
        )

    async def delete(self, table: str, filters: Mapping[str, Any]) -> list[Row]:
        return await self._request(
            "DELETE",
            table,
            params=self._filter_params(filters),
            headers={"Prefer": "return=representation"},
        )

    async def _request(
        self,
        method: str,
        table: str,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> list[Row]:
        try:
            response = await self._client.request(
                method,
                f"{self._base_url}/rest/v1/{table}",
                params=params,
                json=json,
                headers={**self._auth_headers(), **(headers or {})},
            )
        except (httpx.ConnectError, httpx.TimeoutException) as exc:
            raise TableNetworkError(f"Table API network error: {exc}") from exc
        except httpx.HTTPError as exc:
            raise TableNetworkError(f"Table API transport error: {exc}") from exc

        if not response.is_success:
            raise TableError(self._error_message(response))
        if not response.content:
            return []
        body = response.json()
        if isinstance(body, dict):
            return [body]
        return list(body)

    @staticmethod
    def _filter_params(filters: Mapping[str, Any] | None) -> dict[str, str]:
        return {column: _filter_value(value) for column, value in (filters or {}).items()}

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or f"HTTP {response.status_code}"
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return response.text or f"HTTP {response.status_code}"

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._api_key}", "apikey": self._api_key}
