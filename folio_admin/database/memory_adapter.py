"""In-memory table adapter.

No network calls. Mirrors the hosted table API closely enough for local
development and tests: generated uuid ids, created/updated timestamps,
equality filters, ordering and limits.
"""

import copy
import uuid
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from typing import Any

from folio_admin.database.base import BaseTableClient, OrderBy, Row
from folio_admin.database.exceptions import TableError


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _matches(row: Row, filters: Mapping[str, Any] | None) -> bool:
    return all(row.get(column) == value for column, value in (filters or {}).items())


class InMemoryTableAdapter(BaseTableClient):
    """Dict-backed tables; `fail_with` makes the next call raise TableError."""

    def __init__(self, tables: Mapping[str, list[Row]] | None = None) -> None:
        self.tables: dict[str, list[Row]] = {
            name: [dict(row) for row in rows] for name, rows in (tables or {}).items()
        }
        self.fail_with: str | None = None
        self.writes: list[tuple[str, str]] = []

    async def select(
        self,
        table: str,
        columns: Sequence[str] | None = None,
        filters: Mapping[str, Any] | None = None,
        order: Sequence[OrderBy] = (),
        limit: int | None = None,
    ) -> list[Row]:
        self._maybe_fail()
        rows = [row for row in self.tables.get(table, []) if _matches(row, filters)]
        for o in reversed(order):
            rows.sort(
                key=lambda row: (row.get(o.column) is None, row.get(o.column)),
                reverse=not o.ascending,
            )
        if limit is not None:
            rows = rows[:limit]
        if columns:
            return [{c: copy.deepcopy(row.get(c)) for c in columns} for row in rows]
        return [copy.deepcopy(row) for row in rows]

    async def insert(self, table: str, record: Mapping[str, Any]) -> Row:
        self._maybe_fail()
        self.writes.append(("insert", table))
        now = _now()
        row: Row = {"id": str(uuid.uuid4()), "created_at": now, "updated_at": now}
        row.update(copy.deepcopy(dict(record)))
        self.tables.setdefault(table, []).append(row)
        return copy.deepcopy(row)

    async def update(
        self,
        table: str,
        filters: Mapping[str, Any],
        patch: Mapping[str, Any],
    ) -> list[Row]:
        self._maybe_fail()
        self.writes.append(("update", table))
        updated = []
        for row in self.tables.get(table, []):
            if _matches(row, filters):
                row.update(copy.deepcopy(dict(patch)))
                row["updated_at"] = _now()
                updated.append(copy.deepcopy(row))
        return updated

    async def delete(self, table: str, filters: Mapping[str, Any]) -> list[Row]:
        self._maybe_fail()
        self.writes.append(("delete", table))
        rows = self.tables.get(table, [])
        removed = [row for row in rows if _matches(row, filters)]
        self.tables[table] = [row for row in rows if not _matches(row, filters)]
        return removed

    def _maybe_fail(self) -> None:
        if self.fail_with is not None:
            message, self.fail_with = self.fail_with, None
            raise TableError(message)
