from collections.abc import Mapping, Sequence
from typing import Any

import psycopg
from psycopg import sql
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from folio_admin.database.base import BaseTableClient, OrderBy, Row
from folio_admin.database.connection import PostgresConnection
from folio_admin.database.exceptions import TableError, TableNetworkError


def _adapt(value: Any) -> Any:
    if isinstance(value, (dict, list)):
        return Jsonb(value)
    return value


def _where(filters: Mapping[str, Any] | None) -> tuple[sql.Composable, list[Any]]:
    if not filters:
        return sql.SQL(""), []
    clauses: list[sql.Composable] = []
    params: list[Any] = []
    for column, value in filters.items():
        if value is None:
            clauses.append(sql.SQL("{} IS NULL").format(sql.Identifier(column)))
        else:
            clauses.append(sql.SQL("{} = %s").format(sql.Identifier(column)))
            params.append(value)
    return sql.SQL(" WHERE ") + sql.SQL(" AND ").join(clauses), params


class PostgresTableAdapter(BaseTableClient):
    """Table adapter talking to the backing Postgres database directly."""

    def __init__(self, connection: PostgresConnection, schema: str = "public") -> None:
        self._connection = connection
        self._schema = schema

    async def select(
        self,
        table: str,
        columns: Sequence[str] | None = None,
        filters: Mapping[str, Any] | None = None,
        order: Sequence[OrderBy] = (),
        limit: int | None = None,
    ) -> list[Row]:
        where, params = _where(filters)
        query = sql.SQL("SELECT {columns} FROM {table}{where}").format(
            columns=self._columns(columns),
            table=self._table(table),
            where=where,
        )
        if order:
            query += sql.SQL(" ORDER BY ") + sql.SQL(", ").join(
                sql.SQL("{} {}").format(
                    sql.Identifier(o.column),
                    sql.SQL("ASC" if o.ascending else "DESC"),
                )
                for o in order
            )
        if limit is not None:
            query += sql.SQL(" LIMIT %s")
            params.append(limit)
        return await self._fetch(query, params)

    async def insert(self, table: str, record: Mapping[str, Any]) -> Row:
        columns = list(record)
        query = sql.SQL("INSERT INTO {table} ({columns}) VALUES ({values}) RETURNING *").format(
            table=self._table(table),
            columns=sql.SQL(", ").join(sql.Identifier(c) for c in columns),
            values=sql.SQL(", ").join(sql.Placeholder() for _ in columns),
        )
        rows = await self._fetch(query, [_adapt(record[c]) for c in columns])
        if not rows:
            raise TableError(f"Insert into {table} returned no row")
        return rows[0]

    async def update(
        self,
        table: str,
        filters: Mapping[str, Any],
        patch: Mapping[str, Any],
    ) -> list[Row]:
        if not patch:
            return await self.select(table, filters=filters)
        where, where_params = _where(filters)
        assignments = sql.SQL(", ").join(
            sql.SQL("{} = %s").format(sql.Identifier(column)) for column in patch
        )
        query = sql.SQL("UPDATE {table} SET {assignments}{where} RETURNING *").format(
            table=self._table(table),
            assignments=assignments,
            where=where,
        )
        params = [_adapt(value) for value in patch.values()] + where_params
        return await self._fetch(query, params)

    async def delete(self, table: str, filters: Mapping[str, Any]) -> list[Row]:
        where, params = _where(filters)
        query = sql.SQL("DELETE FROM {table}{where} RETURNING *").format(
            table=self._table(table),
            where=where,
        )
        return await self._fetch(query, params)

    async def _fetch(self, query: sql.Composable, params: list[Any]) -> list[Row]:
        try:
            async with self._connection.connection() as conn:
                async with conn.cursor(row_factory=dict_row) as cur:
                    await cur.execute(query, params)
                    if cur.description is None:
                        return []
                    return list(await cur.fetchall())
        except psycopg.OperationalError as exc:
            raise TableNetworkError(f"Database unavailable: {exc}") from exc
        except psycopg.Error as exc:
            message = exc.diag.message_primary or str(exc)
            raise TableError(message) from exc

    def _table(self, table: str) -> sql.Identifier:
        return sql.Identifier(self._schema, table)

    @staticmethod
    def _columns(columns: Sequence[str] | None) -> sql.Composable:
        if not columns:
            return sql.SQL("*")
        return sql.SQL(", ").join(sql.Identifier(c) for c in columns)
