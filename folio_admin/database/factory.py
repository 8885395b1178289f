import httpx

from folio_admin.config.settings import Settings
from folio_admin.database.base import BaseTableClient
from folio_admin.database.connection import PostgresConnection
from folio_admin.database.memory_adapter import InMemoryTableAdapter
from folio_admin.database.postgres_adapter import PostgresTableAdapter
from folio_admin.database.postgrest_adapter import PostgrestTableAdapter


class TableClientFactory:
    """Creates the configured table API adapter."""

    BACKENDS = ("postgrest", "postgres", "memory")

    @classmethod
    def create(
        cls,
        settings: Settings,
        http_client: httpx.AsyncClient,
        pg: PostgresConnection | None = None,
    ) -> BaseTableClient:
        backend = settings.table_backend.lower()
        if backend == "memory":
            return InMemoryTableAdapter()
        if backend == "postgrest":
            return PostgrestTableAdapter(
                client=http_client,
                base_url=settings.supabase_url,
                api_key=settings.supabase_key,
            )
        if backend == "postgres":
            if pg is None:
                raise ValueError("table_backend=postgres requires a PostgresConnection")
            return PostgresTableAdapter(pg)
        raise ValueError(
            f"Unknown table backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )
