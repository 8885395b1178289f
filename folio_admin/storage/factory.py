import httpx

from folio_admin.config.settings import Settings
from folio_admin.storage.base import BaseStorageClient
from folio_admin.storage.memory_adapter import InMemoryStorageAdapter
from folio_admin.storage.supabase_storage_adapter import SupabaseStorageAdapter


class StorageClientFactory:
    """Creates the configured object storage adapter."""

    BACKENDS = ("supabase", "memory")

    @classmethod
    def create(cls, settings: Settings, http_client: httpx.AsyncClient) -> BaseStorageClient:
        backend = settings.storage_backend.lower()
        if backend == "memory":
            return InMemoryStorageAdapter()
        if backend == "supabase":
            return SupabaseStorageAdapter(
                client=http_client,
                base_url=settings.supabase_url,
                api_key=settings.supabase_key,
            )
        raise ValueError(
            f"Unknown storage backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )
