import httpx

from folio_admin.auth.base import BaseAuthClient
from folio_admin.auth.memory_adapter import InMemoryAuthAdapter
from folio_admin.auth.supabase_auth_adapter import SupabaseAuthAdapter
from folio_admin.config.settings import Settings


class AuthClientFactory:
    """Creates the configured auth adapter."""

    BACKENDS = ("supabase", "memory")

    @classmethod
    def create(cls, settings: Settings, http_client: httpx.AsyncClient) -> BaseAuthClient:
        backend = settings.auth_backend.lower()
        if backend == "memory":
            return InMemoryAuthAdapter()
        if backend == "supabase":
            return SupabaseAuthAdapter(
                client=http_client,
                base_url=settings.supabase_url,
                api_key=settings.supabase_key,
            )
        raise ValueError(
            f"Unknown auth backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )
