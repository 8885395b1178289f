from collections.abc import Generator

import psycopg
import pytest

from folio_admin.config.settings import Settings
from folio_admin.database.connection import conninfo_from_settings

TABLE = "folio_it_pages"

_CREATE = f"""
CREATE TABLE IF NOT EXISTS public.{TABLE} (
    id uuid PRIMARY KEY DEFAULT gen_random_uuid(),
    section_id text,
    title text NOT NULL,
    slug text NOT NULL UNIQUE,
    sort_order integer,
    content_json jsonb,
    created_at timestamptz NOT NULL DEFAULT now(),
    updated_at timestamptz NOT NULL DEFAULT now()
)
"""


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return Settings()


@pytest.fixture(scope="session")
def integration_db(test_settings: Settings) -> Generator[str, None, None]:
    conninfo = conninfo_from_settings(test_settings)
    try:
        conn = psycopg.connect(conninfo, connect_timeout=3, autocommit=True)
    except psycopg.Error as e:
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env vars")
    try:
        conn.execute(_CREATE)
        yield TABLE
    finally:
        conn.execute(f"DROP TABLE IF EXISTS public.{TABLE}")
        conn.close()


@pytest.fixture
def clean_table(integration_db: str, test_settings: Settings) -> str:
    with psycopg.connect(conninfo_from_settings(test_settings), autocommit=True) as conn:
        conn.execute(f"DELETE FROM public.{integration_db}")
    return integration_db
