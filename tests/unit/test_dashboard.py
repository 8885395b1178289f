import asyncio
from datetime import datetime, timezone

import pytest

from folio_admin.database.memory_adapter import InMemoryTableAdapter
from folio_admin.entities.exceptions import PersistenceError
from folio_admin.services.dashboard import DashboardService


def _tables() -> dict:
    return {
        "projects": [
            {"id": "p1", "title": "Site", "status": "done", "updated_at": "2024-05-03T10:00:00+00:00"},
            {"id": "p2", "title": "CLI", "status": "draft", "updated_at": "2024-05-01T10:00:00+00:00"},
        ],
        "doc_sections": [
            {"id": "s1", "name": "Guides", "slug": "guides", "sort_order": 10},
            {"id": "s2", "name": "API", "slug": "api", "sort_order": 20},
        ],
        "doc_pages": [
            {"id": "d1", "title": "Intro", "status": "published", "section_id": "s1", "updated_at": "2024-05-04T10:00:00+00:00"},
            {"id": "d2", "title": "Setup", "status": "published", "section_id": "s1", "updated_at": "2024-04-01T10:00:00+00:00"},
            {"id": "d3", "title": "Draft", "status": "draft", "section_id": "s2", "updated_at": "2024-04-02T10:00:00+00:00"},
        ],
        "certs": [
            {
                "id": "c1",
                "name": "SAA",
                "vendor": "AWS",
                "status": "passed",
                "updated_at": datetime(2024, 5, 2, 10, tzinfo=timezone.utc),
            },
            {"id": "c2", "name": "CKA", "vendor": "CNCF", "status": "planned", "updated_at": None, "created_at": "2024-01-01T00:00:00+00:00"},
        ],
    }


class TestDashboardService:
    def test_counts(self) -> None:
        summary = asyncio.run(DashboardService(InMemoryTableAdapter(_tables())).load())
        assert summary.total_projects == 2
        assert summary.docs_published == 2
        assert summary.certs_passed == 1
        assert summary.project_status_counts == {"done": 1, "draft": 1}
        assert summary.cert_status_counts == {"passed": 1, "planned": 1}

    def test_section_coverage_in_section_order(self) -> None:
        summary = asyncio.run(DashboardService(InMemoryTableAdapter(_tables())).load())
        assert [(c.slug, c.published_count) for c in summary.section_coverage] == [
            ("guides", 2),
            ("api", 0),
        ]

    def test_activity_newest_first_with_limit(self) -> None:
        summary = asyncio.run(DashboardService(InMemoryTableAdapter(_tables()), activity_limit=3).load())
        assert [(a.kind, a.id) for a in summary.activities] == [
            ("doc", "d1"),
            ("project", "p1"),
            ("cert", "c1"),
        ]
        assert summary.activities[2].subtitle == "Cert • AWS • passed"
        assert summary.activities[2].at == "2024-05-02T10:00:00+00:00"

    def test_activity_falls_back_to_created_at(self) -> None:
        summary = asyncio.run(DashboardService(InMemoryTableAdapter(_tables())).load())
        cka = next(a for a in summary.activities if a.id == "c2")
        assert cka.at == "2024-01-01T00:00:00+00:00"
        assert summary.activities[-1].id == "c2"

    def test_empty_backend(self) -> None:
        summary = asyncio.run(DashboardService(InMemoryTableAdapter()).load())
        assert summary.total_projects == 0
        assert summary.activities == []

    def test_table_failure_raises_persistence_error(self) -> None:
        table = InMemoryTableAdapter(_tables())
        table.fail_with = "JWT expired"
        with pytest.raises(PersistenceError, match="JWT expired"):
            asyncio.run(DashboardService(table).load())
