import asyncio
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from folio_admin.database.base import BaseTableClient, OrderBy, Row
from folio_admin.database.exceptions import TableError
from folio_admin.entities.exceptions import PersistenceError
from folio_admin.entities.models import CertStatus, DocStatus

_PER_KIND_ACTIVITY = 10
_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class SectionCoverage:
    section_id: str
    name: str
    slug: str
    published_count: int


@dataclass(frozen=True)
class ActivityItem:
    id: str
    kind: str  # "project", "doc" or "cert"
    title: str
    subtitle: str
    at: str


@dataclass
class DashboardSummary:
    total_projects: int = 0
    docs_published: int = 0
    certs_passed: int = 0
    project_status_counts: dict[str, int] = field(default_factory=dict)
    cert_status_counts: dict[str, int] = field(default_factory=dict)
    section_coverage: list[SectionCoverage] = field(default_factory=list)
    activities: list[ActivityItem] = field(default_factory=list)


def _timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    try:
        parsed = datetime.fromisoformat(str(value))
    except ValueError:
        return _EPOCH
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


class DashboardService:
    """Aggregates counts, docs coverage and recent activity across all entities."""

    def __init__(self, table_client: BaseTableClient, activity_limit: int = 12) -> None:
        self._table_client = table_client
        self._activity_limit = activity_limit

    async def load(self) -> DashboardSummary:
        """Raises PersistenceError if any of the underlying reads fails."""
        recent_first = (OrderBy("updated_at", ascending=False),)
        try:
            projects, docs, sections, certs = await asyncio.gather(
                self._table_client.select(
                    "projects",
                    columns=["id", "title", "status", "updated_at", "created_at"],
                    order=recent_first,
                ),
                self._table_client.select(
                    "doc_pages",
                    columns=["id", "title", "status", "section_id", "updated_at", "created_at"],
                    order=recent_first,
                ),
                self._table_client.select(
                    "doc_sections",
                    columns=["id", "name", "slug"],
                    order=(OrderBy("sort_order"),),
                ),
                self._table_client.select(
                    "certs",
                    columns=["id", "name", "vendor", "status", "updated_at", "created_at"],
                    order=recent_first,
                ),
            )
        except TableError as exc:
            raise PersistenceError(str(exc)) from exc

        published = [d for d in docs if d.get("status") == DocStatus.PUBLISHED.value]
        return DashboardSummary(
            total_projects=len(projects),
            docs_published=len(published),
            certs_passed=sum(1 for c in certs if c.get("status") == CertStatus.PASSED.value),
            project_status_counts=dict(Counter(str(p.get("status")) for p in projects)),
            cert_status_counts=dict(Counter(str(c.get("status")) for c in certs)),
            section_coverage=self._coverage(sections, published),
            activities=self._activities(projects, docs, certs),
        )

    @staticmethod
    def _coverage(sections: list[Row], published: list[Row]) -> list[SectionCoverage]:
        per_section = Counter(str(d.get("section_id")) for d in published)
        return [
            SectionCoverage(
                section_id=str(s["id"]),
                name=s["name"],
                slug=s["slug"],
                published_count=per_section.get(str(s["id"]), 0),
            )
            for s in sections
        ]

    def _activities(
        self,
        projects: list[Row],
        docs: list[Row],
        certs: list[Row],
    ) -> list[ActivityItem]:
        items = [
            self._activity(p, "project", p["title"], f"Project • {p.get('status')}")
            for p in projects[:_PER_KIND_ACTIVITY]
        ]
        items += [
            self._activity(d, "doc", d["title"], f"Doc • {d.get('status')}")
            for d in docs[:_PER_KIND_ACTIVITY]
        ]
        items += [
            self._activity(c, "cert", c["name"], f"Cert • {c.get('vendor')} • {c.get('status')}")
            for c in certs[:_PER_KIND_ACTIVITY]
        ]
        items.sort(key=lambda item: _timestamp(item.at), reverse=True)
        return items[: self._activity_limit]

    @staticmethod
    def _activity(row: Row, kind: str, title: str, subtitle: str) -> ActivityItem:
        at = row.get("updated_at") or row.get("created_at") or ""
        at_text = at.isoformat() if isinstance(at, datetime) else str(at)
        return ActivityItem(id=str(row["id"]), kind=kind, title=title, subtitle=subtitle, at=at_text)
