from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from folio_admin.content.codec import parse_stored, serialize
from folio_admin.content.models import DocumentNode


def _text(value: Any) -> str | None:
    """Dates, timestamps and uuids come back typed from Postgres; records keep strings."""
    if value is None:
        return None
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


class ProjectStatus(str, Enum):
    DRAFT = "draft"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    ARCHIVED = "archived"


class DocStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class CertKind(str, Enum):
    EXAM = "exam"
    TRAINING = "training"
    OTHER = "other"


class CertStatus(str, Enum):
    PLANNED = "planned"
    IN_PROGRESS = "in_progress"
    PASSED = "passed"
    EXPIRED = "expired"


@dataclass
class Project:
    """Represents a row from the projects table."""

    title: str
    slug: str
    status: ProjectStatus = ProjectStatus.DRAFT
    description: str | None = None
    excerpt: str | None = None
    tech_stack: list[str] = field(default_factory=list)
    key_features: list[str] = field(default_factory=list)
    category: str | None = None
    cover_image_url: str | None = None
    demo_url: str | None = None
    github_url: str | None = None
    content: DocumentNode | None = None
    started_at: str | None = None
    finished_at: str | None = None
    published_at: str | None = None
    id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    def to_row(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "slug": self.slug,
            "status": ProjectStatus(self.status).value,
            "description": self.description,
            "excerpt": self.excerpt,
            "tech_stack": list(self.tech_stack) or None,
            "key_features": list(self.key_features) or None,
            "category": self.category,
            "cover_image_url": self.cover_image_url,
            "demo_url": self.demo_url,
            "github_url": self.github_url,
            "content_json": serialize(self.content),
            "started_at": self.started_at,
            "finished_at": self.finished_at,
            "published_at": self.published_at,
        }

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Project":
        return cls(
            id=_text(row.get("id")),
            title=row["title"],
            slug=row["slug"],
            status=ProjectStatus(row.get("status") or ProjectStatus.DRAFT.value),
            description=row.get("description"),
            excerpt=row.get("excerpt"),
            tech_stack=list(row.get("tech_stack") or []),
            key_features=list(row.get("key_features") or []),
            category=row.get("category"),
            cover_image_url=row.get("cover_image_url"),
            demo_url=row.get("demo_url"),
            github_url=row.get("github_url"),
            content=parse_stored(row.get("content_json")),
            started_at=_text(row.get("started_at")),
            finished_at=_text(row.get("finished_at")),
            published_at=_text(row.get("published_at")),
            created_at=_text(row.get("created_at")),
            updated_at=_text(row.get("updated_at")),
        )


@dataclass
class DocSection:
    """Represents a row from the doc_sections table."""

    name: str
    slug: str
    description: str | None = None
    sort_order: int | None = None
    id: str | None = None

    def to_row(self) -> dict[str, Any]:
        row: dict[str, Any] = {
            "name": self.name,
            "slug": self.slug,
            "description": self.description,
        }
        if self.sort_order is not None:
            row["sort_order"] = self.sort_order
        return row

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "DocSection":
        return cls(
            id=_text(row.get("id")),
            name=row["name"],
            slug=row["slug"],
            description=row.get("description"),
            sort_order=row.get("sort_order"),
        )


@dataclass
class DocPage:
    """Represents a row from the doc_pages table."""

    section_id: str
    title: str
    slug: str
    status: DocStatus = DocStatus.DRAFT
    excerpt: str | None = None
    content: DocumentNode | None = None
    sort_order: int | None = None
    id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    def to_row(self) -> dict[str, Any]:
        row: dict[str, Any] = {
            "section_id": self.section_id,
            "title": self.title,
            "slug": self.slug,
            "status": DocStatus(self.status).value,
            "excerpt": self.excerpt,
            "content_json": serialize(self.content),
        }
        if self.sort_order is not None:
            row["sort_order"] = self.sort_order
        return row

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "DocPage":
        return cls(
            id=_text(row.get("id")),
            section_id=_text(row.get("section_id")) or "",
            title=row["title"],
            slug=row["slug"],
            status=DocStatus(row.get("status") or DocStatus.DRAFT.value),
            excerpt=row.get("excerpt"),
            content=parse_stored(row.get("content_json")),
            sort_order=row.get("sort_order"),
            created_at=_text(row.get("created_at")),
            updated_at=_text(row.get("updated_at")),
        )


@dataclass
class Certification:
    """Represents a row from the certs table."""

    name: str
    vendor: str
    cert_type: CertKind = CertKind.EXAM
    status: CertStatus = CertStatus.PLANNED
    category: str | None = None
    level: str | None = None
    issue_date: str | None = None
    expiry_date: str | None = None
    credential_id: str | None = None
    credential_url: str | None = None
    score: float | None = None
    highlight: bool = False
    notes: str | None = None
    badge_image_url: str | None = None
    id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    def to_row(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "vendor": self.vendor,
            "cert_type": CertKind(self.cert_type).value,
            "status": CertStatus(self.status).value,
            "category": self.category,
            "level": self.level,
            "issue_date": self.issue_date,
            "expiry_date": self.expiry_date,
            "credential_id": self.credential_id,
            "credential_url": self.credential_url,
            "score": self.score,
            "highlight": self.highlight,
            "notes": self.notes,
            "badge_image_url": self.badge_image_url,
        }

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Certification":
        return cls(
            id=_text(row.get("id")),
            name=row["name"],
            vendor=row["vendor"],
            cert_type=CertKind(row.get("cert_type") or CertKind.EXAM.value),
            status=CertStatus(row.get("status") or CertStatus.PLANNED.value),
            category=row.get("category"),
            level=row.get("level"),
            issue_date=_text(row.get("issue_date")),
            expiry_date=_text(row.get("expiry_date")),
            credential_id=row.get("credential_id"),
            credential_url=row.get("credential_url"),
            score=float(row["score"]) if row.get("score") is not None else None,
            highlight=bool(row.get("highlight")),
            notes=row.get("notes"),
            badge_image_url=row.get("badge_image_url"),
            created_at=_text(row.get("created_at")),
            updated_at=_text(row.get("updated_at")),
        )


@dataclass
class WriteResult:
    id: str
    removed_objects: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def clean(self) -> bool:
        return not self.warnings


@dataclass
class DeleteResult(WriteResult):
    """Outcome of a delete: the row is gone; `warnings` lists storage cleanup failures."""


@dataclass
class SaveResult(WriteResult):
    """Outcome of a save: the row is written; `removed_objects` are images it replaced or cleared."""
