"""Validates entity metadata before any upload or table write."""

import re
from dataclasses import replace
from datetime import date
from enum import Enum
from typing import TypeVar
from urllib.parse import urlparse

from folio_admin.entities.exceptions import ValidationError
from folio_admin.entities.models import (
    CertKind,
    Certification,
    CertStatus,
    DocPage,
    DocSection,
    DocStatus,
    Project,
    ProjectStatus,
)
from folio_admin.uploads.naming import slugify

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
_MAX_SCORE = 1000.0

E = TypeVar("E", bound=Enum)


def validate_project(project: Project) -> Project:
    """Return a normalized copy of `project`.

    Raises:
        ValidationError: on any validation failure.
    """
    return replace(
        project,
        title=_require_text(project.title, "Title"),
        slug=_require_slug(project.slug),
        status=_require_enum(ProjectStatus, project.status, "status"),
        description=_optional_text(project.description),
        excerpt=_optional_text(project.excerpt),
        tech_stack=_clean_list(project.tech_stack),
        key_features=_clean_list(project.key_features),
        category=normalize_category(project.category),
        cover_image_url=_optional_url(project.cover_image_url, "cover_image_url"),
        demo_url=_optional_url(project.demo_url, "demo_url"),
        github_url=_optional_url(project.github_url, "github_url"),
        started_at=_optional_date(project.started_at, "started_at"),
        finished_at=_optional_date(project.finished_at, "finished_at"),
        published_at=project.published_at or None,
    )


def validate_doc_section(section: DocSection) -> DocSection:
    name = _require_text(section.name, "Name")
    slug = section.slug.strip() if section.slug else slugify(name)
    return replace(
        section,
        name=name,
        slug=_require_slug(slug),
        description=_optional_text(section.description),
    )


def validate_doc_page(page: DocPage) -> DocPage:
    if not page.section_id or not page.section_id.strip():
        raise ValidationError("Section is required")
    return replace(
        page,
        section_id=page.section_id.strip(),
        title=_require_text(page.title, "Title"),
        slug=_require_slug(page.slug),
        status=_require_enum(DocStatus, page.status, "status"),
        excerpt=_optional_text(page.excerpt),
    )


def validate_certification(cert: Certification) -> Certification:
    name = _require_text(cert.name, "Certification name")
    vendor = _require_text(cert.vendor, "Vendor / organization")
    issue_date = _optional_date(cert.issue_date, "issue_date")
    expiry_date = _optional_date(cert.expiry_date, "expiry_date")
    if issue_date and expiry_date and expiry_date[:10] < issue_date[:10]:
        raise ValidationError("Expiry date cannot be before issue date")
    if cert.score is not None and not 0 <= cert.score <= _MAX_SCORE:
        raise ValidationError(f"Score must be between 0 and {_MAX_SCORE:g}")
    return replace(
        cert,
        name=name,
        vendor=vendor,
        cert_type=_require_enum(CertKind, cert.cert_type, "cert_type"),
        status=_require_enum(CertStatus, cert.status, "status"),
        category=normalize_category(cert.category),
        level=_optional_text(cert.level),
        issue_date=issue_date,
        expiry_date=expiry_date,
        credential_id=_optional_text(cert.credential_id),
        credential_url=_optional_url(cert.credential_url, "credential_url"),
        notes=_optional_text(cert.notes),
    )


def normalize_category(value: str | None) -> str | None:
    """Categories are free-form tags: stored slugified, None when blank."""
    if value is None:
        return None
    return slugify(value) or None


def _require_text(value: str | None, label: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{label} is required")
    return value.strip()


def _require_slug(value: str | None) -> str:
    slug = _require_text(value, "Slug")
    if not SLUG_PATTERN.match(slug):
        raise ValidationError(
            "Slug: only lowercase letters, numbers, and hyphens are allowed"
        )
    return slug


def _require_enum(enum_cls: type[E], value: object, label: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = [member.value for member in enum_cls]
        raise ValidationError(f"'{label}' must be one of {allowed}, got {value!r}") from None


def _optional_text(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


def _optional_url(value: str | None, label: str) -> str | None:
    text = _optional_text(value)
    if text is None:
        return None
    parsed = urlparse(text)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValidationError(f"'{label}' must be an http(s) URL")
    return text


def _optional_date(value: str | None, label: str) -> str | None:
    text = _optional_text(value)
    if text is None:
        return None
    try:
        date.fromisoformat(text[:10])
    except ValueError:
        raise ValidationError(f"'{label}' must be an ISO date (YYYY-MM-DD)") from None
    return text


def _clean_list(values: list[str]) -> list[str]:
    return [item.strip() for item in values if item and item.strip()]
