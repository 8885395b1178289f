import pytest

from folio_admin.entities.exceptions import ValidationError
from folio_admin.entities.models import (
    Certification,
    CertStatus,
    DocPage,
    DocSection,
    Project,
    ProjectStatus,
)
from folio_admin.entities.validation import (
    normalize_category,
    validate_certification,
    validate_doc_page,
    validate_doc_section,
    validate_project,
)


def _make_project(**overrides: object) -> Project:
    fields: dict = {"title": "Portfolio Site", "slug": "portfolio-site"}
    fields.update(overrides)
    return Project(**fields)


def _make_cert(**overrides: object) -> Certification:
    fields: dict = {"name": "Solutions Architect", "vendor": "AWS"}
    fields.update(overrides)
    return Certification(**fields)


class TestValidateProject:
    def test_normalizes_fields(self) -> None:
        project = validate_project(
            _make_project(
                title="  Portfolio Site ",
                status="in_progress",
                tech_stack=["Python", " ", "  httpx "],
                category="Web Apps",
                excerpt="   ",
            )
        )
        assert project.title == "Portfolio Site"
        assert project.status is ProjectStatus.IN_PROGRESS
        assert project.tech_stack == ["Python", "httpx"]
        assert project.category == "web-apps"
        assert project.excerpt is None

    def test_missing_title(self) -> None:
        with pytest.raises(ValidationError, match="Title is required"):
            validate_project(_make_project(title="  "))

    def test_bad_slug(self) -> None:
        with pytest.raises(ValidationError, match="only lowercase letters"):
            validate_project(_make_project(slug="Portfolio Site"))

    def test_unknown_status(self) -> None:
        with pytest.raises(ValidationError, match="'status' must be one of"):
            validate_project(_make_project(status="shipped"))

    def test_bad_url(self) -> None:
        with pytest.raises(ValidationError, match="'github_url' must be an http"):
            validate_project(_make_project(github_url="github.com/me/site"))

    def test_bad_date(self) -> None:
        with pytest.raises(ValidationError, match="'started_at' must be an ISO date"):
            validate_project(_make_project(started_at="March 2024"))

    def test_input_is_not_mutated(self) -> None:
        original = _make_project(title=" Padded ")
        validate_project(original)
        assert original.title == " Padded "


class TestValidateDocs:
    def test_section_slug_derived_from_name(self) -> None:
        section = validate_doc_section(DocSection(name="Getting Started", slug=""))
        assert section.slug == "getting-started"

    def test_section_requires_name(self) -> None:
        with pytest.raises(ValidationError, match="Name is required"):
            validate_doc_section(DocSection(name="", slug="x"))

    def test_page_requires_section(self) -> None:
        with pytest.raises(ValidationError, match="Section is required"):
            validate_doc_page(DocPage(section_id=" ", title="Intro", slug="intro"))

    def test_page_is_normalized(self) -> None:
        page = validate_doc_page(DocPage(section_id="s1", title=" Intro ", slug="intro", status="published"))
        assert page.title == "Intro"
        assert page.status.value == "published"


class TestValidateCertification:
    def test_requires_name_and_vendor(self) -> None:
        with pytest.raises(ValidationError, match="Certification name is required"):
            validate_certification(_make_cert(name=""))
        with pytest.raises(ValidationError, match="Vendor / organization is required"):
            validate_certification(_make_cert(vendor=" "))

    def test_expiry_before_issue(self) -> None:
        with pytest.raises(ValidationError, match="Expiry date cannot be before issue date"):
            validate_certification(_make_cert(issue_date="2024-05-01", expiry_date="2023-05-01"))

    def test_same_day_expiry_allowed(self) -> None:
        cert = validate_certification(
            _make_cert(issue_date="2024-05-01", expiry_date="2024-05-01T00:00:00+00:00")
        )
        assert cert.expiry_date == "2024-05-01T00:00:00+00:00"

    def test_score_range(self) -> None:
        with pytest.raises(ValidationError, match="Score must be between 0 and 1000"):
            validate_certification(_make_cert(score=1200))

    def test_status_coerced(self) -> None:
        assert validate_certification(_make_cert(status="passed")).status is CertStatus.PASSED


class TestNormalizeCategory:
    def test_free_form_tag_is_slugified(self) -> None:
        assert normalize_category("Cloud & DevOps") == "cloud-devops"

    def test_blank_is_none(self) -> None:
        assert normalize_category("   ") is None
        assert normalize_category(None) is None
