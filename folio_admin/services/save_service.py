"""Save orchestration for entity forms.

Order of a save: validate -> reconcile inline images -> resolve the
cover/badge image -> one table write -> clear the session's registry.
Any failure re-raises before the table write (or from it) and leaves the
session's pending images in place so the user can retry. Once an update is
written, a cover or badge it replaced is removed from storage best-effort.
"""

from dataclasses import replace

from folio_admin.database.repositories.certification_repository import CertificationRepository
from folio_admin.database.repositories.doc_page_repository import DocPageRepository
from folio_admin.database.repositories.project_repository import ProjectRepository
from folio_admin.database.repositories.table_repository import TableRepository
from folio_admin.entities.models import Certification, DocPage, Project, SaveResult
from folio_admin.entities.validation import (
    validate_certification,
    validate_doc_page,
    validate_project,
)
from folio_admin.logging.logger import Log
from folio_admin.services.edit_session import EditSession
from folio_admin.storage.base import BaseStorageClient
from folio_admin.uploads.models import ImageFile
from folio_admin.uploads.naming import slugify
from folio_admin.uploads.reconciler import UploadReconciler
from folio_admin.uploads.single_image import resolve_single_image


def name_hint(slug: str | None, title: str | None, fallback: str) -> str:
    """Prefix for stored object names: the slug, else the slugified title, else `fallback`."""
    return slugify(slug or "") or slugify(title or "") or fallback


class ContentSaveService:
    """Creates and updates projects, doc pages and certifications from form state."""

    def __init__(
        self,
        *,
        storage: BaseStorageClient,
        projects: ProjectRepository,
        doc_pages: DocPageRepository,
        certifications: CertificationRepository,
        project_images: UploadReconciler,
        doc_images: UploadReconciler,
        cert_bucket: str,
        default_extension: str = "png",
    ) -> None:
        self._storage = storage
        self._projects = projects
        self._doc_pages = doc_pages
        self._certifications = certifications
        self._project_images = project_images
        self._doc_images = doc_images
        self._cert_bucket = cert_bucket
        self._default_extension = default_extension

    async def create_project(
        self,
        project: Project,
        session: EditSession,
        *,
        cover_file: ImageFile | None = None,
    ) -> str:
        with session.save_in_flight():
            prepared = await self._prepare_project(project, session, cover_file, clear_cover=False)
            project_id = await self._projects.create(prepared)
            session.registry.clear()
        return project_id

    async def update_project(
        self,
        project_id: str,
        project: Project,
        session: EditSession,
        *,
        cover_file: ImageFile | None = None,
        clear_cover: bool = False,
    ) -> SaveResult:
        """Replace the project; a cover it replaces or clears is removed afterwards, best-effort."""
        with session.save_in_flight():
            prepared = await self._prepare_project(project, session, cover_file, clear_cover)
            await self._projects.update(project_id, prepared)
            session.registry.clear()
        result = SaveResult(id=project_id)
        await self._release_superseded(
            self._projects, project.cover_image_url, prepared.cover_image_url, result
        )
        return result

    async def create_doc_page(self, page: DocPage, session: EditSession) -> str:
        with session.save_in_flight():
            prepared = await self._prepare_doc_page(page, session)
            page_id = await self._doc_pages.create(prepared)
            session.registry.clear()
        return page_id

    async def update_doc_page(self, page_id: str, page: DocPage, session: EditSession) -> None:
        with session.save_in_flight():
            prepared = await self._prepare_doc_page(page, session)
            await self._doc_pages.update(page_id, prepared)
            session.registry.clear()

    async def create_certification(
        self,
        cert: Certification,
        session: EditSession,
        *,
        badge_file: ImageFile | None = None,
    ) -> str:
        with session.save_in_flight():
            prepared = await self._prepare_certification(cert, badge_file, clear_badge=False)
            cert_id = await self._certifications.create(prepared)
            session.registry.clear()
        return cert_id

    async def update_certification(
        self,
        cert_id: str,
        cert: Certification,
        session: EditSession,
        *,
        badge_file: ImageFile | None = None,
        clear_badge: bool = False,
    ) -> SaveResult:
        with session.save_in_flight():
            prepared = await self._prepare_certification(cert, badge_file, clear_badge)
            await self._certifications.update(cert_id, prepared)
            session.registry.clear()
        result = SaveResult(id=cert_id)
        await self._release_superseded(
            self._certifications, cert.badge_image_url, prepared.badge_image_url, result
        )
        return result

    @staticmethod
    async def _release_superseded(
        repository: TableRepository,
        previous: str | None,
        current: str | None,
        result: SaveResult,
    ) -> None:
        if previous and previous != current:
            await repository.release_objects([previous], result, action="saved")

    async def _prepare_project(
        self,
        project: Project,
        session: EditSession,
        cover_file: ImageFile | None,
        clear_cover: bool,
    ) -> Project:
        project = validate_project(project)
        hint = name_hint(project.slug, project.title, "project")
        content = await self._project_images.reconcile(project.content, session.registry, hint)
        cover = await resolve_single_image(
            self._storage,
            self._project_images.bucket,
            new_file=cover_file,
            existing_address=project.cover_image_url,
            clear=clear_cover,
            prefix="cover",
            name_hint=hint,
            default_extension=self._default_extension,
        )
        Log.debug(f"Prepared project {hint} for save")
        return replace(project, content=content, cover_image_url=cover)

    async def _prepare_doc_page(self, page: DocPage, session: EditSession) -> DocPage:
        page = validate_doc_page(page)
        hint = name_hint(page.slug, page.title, "doc")
        content = await self._doc_images.reconcile(page.content, session.registry, hint)
        return replace(page, content=content)

    async def _prepare_certification(
        self,
        cert: Certification,
        badge_file: ImageFile | None,
        clear_badge: bool,
    ) -> Certification:
        cert = validate_certification(cert)
        badge = await resolve_single_image(
            self._storage,
            self._cert_bucket,
            new_file=badge_file,
            existing_address=cert.badge_image_url,
            clear=clear_badge,
            prefix="badge",
            name_hint=name_hint(None, cert.name, "cert"),
            default_extension=self._default_extension,
        )
        return replace(cert, badge_image_url=badge)
