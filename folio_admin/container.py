from dataclasses import dataclass

import httpx

from folio_admin.auth.base import BaseAuthClient
from folio_admin.auth.factory import AuthClientFactory
from folio_admin.auth.guard import SessionGuard
from folio_admin.config.settings import Settings
from folio_admin.database.base import BaseTableClient
from folio_admin.database.connection import PostgresConnection
from folio_admin.database.factory import TableClientFactory
from folio_admin.database.repositories.certification_repository import CertificationRepository
from folio_admin.database.repositories.doc_page_repository import DocPageRepository
from folio_admin.database.repositories.doc_section_repository import DocSectionRepository
from folio_admin.database.repositories.project_repository import ProjectRepository
from folio_admin.services.dashboard import DashboardService
from folio_admin.services.save_service import ContentSaveService
from folio_admin.storage.base import BaseStorageClient
from folio_admin.storage.factory import StorageClientFactory
from folio_admin.uploads.reconciler import UploadReconciler


@dataclass
class AdminContainer:
    """Explicitly wired clients, repositories and services for one process."""

    settings: Settings
    http_client: httpx.AsyncClient
    pg: PostgresConnection | None
    table_client: BaseTableClient
    storage: BaseStorageClient
    auth: BaseAuthClient
    guard: SessionGuard
    projects: ProjectRepository
    doc_sections: DocSectionRepository
    doc_pages: DocPageRepository
    certifications: CertificationRepository
    save_service: ContentSaveService
    dashboard: DashboardService

    async def aclose(self) -> None:
        await self.http_client.aclose()
        if self.pg is not None:
            await self.pg.close()


async def build_container(settings: Settings) -> AdminContainer:
    """Build every dependency from settings; the caller owns `aclose()`."""
    http_client = httpx.AsyncClient(timeout=settings.http_timeout_seconds)
    pg: PostgresConnection | None = None
    if settings.table_backend.lower() == "postgres":
        pg = PostgresConnection.from_settings(settings)
        await pg.open()

    table_client = TableClientFactory.create(settings, http_client, pg)
    storage = StorageClientFactory.create(settings, http_client)
    auth = AuthClientFactory.create(settings, http_client)

    projects = ProjectRepository(table_client, storage, settings.project_images_bucket)
    doc_pages = DocPageRepository(table_client, storage, settings.doc_images_bucket)
    doc_sections = DocSectionRepository(table_client, storage, settings.doc_images_bucket)
    certifications = CertificationRepository(table_client, storage, settings.cert_images_bucket)

    ext = settings.default_image_extension
    save_service = ContentSaveService(
        storage=storage,
        projects=projects,
        doc_pages=doc_pages,
        certifications=certifications,
        project_images=UploadReconciler(storage, settings.project_images_bucket, ext),
        doc_images=UploadReconciler(storage, settings.doc_images_bucket, ext),
        cert_bucket=settings.cert_images_bucket,
        default_extension=ext,
    )
    return AdminContainer(
        settings=settings,
        http_client=http_client,
        pg=pg,
        table_client=table_client,
        storage=storage,
        auth=auth,
        guard=SessionGuard(auth, settings.admin_email),
        projects=projects,
        doc_sections=doc_sections,
        doc_pages=doc_pages,
        certifications=certifications,
        save_service=save_service,
        dashboard=DashboardService(table_client, settings.dashboard_activity_limit),
    )
