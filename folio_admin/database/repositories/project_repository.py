from typing import Any

from folio_admin.content.models import image_addresses
from folio_admin.database.base import OrderBy, Row
from folio_admin.database.repositories.table_repository import TableRepository
from folio_admin.entities.models import Project
from folio_admin.entities.validation import normalize_category, validate_project


class ProjectRepository(TableRepository[Project]):
    """Table operations for portfolio projects; owns the project image bucket objects."""

    table = "projects"
    entity_label = "Project"
    default_order = (OrderBy("updated_at", ascending=False),)

    def _validate(self, record: Project) -> Project:
        return validate_project(record)

    def _to_row(self, record: Project) -> dict[str, Any]:
        return record.to_row()

    def _from_row(self, row: Row) -> Project:
        return Project.from_row(row)

    def _owned_addresses(self, record: Project) -> list[str]:
        addresses = image_addresses(record.content)
        if record.cover_image_url:
            addresses.append(record.cover_image_url)
        return addresses

    async def list_categories(self) -> list[str]:
        """Distinct categories in use, normalized and sorted."""
        rows = await self._call(self._table_client.select(self.table, columns=["category"]))
        categories = {normalize_category(row.get("category")) for row in rows}
        return sorted(c for c in categories if c)
