from typing import Any

from folio_admin.database.base import OrderBy, Row
from folio_admin.database.repositories.table_repository import TableRepository
from folio_admin.entities.models import Certification
from folio_admin.entities.validation import normalize_category, validate_certification


class CertificationRepository(TableRepository[Certification]):
    """Table operations for the certs table; owns badge images."""

    table = "certs"
    entity_label = "Certification"
    default_order = (OrderBy("updated_at", ascending=False),)

    def _validate(self, record: Certification) -> Certification:
        return validate_certification(record)

    def _to_row(self, record: Certification) -> dict[str, Any]:
        return record.to_row()

    def _from_row(self, row: Row) -> Certification:
        return Certification.from_row(row)

    def _owned_addresses(self, record: Certification) -> list[str]:
        return [record.badge_image_url] if record.badge_image_url else []

    async def list_categories(self) -> list[str]:
        """Categories derived from existing certifications, normalized and sorted."""
        rows = await self._call(self._table_client.select(self.table, columns=["category"]))
        categories = {normalize_category(row.get("category")) for row in rows}
        return sorted(c for c in categories if c)
