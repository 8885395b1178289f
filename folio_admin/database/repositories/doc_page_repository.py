from dataclasses import replace
from typing import Any

from folio_admin.content.models import image_addresses
from folio_admin.database.base import OrderBy, Row
from folio_admin.database.repositories.table_repository import TableRepository
from folio_admin.entities.models import DocPage
from folio_admin.entities.validation import validate_doc_page

SORT_STEP = 10


class DocPageRepository(TableRepository[DocPage]):
    """Table operations for documentation pages; owns the doc image bucket objects."""

    table = "doc_pages"
    entity_label = "Doc page"
    default_order = (OrderBy("sort_order"),)

    def _validate(self, record: DocPage) -> DocPage:
        return validate_doc_page(record)

    def _to_row(self, record: DocPage) -> dict[str, Any]:
        return record.to_row()

    def _from_row(self, row: Row) -> DocPage:
        return DocPage.from_row(row)

    def _owned_addresses(self, record: DocPage) -> list[str]:
        return image_addresses(record.content)

    async def create(self, record: DocPage) -> str:
        """Insert a page; without an explicit sort_order it goes last in its section."""
        page = self._validate(record)
        if page.sort_order is None:
            page = replace(page, sort_order=await self.next_sort_order(page.section_id))
        return await super().create(page)

    async def list_by_section(self, section_id: str) -> list[DocPage]:
        rows = await self._call(
            self._table_client.select(
                self.table,
                filters={"section_id": section_id},
                order=self.default_order,
            )
        )
        return [self._decode(row) for row in rows]

    async def next_sort_order(self, section_id: str) -> int:
        """Highest sort_order in the section plus one step; first page gets one step."""
        rows = await self._call(
            self._table_client.select(
                self.table,
                columns=["sort_order"],
                filters={"section_id": section_id},
                order=(OrderBy("sort_order", ascending=False),),
                limit=1,
            )
        )
        if not rows or rows[0].get("sort_order") is None:
            return SORT_STEP
        return int(rows[0]["sort_order"]) + SORT_STEP
