from dataclasses import replace
from typing import Any

from folio_admin.content.codec import parse_stored
from folio_admin.content.exceptions import ContentError
from folio_admin.content.models import image_addresses
from folio_admin.database.base import OrderBy, Row
from folio_admin.database.repositories.doc_page_repository import SORT_STEP
from folio_admin.database.repositories.table_repository import TableRepository
from folio_admin.entities.exceptions import NotFoundError
from folio_admin.entities.models import DeleteResult, DocSection
from folio_admin.entities.validation import validate_doc_section
from folio_admin.logging.logger import Log


class DocSectionRepository(TableRepository[DocSection]):
    """Table operations for documentation sections.

    Deleting a section deletes its pages too; images embedded in those pages
    live in the doc image bucket and are removed best-effort.
    """

    table = "doc_sections"
    entity_label = "Doc section"
    default_order = (OrderBy("sort_order"),)
    pages_table = "doc_pages"

    def _validate(self, record: DocSection) -> DocSection:
        return validate_doc_section(record)

    def _to_row(self, record: DocSection) -> dict[str, Any]:
        return record.to_row()

    def _from_row(self, row: Row) -> DocSection:
        return DocSection.from_row(row)

    async def create(self, record: DocSection) -> str:
        """Insert a section; without a sort_order it goes after the last one."""
        section = self._validate(record)
        if section.sort_order is None:
            section = replace(section, sort_order=await self._next_sort_order())
        return await super().create(section)

    async def delete(self, record_id: str) -> DeleteResult:
        await self.find_by_id(record_id)
        result = DeleteResult(id=record_id)
        pages = await self._call(
            self._table_client.select(
                self.pages_table,
                columns=["id", "content_json"],
                filters={"section_id": record_id},
            )
        )
        addresses: list[str] = []
        for page in pages:
            try:
                addresses.extend(image_addresses(parse_stored(page.get("content_json"))))
            except ContentError as exc:
                warning = f"Doc page {page.get('id')} has unreadable content, images were not removed: {exc}"
                Log.warning(warning, table=self.pages_table)
                result.warnings.append(warning)

        await self._call(self._table_client.delete(self.pages_table, {"section_id": record_id}))
        deleted = await self._call(self._table_client.delete(self.table, {"id": record_id}))
        if not deleted:
            raise NotFoundError(f"{self.entity_label} {record_id} not found")
        Log.info(
            f"Deleted {self.entity_label} {record_id} with {len(pages)} page(s)",
            table=self.table,
        )

        await self.release_objects(addresses, result, action="deleted")
        return result

    async def _next_sort_order(self) -> int:
        rows = await self._call(
            self._table_client.select(
                self.table,
                columns=["sort_order"],
                order=(OrderBy("sort_order", ascending=False),),
                limit=1,
            )
        )
        if not rows or rows[0].get("sort_order") is None:
            return SORT_STEP
        return int(rows[0]["sort_order"]) + SORT_STEP
