from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, TypeVar

from folio_admin.content.exceptions import ContentError
from folio_admin.database.base import BaseTableClient, OrderBy, Row
from folio_admin.database.exceptions import TableError
from folio_admin.entities.exceptions import NotFoundError, PersistenceError
from folio_admin.entities.models import DeleteResult, WriteResult
from folio_admin.logging.logger import Log
from folio_admin.storage.base import BaseStorageClient
from folio_admin.storage.exceptions import StorageError

R = TypeVar("R")


class TableRepository(ABC, Generic[R]):
    """Create / full-replace / delete operations for one entity table.

    Table API failures surface as PersistenceError with the API message
    verbatim. Owned storage objects are removed best-effort after a delete
    or once a save supersedes them.
    """

    table: ClassVar[str]
    entity_label: ClassVar[str]
    default_order: ClassVar[tuple[OrderBy, ...]] = ()

    def __init__(
        self,
        table_client: BaseTableClient,
        storage: BaseStorageClient | None = None,
        bucket: str | None = None,
    ) -> None:
        self._table_client = table_client
        self._storage = storage
        self._bucket = bucket

    @abstractmethod
    def _validate(self, record: R) -> R:
        """Return a normalized record or raise ValidationError."""

    @abstractmethod
    def _to_row(self, record: R) -> dict[str, Any]:
        ...

    @abstractmethod
    def _from_row(self, row: Row) -> R:
        ...

    def _owned_addresses(self, record: R) -> list[str]:
        """Public addresses of storage objects owned by `record`."""
        return []

    async def find_by_id(self, record_id: str) -> R:
        """Find a record by ID.

        Raises:
            NotFoundError: if no record with this ID exists.
            PersistenceError: if the table API call fails.
        """
        return self._decode(await self._find_row(record_id))

    async def list_all(self) -> list[R]:
        rows = await self._call(
            self._table_client.select(self.table, order=self.default_order)
        )
        return [self._decode(row) for row in rows]

    async def create(self, record: R) -> str:
        """Insert `record` and return its new ID.

        Raises:
            ValidationError: if the record is invalid (no write is attempted).
            PersistenceError: if the insert fails.
        """
        row = self._to_row(self._validate(record))
        stored = await self._call(self._table_client.insert(self.table, row))
        record_id = str(stored["id"])
        Log.info(f"Created {self.entity_label} {record_id}", table=self.table)
        return record_id

    async def update(self, record_id: str, record: R) -> None:
        """Replace the whole row of `record_id` with `record`.

        Raises:
            ValidationError: if the record is invalid (no write is attempted).
            NotFoundError: if no record with this ID exists.
            PersistenceError: if the update fails.
        """
        row = self._to_row(self._validate(record))
        updated = await self._call(
            self._table_client.update(self.table, {"id": record_id}, row)
        )
        if not updated:
            raise NotFoundError(f"{self.entity_label} {record_id} not found")
        Log.info(f"Updated {self.entity_label} {record_id}", table=self.table)

    async def delete(self, record_id: str) -> DeleteResult:
        """Delete the row, then remove its owned storage objects best-effort.

        Raises:
            NotFoundError: if no record with this ID exists.
            PersistenceError: if the delete itself fails.
        """
        row = await self._find_row(record_id)
        result = DeleteResult(id=record_id)
        try:
            addresses = self._owned_addresses(self._from_row(row))
        except ContentError as exc:
            # the row still goes; its images cannot be located
            addresses = []
            warning = f"{self.entity_label} {record_id} has unreadable content, images were not removed: {exc}"
            Log.warning(warning, table=self.table)
            result.warnings.append(warning)
        deleted = await self._call(self._table_client.delete(self.table, {"id": record_id}))
        if not deleted:
            raise NotFoundError(f"{self.entity_label} {record_id} not found")
        Log.info(f"Deleted {self.entity_label} {record_id}", table=self.table)

        await self.release_objects(addresses, result, action="deleted")
        return result

    async def release_objects(
        self,
        addresses: list[str],
        result: WriteResult,
        action: str,
    ) -> None:
        """Remove storage objects in this repository's bucket, best-effort.

        Addresses outside the bucket are ignored. A storage failure is logged and
        appended to `result.warnings`, never raised.
        """
        if self._storage is None or self._bucket is None or not addresses:
            return
        paths = []
        for address in dict.fromkeys(addresses):
            path = self._storage.path_from_public_address(self._bucket, address)
            if path is not None:
                paths.append(path)
        if not paths:
            return
        try:
            await self._storage.delete(self._bucket, paths)
        except StorageError as exc:
            warning = f"{self.entity_label} {result.id} {action}, but its images could not be removed: {exc}"
            Log.warning(warning, bucket=self._bucket, paths=len(paths))
            result.warnings.append(warning)
            return
        result.removed_objects.extend(paths)

    async def _find_row(self, record_id: str) -> Row:
        rows = await self._call(
            self._table_client.select(self.table, filters={"id": record_id}, limit=1)
        )
        if not rows:
            raise NotFoundError(f"{self.entity_label} {record_id} not found")
        return rows[0]

    def _decode(self, row: Row) -> R:
        try:
            return self._from_row(row)
        except ContentError as exc:
            raise PersistenceError(
                f"{self.entity_label} {row.get('id')} has unreadable content: {exc}"
            ) from exc

    @staticmethod
    async def _call(operation: Any) -> Any:
        try:
            return await operation
        except TableError as exc:
            raise PersistenceError(str(exc)) from exc
