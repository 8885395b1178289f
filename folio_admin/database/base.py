from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

Row = dict[str, Any]


@dataclass(frozen=True)
class OrderBy:
    column: str
    ascending: bool = True


class BaseTableClient(ABC):
    """Contract for table API adapters. Filters are column equality maps."""

    @abstractmethod
    async def select(
        self,
        table: str,
        columns: Sequence[str] | None = None,
        filters: Mapping[str, Any] | None = None,
        order: Sequence[OrderBy] = (),
        limit: int | None = None,
    ) -> list[Row]:
        """Return matching rows (all columns when `columns` is None)."""

    @abstractmethod
    async def insert(self, table: str, record: Mapping[str, Any]) -> Row:
        """Insert one row and return it as stored."""

    @abstractmethod
    async def update(
        self,
        table: str,
        filters: Mapping[str, Any],
        patch: Mapping[str, Any],
    ) -> list[Row]:
        """Apply `patch` to matching rows and return the updated rows."""

    @abstractmethod
    async def delete(self, table: str, filters: Mapping[str, Any]) -> list[Row]:
        """Delete matching rows and return them."""
