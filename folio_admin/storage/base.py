from abc import ABC, abstractmethod


class BaseStorageClient(ABC):
    """Contract for object storage adapters (bucket + object name addressing)."""

    @abstractmethod
    async def upload(
        self,
        bucket: str,
        object_name: str,
        content: bytes,
        *,
        content_type: str,
        overwrite: bool = True,
    ) -> str:
        """Store `content` under `object_name` and return the stored path.

        Raises:
            StorageError: if the object could not be stored.
        """

    @abstractmethod
    def get_public_address(self, bucket: str, stored_path: str) -> str:
        """Return the publicly resolvable URL of a stored object."""

    @abstractmethod
    async def delete(self, bucket: str, paths: list[str]) -> None:
        """Remove stored objects.

        Raises:
            StorageError: if the removal failed.
        """

    @abstractmethod
    def path_from_public_address(self, bucket: str, address: str) -> str | None:
        """Inverse of `get_public_address`; None for addresses outside the bucket."""
