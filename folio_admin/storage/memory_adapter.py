"""In-memory object storage adapter.

No network calls. Useful for local development and tests; behaves like the
hosted storage API for naming, overwrite and public addressing.
"""

from dataclasses import dataclass, field

from folio_admin.storage.base import BaseStorageClient
from folio_admin.storage.exceptions import StorageError


@dataclass(frozen=True)
class StoredObject:
    content: bytes
    content_type: str


@dataclass
class UploadCall:
    bucket: str
    object_name: str
    overwrite: bool


class InMemoryStorageAdapter(BaseStorageClient):
    """Keeps objects in a dict keyed by (bucket, path) and records every upload."""

    def __init__(self, public_base_url: str = "http://localhost/storage") -> None:
        self._public_base_url = public_base_url.rstrip("/")
        self.objects: dict[tuple[str, str], StoredObject] = {}
        self.uploads: list[UploadCall] = []
        self.fail_uploads: dict[str, str] = {}
        self.fail_deletes: str | None = None

    async def upload(
        self,
        bucket: str,
        object_name: str,
        content: bytes,
        *,
        content_type: str,
        overwrite: bool = True,
    ) -> str:
        self.uploads.append(UploadCall(bucket, object_name, overwrite))
        if object_name in self.fail_uploads:
            raise StorageError(self.fail_uploads[object_name])
        key = (bucket, object_name)
        if key in self.objects and not overwrite:
            raise StorageError(f"The resource already exists: {object_name}")
        self.objects[key] = StoredObject(content=content, content_type=content_type)
        return object_name

    def get_public_address(self, bucket: str, stored_path: str) -> str:
        return f"{self._public_base_url}/{bucket}/{stored_path}"

    async def delete(self, bucket: str, paths: list[str]) -> None:
        if self.fail_deletes is not None:
            raise StorageError(self.fail_deletes)
        for path in paths:
            self.objects.pop((bucket, path), None)

    def path_from_public_address(self, bucket: str, address: str) -> str | None:
        prefix = f"{self._public_base_url}/{bucket}/"
        if not address.startswith(prefix):
            return None
        return address[len(prefix):] or None
