import uuid

from folio_admin.uploads.models import ImageFile


class TempImageRegistry:
    """Locally selected, not-yet-uploaded images of one edit session.

    Purely in memory; bindings are never persisted.
    """

    def __init__(self) -> None:
        self._files: dict[str, ImageFile] = {}

    def register(self, file: ImageFile) -> str:
        """Store `file` and return the placeholder id to embed in its image node."""
        placeholder_id = uuid.uuid4().hex
        while placeholder_id in self._files:
            placeholder_id = uuid.uuid4().hex
        self._files[placeholder_id] = file
        return placeholder_id

    def lookup(self, placeholder_id: str) -> ImageFile | None:
        return self._files.get(placeholder_id)

    def clear(self) -> None:
        self._files.clear()

    @property
    def is_empty(self) -> bool:
        return not self._files

    def __len__(self) -> int:
        return len(self._files)

    def __contains__(self, placeholder_id: object) -> bool:
        return placeholder_id in self._files
