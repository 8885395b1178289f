from collections.abc import Iterator
from contextlib import contextmanager

from folio_admin.services.exceptions import SaveInProgressError
from folio_admin.uploads.models import ImageFile
from folio_admin.uploads.registry import TempImageRegistry


class EditSession:
    """State of one entity form: its pending images and whether a save is in flight."""

    def __init__(self) -> None:
        self.registry = TempImageRegistry()
        self._saving = False

    @property
    def saving(self) -> bool:
        return self._saving

    def add_image(self, file: ImageFile) -> str:
        """Register a newly inserted image; returns the placeholder id for its node."""
        return self.registry.register(file)

    @contextmanager
    def save_in_flight(self) -> Iterator[None]:
        """Hold the in-flight flag for one save; a second concurrent save is rejected."""
        if self._saving:
            raise SaveInProgressError("A save is already in progress for this form")
        self._saving = True
        try:
            yield
        finally:
            self._saving = False

    def discard(self) -> None:
        """Abandon the session, dropping every pending image."""
        self.registry.clear()
