import mimetypes
import uuid
from dataclasses import dataclass, field


@dataclass(frozen=True)
class ImageFile:
    """A local image file selected by the user, not yet uploaded.

    `upload_id` is minted once per selection, so retrying a save with the same
    file writes the same object.
    """

    filename: str
    content: bytes
    content_type: str = ""
    upload_id: str = field(default_factory=lambda: uuid.uuid4().hex, compare=False)

    @property
    def media_type(self) -> str:
        if self.content_type:
            return self.content_type
        guessed, _ = mimetypes.guess_type(self.filename)
        return guessed or "application/octet-stream"
