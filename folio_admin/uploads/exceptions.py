class UploadError(Exception):
    """Raised when an image upload fails; aborts the whole reconciliation pass.

    Attributes:
        placeholder_id: placeholder of the failed image, None for cover/badge uploads.
        position: document-order index of the image node, or a label such as "cover".
        reason: message reported by the storage API.
    """

    def __init__(self, placeholder_id: str | None, position: int | str, reason: str) -> None:
        self.placeholder_id = placeholder_id
        self.position = position
        self.reason = reason
        if placeholder_id is None:
            subject = f"{position} image"
        else:
            subject = f"image {placeholder_id} (#{position})"
        super().__init__(f"Upload of {subject} failed: {reason}")
