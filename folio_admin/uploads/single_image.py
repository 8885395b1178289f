from folio_admin.logging.logger import Log
from folio_admin.storage.base import BaseStorageClient
from folio_admin.storage.exceptions import StorageError
from folio_admin.uploads.exceptions import UploadError
from folio_admin.uploads.models import ImageFile
from folio_admin.uploads.naming import single_image_name


async def resolve_single_image(
    storage: BaseStorageClient,
    bucket: str,
    *,
    new_file: ImageFile | None,
    existing_address: str | None,
    clear: bool = False,
    prefix: str,
    name_hint: str,
    default_extension: str = "png",
) -> str | None:
    """Resolve a cover/badge field: upload a new file, else keep or clear the old one.

    Raises:
        UploadError: if the new file could not be uploaded.
    """
    if new_file is None:
        if clear:
            return None
        return existing_address or None

    name = single_image_name(
        prefix, name_hint, new_file.upload_id, new_file.filename, default_extension
    )
    try:
        stored_path = await storage.upload(
            bucket,
            name,
            new_file.content,
            content_type=new_file.media_type,
            overwrite=True,
        )
    except StorageError as exc:
        Log.error(f"Upload of {prefix} image failed: {exc}", bucket=bucket, name=name)
        raise UploadError(None, prefix, str(exc)) from exc
    Log.info(f"Uploaded {prefix} image {name}", bucket=bucket)
    return storage.get_public_address(bucket, stored_path)
