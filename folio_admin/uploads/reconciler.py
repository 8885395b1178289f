"""Resolves image placeholder references in a document tree to durable addresses."""

from dataclasses import dataclass, field

from folio_admin.content.models import PLACEHOLDER_REF, SOURCE_ADDRESS, DocumentNode
from folio_admin.logging.logger import Log
from folio_admin.storage.base import BaseStorageClient
from folio_admin.storage.exceptions import StorageError
from folio_admin.uploads.exceptions import UploadError
from folio_admin.uploads.models import ImageFile
from folio_admin.uploads.naming import object_name
from folio_admin.uploads.registry import TempImageRegistry


@dataclass
class _PassState:
    registry: TempImageRegistry
    name_hint: str
    image_index: int = 0
    uploaded: list[str] = field(default_factory=list)


class UploadReconciler:
    """Uploads the registry files referenced by a tree and patches their image nodes.

    Walks pre-order, depth-first, in document order, uploading one image at a
    time. The first failed upload aborts the pass with UploadError and no tree
    is returned. Nodes that are not touched are reused by reference; the
    input tree is never mutated.
    """

    def __init__(
        self,
        storage: BaseStorageClient,
        bucket: str,
        default_extension: str = "png",
    ) -> None:
        self._storage = storage
        self._bucket = bucket
        self._default_extension = default_extension

    @property
    def bucket(self) -> str:
        return self._bucket

    async def reconcile(
        self,
        tree: DocumentNode | None,
        registry: TempImageRegistry,
        name_hint: str,
    ) -> DocumentNode | None:
        """Return an equivalent tree whose registered placeholders are uploaded.

        Raises:
            UploadError: if any upload fails; identifies the image by
                placeholder id and document-order position.
        """
        if tree is None or registry.is_empty:
            return tree

        state = _PassState(registry=registry, name_hint=name_hint)
        result = await self._walk(tree, state)
        if state.uploaded:
            Log.info(
                f"Reconciled {len(state.uploaded)} image(s)",
                bucket=self._bucket,
                name_hint=name_hint,
            )
        return result

    async def _walk(self, node: DocumentNode, state: _PassState) -> DocumentNode:
        patched = node
        if node.is_image:
            position = state.image_index
            state.image_index += 1
            patched = await self._resolve_image(node, position, state)

        if node.children:
            children = []
            for child in node.children:
                children.append(await self._walk(child, state))
            if any(new is not old for new, old in zip(children, node.children)):
                patched = patched.with_children(tuple(children))
        return patched

    async def _resolve_image(
        self,
        node: DocumentNode,
        position: int,
        state: _PassState,
    ) -> DocumentNode:
        placeholder_id = node.placeholder_ref
        if placeholder_id is None:
            return node
        file = state.registry.lookup(placeholder_id)
        if file is None:
            # resolved in an earlier pass, or not part of this session
            return node

        address = await self._upload(file, placeholder_id, position, state.name_hint)
        state.uploaded.append(placeholder_id)
        attributes = {
            key: value
            for key, value in node.attributes.items()
            if key != PLACEHOLDER_REF
        }
        attributes[SOURCE_ADDRESS] = address
        return node.with_attributes(attributes)

    async def _upload(
        self,
        file: ImageFile,
        placeholder_id: str,
        position: int,
        name_hint: str,
    ) -> str:
        name = object_name(name_hint, placeholder_id, file.filename, self._default_extension)
        try:
            stored_path = await self._storage.upload(
                self._bucket,
                name,
                file.content,
                content_type=file.media_type,
                overwrite=True,
            )
        except StorageError as exc:
            Log.error(
                f"Image upload failed, aborting reconciliation: {exc}",
                placeholder_id=placeholder_id,
                position=position,
            )
            raise UploadError(placeholder_id, position, str(exc)) from exc
        Log.debug(f"Uploaded {name}", bucket=self._bucket, size=len(file.content))
        return self._storage.get_public_address(self._bucket, stored_path)
