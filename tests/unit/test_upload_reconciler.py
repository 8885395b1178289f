import asyncio

import pytest

from folio_admin.content.models import (
    PLACEHOLDER_REF,
    SOURCE_ADDRESS,
    DocumentNode,
    NodeKind,
    iter_nodes,
)
from folio_admin.storage.memory_adapter import InMemoryStorageAdapter
from folio_admin.uploads.exceptions import UploadError
from folio_admin.uploads.models import ImageFile
from folio_admin.uploads.reconciler import UploadReconciler
from folio_admin.uploads.registry import TempImageRegistry

BUCKET = "doc-images"


def _image(**attributes: object) -> DocumentNode:
    return DocumentNode(kind=NodeKind.IMAGE, attributes=dict(attributes))


def _text(value: str) -> DocumentNode:
    return DocumentNode(kind=NodeKind.TEXT, attributes={"text": value})


def _paragraph(*children: DocumentNode) -> DocumentNode:
    return DocumentNode(kind=NodeKind.PARAGRAPH, children=tuple(children))


def _doc(*children: DocumentNode) -> DocumentNode:
    return DocumentNode(kind=NodeKind.DOC, children=tuple(children))


def _make_reconciler() -> tuple[UploadReconciler, InMemoryStorageAdapter]:
    storage = InMemoryStorageAdapter()
    return UploadReconciler(storage, BUCKET, default_extension="png"), storage


def _reconcile(
    reconciler: UploadReconciler,
    tree: DocumentNode | None,
    registry: TempImageRegistry,
    hint: str = "my-doc",
) -> DocumentNode | None:
    return asyncio.run(reconciler.reconcile(tree, registry, hint))


class TestSingleImage:
    def test_uploads_and_rewrites_node(self) -> None:
        reconciler, storage = _make_reconciler()
        registry = TempImageRegistry()
        pid = registry.register(ImageFile("fileA.png", b"\x89PNG"))
        tree = _doc(_image(placeholder_ref=pid))

        result = _reconcile(reconciler, tree, registry)

        assert [u.object_name for u in storage.uploads] == [f"my-doc-{pid}.png"]
        assert result is not None
        image = result.children[0]
        assert image.attributes == {
            SOURCE_ADDRESS: f"http://localhost/storage/{BUCKET}/my-doc-{pid}.png"
        }

    def test_upload_uses_overwrite(self) -> None:
        reconciler, storage = _make_reconciler()
        registry = TempImageRegistry()
        pid = registry.register(ImageFile("a.jpg", b"x"))

        _reconcile(reconciler, _doc(_image(placeholder_ref=pid)), registry)

        assert storage.uploads[0].overwrite is True
        assert storage.objects[(BUCKET, f"my-doc-{pid}.jpg")].content_type == "image/jpeg"

    def test_keeps_other_image_attributes(self) -> None:
        reconciler, _storage = _make_reconciler()
        registry = TempImageRegistry()
        pid = registry.register(ImageFile("a.png", b"x"))
        tree = _doc(_image(placeholder_ref=pid, alt="diagram", title="Flow"))

        result = _reconcile(reconciler, tree, registry)

        assert result is not None
        attributes = result.children[0].attributes
        assert attributes["alt"] == "diagram"
        assert attributes["title"] == "Flow"
        assert PLACEHOLDER_REF not in attributes

    def test_filename_without_extension_uses_default(self) -> None:
        reconciler, storage = _make_reconciler()
        registry = TempImageRegistry()
        pid = registry.register(ImageFile("screenshot", b"x"))

        _reconcile(reconciler, _doc(_image(placeholder_ref=pid)), registry)

        assert storage.uploads[0].object_name == f"my-doc-{pid}.png"


class TestUploadFailure:
    def test_raises_upload_error_naming_placeholder(self) -> None:
        reconciler, storage = _make_reconciler()
        registry = TempImageRegistry()
        pid = registry.register(ImageFile("fileA.png", b"x"))
        storage.fail_uploads[f"my-doc-{pid}.png"] = "quota exceeded"

        with pytest.raises(UploadError, match=pid) as excinfo:
            _reconcile(reconciler, _doc(_image(placeholder_ref=pid)), registry)

        assert excinfo.value.placeholder_id == pid
        assert excinfo.value.position == 0
        assert "quota exceeded" in str(excinfo.value)

    def test_stops_at_first_failure(self) -> None:
        reconciler, storage = _make_reconciler()
        registry = TempImageRegistry()
        first = registry.register(ImageFile("1.png", b"1"))
        second = registry.register(ImageFile("2.png", b"2"))
        third = registry.register(ImageFile("3.png", b"3"))
        storage.fail_uploads[f"my-doc-{second}.png"] = "permission denied"
        tree = _doc(
            _image(placeholder_ref=first),
            _image(placeholder_ref=second),
            _image(placeholder_ref=third),
        )

        with pytest.raises(UploadError) as excinfo:
            _reconcile(reconciler, tree, registry)

        assert excinfo.value.position == 1
        assert [u.object_name for u in storage.uploads] == [
            f"my-doc-{first}.png",
            f"my-doc-{second}.png",
        ]

    def test_input_tree_and_registry_untouched_after_failure(self) -> None:
        reconciler, storage = _make_reconciler()
        registry = TempImageRegistry()
        first = registry.register(ImageFile("1.png", b"1"))
        second = registry.register(ImageFile("2.png", b"2"))
        storage.fail_uploads[f"my-doc-{second}.png"] = "network down"
        tree = _doc(_image(placeholder_ref=first), _image(placeholder_ref=second))

        with pytest.raises(UploadError):
            _reconcile(reconciler, tree, registry)

        assert tree.children[0].attributes == {PLACEHOLDER_REF: first}
        assert len(registry) == 2


class TestPassthrough:
    def test_null_tree_returns_null_without_uploads(self) -> None:
        reconciler, storage = _make_reconciler()
        registry = TempImageRegistry()
        registry.register(ImageFile("a.png", b"x"))

        assert _reconcile(reconciler, None, registry) is None
        assert storage.uploads == []

    def test_empty_registry_returns_input_without_uploads(self) -> None:
        reconciler, storage = _make_reconciler()
        tree = _doc(_image(placeholder_ref="gone"))

        result = _reconcile(reconciler, tree, TempImageRegistry())

        assert result is tree
        assert storage.uploads == []

    def test_no_pending_refs_is_deep_equal_noop(self) -> None:
        reconciler, storage = _make_reconciler()
        registry = TempImageRegistry()
        registry.register(ImageFile("unused.png", b"x"))
        tree = _doc(
            _paragraph(_text("hello")),
            _image(source_address="https://cdn.example.com/a.png"),
        )

        result = _reconcile(reconciler, tree, registry)

        assert result == tree
        assert storage.uploads == []

    def test_unknown_placeholder_passes_through(self) -> None:
        reconciler, storage = _make_reconciler()
        registry = TempImageRegistry()
        registry.register(ImageFile("other.png", b"x"))
        node = _image(placeholder_ref="resolved-earlier")

        result = _reconcile(reconciler, _doc(node), registry)

        assert result is not None
        assert result.children[0] is node
        assert storage.uploads == []


class TestMixedTree:
    def test_only_pending_image_is_uploaded(self) -> None:
        reconciler, storage = _make_reconciler()
        registry = TempImageRegistry()
        pid = registry.register(ImageFile("p2.webp", b"x"))
        resolved = _image(source_address="https://cdn.example.com/old.png")
        tree = _doc(resolved, _image(placeholder_ref=pid))

        result = _reconcile(reconciler, tree, registry)

        assert len(storage.uploads) == 1
        assert storage.uploads[0].object_name == f"my-doc-{pid}.webp"
        assert result is not None
        assert result.children[0] is resolved

    def test_nested_images_resolved_in_document_order(self) -> None:
        reconciler, storage = _make_reconciler()
        registry = TempImageRegistry()
        ids = [registry.register(ImageFile(f"{i}.png", b"x")) for i in range(3)]
        tree = _doc(
            DocumentNode(
                kind=NodeKind.BLOCKQUOTE,
                children=(_image(placeholder_ref=ids[0]),),
            ),
            DocumentNode(
                kind=NodeKind.BULLET_LIST,
                children=(
                    DocumentNode(
                        kind=NodeKind.LIST_ITEM,
                        children=(_paragraph(_text("x")), _image(placeholder_ref=ids[1])),
                    ),
                ),
            ),
            _image(placeholder_ref=ids[2]),
        )

        result = _reconcile(reconciler, tree, registry)

        assert [u.object_name for u in storage.uploads] == [f"my-doc-{i}.png" for i in ids]
        images = [n for n in iter_nodes(result) if n.kind is NodeKind.IMAGE]
        assert len(images) == 3
        assert all(SOURCE_ADDRESS in n.attributes for n in images)
        assert all(PLACEHOLDER_REF not in n.attributes for n in images)

    def test_shape_is_preserved(self) -> None:
        reconciler, _storage = _make_reconciler()
        registry = TempImageRegistry()
        pid = registry.register(ImageFile("a.png", b"x"))
        heading = DocumentNode(
            kind=NodeKind.HEADING, attributes={"level": 2}, children=(_text("Title"),)
        )
        tree = _doc(heading, _paragraph(_text("before")), _image(placeholder_ref=pid))

        result = _reconcile(reconciler, tree, registry)

        assert [n.kind for n in iter_nodes(result)] == [n.kind for n in iter_nodes(tree)]
        assert result is not None
        assert result.children[0] is heading
        assert tree.children[2].attributes == {PLACEHOLDER_REF: pid}

    def test_same_hint_and_placeholder_give_same_name(self) -> None:
        reconciler, storage = _make_reconciler()
        registry = TempImageRegistry()
        pid = registry.register(ImageFile("a.png", b"x"))
        tree = _doc(_image(placeholder_ref=pid))

        _reconcile(reconciler, tree, registry, hint="My Doc")
        _reconcile(reconciler, tree, registry, hint="My Doc")

        assert storage.uploads[0].object_name == storage.uploads[1].object_name
        assert len(storage.objects) == 1
