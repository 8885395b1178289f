"""Storage codec for rich document trees.

Persisted shape: ``{"kind": str, "attributes"?: {...}, "children"?: [node, ...]}``.
Only type-shape is checked here; structural well-formedness is trusted to the
editing surface that produced the tree.
"""

import json
from collections.abc import Mapping
from typing import Any

from folio_admin.content.editor_json import from_editor_json
from folio_admin.content.exceptions import DocumentDecodeError
from folio_admin.content.models import DocumentNode, NodeKind

_KINDS = {kind.value: kind for kind in NodeKind}


def parse(serialized: Any) -> DocumentNode | None:
    """Build a DocumentNode tree from its stored form.

    ``None`` means "no content yet" and is returned as-is. A JSON string is
    decoded first.

    Raises:
        DocumentDecodeError: on a non-object node, an unrecognized kind, or
            attributes/children of the wrong type.
    """
    serialized = _decode_json(serialized)
    if serialized is None:
        return None
    return _build_node(serialized, "root")


def parse_stored(serialized: Any) -> DocumentNode | None:
    """Like `parse`, but also reads rows saved in the editor's `{type, content}` shape.

    Raises:
        DocumentDecodeError: if the value matches neither shape.
    """
    serialized = _decode_json(serialized)
    if isinstance(serialized, Mapping) and "kind" not in serialized and "type" in serialized:
        return from_editor_json(serialized)
    return parse(serialized)


def serialize(node: DocumentNode | None) -> dict[str, Any] | None:
    """Convert a tree into a JSON-compatible value for storage."""
    if node is None:
        return None
    data: dict[str, Any] = {"kind": node.kind.value}
    if node.attributes:
        data["attributes"] = dict(node.attributes)
    if node.children is not None:
        data["children"] = [serialize(child) for child in node.children]
    return data


def _decode_json(serialized: Any) -> Any:
    if not isinstance(serialized, str):
        return serialized
    try:
        return json.loads(serialized)
    except json.JSONDecodeError as exc:
        raise DocumentDecodeError(f"Invalid document JSON: {exc}") from exc


def _build_node(raw: Any, path: str) -> DocumentNode:
    if not isinstance(raw, Mapping):
        raise DocumentDecodeError(f"Node at {path} must be an object")
    kind = _build_kind(raw.get("kind"), path)
    attributes = _build_attributes(raw.get("attributes"), path)
    children = _build_children(raw.get("children"), path)
    return DocumentNode(kind=kind, attributes=attributes, children=children)


def _build_kind(raw: Any, path: str) -> NodeKind:
    if not isinstance(raw, str):
        raise DocumentDecodeError(f"Node at {path}: 'kind' must be a string")
    kind = _KINDS.get(raw)
    if kind is None:
        raise DocumentDecodeError(f"Node at {path}: unrecognized kind {raw!r}")
    return kind


def _build_attributes(raw: Any, path: str) -> dict[str, Any]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise DocumentDecodeError(f"Node at {path}: 'attributes' must be an object")
    return dict(raw)


def _build_children(raw: Any, path: str) -> tuple[DocumentNode, ...] | None:
    if raw is None:
        return None
    if not isinstance(raw, list):
        raise DocumentDecodeError(f"Node at {path}: 'children' must be a list")
    return tuple(
        _build_node(child, f"{path}.children[{index}]")
        for index, child in enumerate(raw)
    )
