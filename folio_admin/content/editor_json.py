"""Translation between the WYSIWYG editor's JSON and DocumentNode trees.

The editor emits ``{"type", "attrs"?, "content"?, "text"?, "marks"?}`` with
camelCase type names; images carry ``src`` and, while unresolved, a
``data-temp-id`` attribute.
"""

from collections.abc import Mapping
from typing import Any

from folio_admin.content.exceptions import DocumentDecodeError
from folio_admin.content.models import (
    PLACEHOLDER_REF,
    SOURCE_ADDRESS,
    DocumentNode,
    NodeKind,
)

_EDITOR_TYPES: dict[str, NodeKind] = {
    "doc": NodeKind.DOC,
    "paragraph": NodeKind.PARAGRAPH,
    "heading": NodeKind.HEADING,
    "text": NodeKind.TEXT,
    "bulletList": NodeKind.BULLET_LIST,
    "orderedList": NodeKind.ORDERED_LIST,
    "listItem": NodeKind.LIST_ITEM,
    "codeBlock": NodeKind.CODE_BLOCK,
    "blockquote": NodeKind.BLOCKQUOTE,
    "image": NodeKind.IMAGE,
    "hardBreak": NodeKind.HARD_BREAK,
    "horizontalRule": NodeKind.HORIZONTAL_RULE,
}
_KIND_TYPES = {kind: name for name, kind in _EDITOR_TYPES.items()}

# editor attr name -> document attribute name
_IMAGE_ATTRS = {"src": SOURCE_ADDRESS, "data-temp-id": PLACEHOLDER_REF}
_IMAGE_ATTRS_BACK = {value: key for key, value in _IMAGE_ATTRS.items()}


def from_editor_json(value: Any) -> DocumentNode | None:
    """Convert editor JSON into a DocumentNode tree.

    Raises:
        DocumentDecodeError: on unknown node types or malformed nodes.
    """
    if value is None:
        return None
    return _from_editor(value, "root")


def to_editor_json(node: DocumentNode | None) -> dict[str, Any] | None:
    """Convert a DocumentNode tree back into editor JSON."""
    if node is None:
        return None
    data: dict[str, Any] = {"type": _KIND_TYPES[node.kind]}
    attrs = dict(node.attributes)
    if node.kind is NodeKind.TEXT:
        data["text"] = attrs.pop("text", "")
        marks = attrs.pop("marks", None)
        if marks:
            data["marks"] = marks
    elif node.kind is NodeKind.IMAGE:
        attrs = {_IMAGE_ATTRS_BACK.get(key, key): val for key, val in attrs.items()}
    if attrs:
        data["attrs"] = attrs
    if node.children is not None:
        data["content"] = [to_editor_json(child) for child in node.children]
    return data


def _from_editor(raw: Any, path: str) -> DocumentNode:
    if not isinstance(raw, Mapping):
        raise DocumentDecodeError(f"Editor node at {path} must be an object")
    type_name = raw.get("type")
    kind = _EDITOR_TYPES.get(type_name) if isinstance(type_name, str) else None
    if kind is None:
        raise DocumentDecodeError(f"Editor node at {path}: unsupported type {type_name!r}")

    attrs = raw.get("attrs") or {}
    if not isinstance(attrs, Mapping):
        raise DocumentDecodeError(f"Editor node at {path}: 'attrs' must be an object")
    attributes: dict[str, Any] = {}
    for key, val in attrs.items():
        # the editor serializes unset attributes as null
        if val is None:
            continue
        if kind is NodeKind.IMAGE:
            key = _IMAGE_ATTRS.get(key, key)
        attributes[key] = val
    if kind is NodeKind.TEXT:
        attributes["text"] = raw.get("text", "")
        if raw.get("marks"):
            attributes["marks"] = list(raw["marks"])

    content = raw.get("content")
    children: tuple[DocumentNode, ...] | None = None
    if content is not None:
        if not isinstance(content, list):
            raise DocumentDecodeError(f"Editor node at {path}: 'content' must be a list")
        children = tuple(
            _from_editor(child, f"{path}.content[{index}]")
            for index, child in enumerate(content)
        )
    return DocumentNode(kind=kind, attributes=attributes, children=children)
