from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

PLACEHOLDER_REF = "placeholder_ref"
SOURCE_ADDRESS = "source_address"


class NodeKind(str, Enum):
    """Recognized rich document node tags."""

    DOC = "doc"
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    TEXT = "text"
    BULLET_LIST = "bullet_list"
    ORDERED_LIST = "ordered_list"
    LIST_ITEM = "list_item"
    CODE_BLOCK = "code_block"
    BLOCKQUOTE = "blockquote"
    IMAGE = "image"
    HARD_BREAK = "hard_break"
    HORIZONTAL_RULE = "horizontal_rule"


_INLINE = frozenset({NodeKind.TEXT, NodeKind.HARD_BREAK})
_BLOCK = frozenset(
    {
        NodeKind.PARAGRAPH,
        NodeKind.HEADING,
        NodeKind.BULLET_LIST,
        NodeKind.ORDERED_LIST,
        NodeKind.CODE_BLOCK,
        NodeKind.BLOCKQUOTE,
        NodeKind.IMAGE,
        NodeKind.HORIZONTAL_RULE,
    }
)

ALLOWED_CHILDREN: dict[NodeKind, frozenset[NodeKind]] = {
    NodeKind.DOC: _BLOCK,
    NodeKind.PARAGRAPH: _INLINE,
    NodeKind.HEADING: _INLINE,
    NodeKind.BULLET_LIST: frozenset({NodeKind.LIST_ITEM}),
    NodeKind.ORDERED_LIST: frozenset({NodeKind.LIST_ITEM}),
    NodeKind.LIST_ITEM: _BLOCK,
    NodeKind.CODE_BLOCK: frozenset({NodeKind.TEXT}),
    NodeKind.BLOCKQUOTE: _BLOCK,
    NodeKind.TEXT: frozenset(),
    NodeKind.IMAGE: frozenset(),
    NodeKind.HARD_BREAK: frozenset(),
    NodeKind.HORIZONTAL_RULE: frozenset(),
}


@dataclass(frozen=True)
class DocumentNode:
    """One element of a rich document tree. Plain data, no behavior."""

    kind: NodeKind
    attributes: Mapping[str, Any] = field(default_factory=dict)
    children: tuple["DocumentNode", ...] | None = None

    @property
    def is_image(self) -> bool:
        return self.kind is NodeKind.IMAGE

    @property
    def placeholder_ref(self) -> str | None:
        ref = self.attributes.get(PLACEHOLDER_REF)
        return ref if isinstance(ref, str) and ref else None

    def with_attributes(self, attributes: Mapping[str, Any]) -> "DocumentNode":
        return replace(self, attributes=dict(attributes))

    def with_children(self, children: tuple["DocumentNode", ...]) -> "DocumentNode":
        return replace(self, children=children)


def is_well_formed(node: DocumentNode) -> bool:
    """Check that every child is a valid child kind for its parent."""
    if not node.children:
        return True
    allowed = ALLOWED_CHILDREN[node.kind]
    return all(
        child.kind in allowed and is_well_formed(child) for child in node.children
    )


def iter_nodes(node: DocumentNode | None) -> Iterator[DocumentNode]:
    """Yield nodes in pre-order, depth-first, document order."""
    if node is None:
        return
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        if current.children:
            stack.extend(reversed(current.children))


def pending_placeholders(node: DocumentNode | None) -> list[str]:
    """Placeholder refs of unresolved image nodes, in document order."""
    return [
        n.placeholder_ref
        for n in iter_nodes(node)
        if n.is_image and n.placeholder_ref is not None
    ]


def image_addresses(node: DocumentNode | None) -> list[str]:
    """Durable addresses of resolved image nodes, in document order."""
    addresses: list[str] = []
    for n in iter_nodes(node):
        if not n.is_image:
            continue
        address = n.attributes.get(SOURCE_ADDRESS)
        if isinstance(address, str) and address:
            addresses.append(address)
    return addresses
