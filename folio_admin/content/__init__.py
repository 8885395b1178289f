from folio_admin.content.codec import parse, parse_stored, serialize
from folio_admin.content.editor_json import from_editor_json, to_editor_json
from folio_admin.content.models import (
    PLACEHOLDER_REF,
    SOURCE_ADDRESS,
    DocumentNode,
    NodeKind,
)

__all__ = [
    "PLACEHOLDER_REF",
    "SOURCE_ADDRESS",
    "DocumentNode",
    "NodeKind",
    "from_editor_json",
    "parse",
    "parse_stored",
    "serialize",
    "to_editor_json",
]
