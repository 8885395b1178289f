import pytest

from folio_admin.content.editor_json import from_editor_json, to_editor_json
from folio_admin.content.exceptions import DocumentDecodeError
from folio_admin.content.models import (
    PLACEHOLDER_REF,
    SOURCE_ADDRESS,
    NodeKind,
    pending_placeholders,
)


def _editor_doc() -> dict:
    return {
        "type": "doc",
        "content": [
            {
                "type": "paragraph",
                "content": [
                    {"type": "text", "text": "Hello", "marks": [{"type": "bold"}]},
                    {"type": "hardBreak"},
                ],
            },
            {
                "type": "image",
                "attrs": {"src": "blob:local-preview", "data-temp-id": "tmp-1", "title": None},
            },
            {"type": "bulletList", "content": [{"type": "listItem", "content": [{"type": "paragraph"}]}]},
        ],
    }


class TestFromEditorJson:
    def test_none_passes_through(self) -> None:
        assert from_editor_json(None) is None

    def test_maps_types_to_kinds(self) -> None:
        tree = from_editor_json(_editor_doc())
        assert tree is not None
        assert tree.children is not None
        assert [c.kind for c in tree.children] == [
            NodeKind.PARAGRAPH,
            NodeKind.IMAGE,
            NodeKind.BULLET_LIST,
        ]

    def test_image_attrs_renamed_and_nulls_dropped(self) -> None:
        tree = from_editor_json(_editor_doc())
        assert tree is not None and tree.children is not None
        assert tree.children[1].attributes == {
            SOURCE_ADDRESS: "blob:local-preview",
            PLACEHOLDER_REF: "tmp-1",
        }
        assert pending_placeholders(tree) == ["tmp-1"]

    def test_text_and_marks_kept_as_attributes(self) -> None:
        tree = from_editor_json(_editor_doc())
        assert tree is not None and tree.children is not None
        paragraph = tree.children[0]
        assert paragraph.children is not None
        assert paragraph.children[0].attributes == {"text": "Hello", "marks": [{"type": "bold"}]}

    def test_unsupported_type_raises(self) -> None:
        with pytest.raises(DocumentDecodeError, match="unsupported type 'youtube'"):
            from_editor_json({"type": "doc", "content": [{"type": "youtube"}]})

    def test_non_list_content_raises(self) -> None:
        with pytest.raises(DocumentDecodeError, match="'content' must be a list"):
            from_editor_json({"type": "doc", "content": "text"})


class TestToEditorJson:
    def test_none_is_none(self) -> None:
        assert to_editor_json(None) is None

    def test_round_trip_restores_editor_shape(self) -> None:
        raw = _editor_doc()
        restored = to_editor_json(from_editor_json(raw))
        assert restored is not None
        assert restored["content"][0] == raw["content"][0]
        assert restored["content"][1] == {
            "type": "image",
            "attrs": {"src": "blob:local-preview", "data-temp-id": "tmp-1"},
        }
        assert restored["content"][2]["type"] == "bulletList"
