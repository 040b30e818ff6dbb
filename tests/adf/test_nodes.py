"""Tests for ADF node types."""

import json

from jira_adf.adf import (
    BulletList,
    Document,
    Heading,
    ListItem,
    OrderedList,
    Paragraph,
    TextRun,
)


class TestTextNodes:
    """Tests for paragraph, heading and text run nodes."""

    def test_text_run(self):
        assert TextRun("hi").to_dict() == {"type": "text", "text": "hi"}

    def test_paragraph_of(self):
        para = Paragraph.of("hello")

        assert para.content == [TextRun("hello")]
        assert para.to_dict() == {
            "type": "paragraph",
            "content": [{"type": "text", "text": "hello"}],
        }

    def test_heading_defaults_to_level_3(self):
        heading = Heading.of("Title:")

        assert heading.level == 3
        assert heading.to_dict()["attrs"] == {"level": 3}


class TestListNodes:
    """Tests for list and list item nodes."""

    def test_list_item_wraps_paragraph(self):
        assert ListItem.of("x").to_dict() == {
            "type": "listItem",
            "content": [{"type": "paragraph", "content": [{"type": "text", "text": "x"}]}],
        }

    def test_list_kinds(self):
        assert BulletList.kind == "bullet"
        assert OrderedList.kind == "ordered"
        assert BulletList().to_dict() == {"type": "bulletList", "content": []}
        assert OrderedList().to_dict() == {"type": "orderedList", "content": []}

    def test_new_lists_do_not_share_content(self):
        first = BulletList()
        first.content.append(ListItem.of("a"))

        assert BulletList().content == []


class TestDocument:
    """Tests for the root document node."""

    def test_empty_document(self):
        assert Document().to_dict() == {"version": 1, "type": "doc", "content": []}

    def test_to_json_round_trips_through_json(self):
        doc = Document(content=[Paragraph.of("naïve café")])

        assert json.loads(doc.to_json()) == doc.to_dict()
        assert "naïve café" in doc.to_json()

    def test_to_json_indent(self):
        doc = Document(content=[Paragraph.of("x")])

        assert "\n" not in doc.to_json()
        assert "\n" in doc.to_json(indent=2)
