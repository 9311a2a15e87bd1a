"""Tests for the default paragraph handler."""

from typing import Any

import pytest

from docscript.api_types import InlineObject, StructuralElement
from docscript.exceptions import UnsupportedContentError
from docscript.paragraphs import handle_paragraph
from tests.builders import kinds, paragraph, table, text_run


def _content(*elements: dict[str, Any]) -> list[StructuralElement]:
    return [StructuralElement.model_validate(e) for e in elements]


def _handle(
    content: list[StructuralElement],
    current_index: int = 0,
    inline_objects: dict[str, InlineObject] | None = None,
    *,
    is_last_content_of_table_cell: bool = False,
):
    element = content[current_index]
    assert element.paragraph is not None
    return handle_paragraph(
        paragraph=element.paragraph,
        content=content,
        current_index=current_index,
        inline_objects=inline_objects or {},
        start_index=element.start_index or 0,
        end_index=element.end_index or 0,
        is_last_content_of_table_cell=is_last_content_of_table_cell,
    )


class TestTextInsertion:
    def test_plain_paragraph(self):
        result = _handle(_content(paragraph(1, "Hello\n"), paragraph(7)))
        assert result.insert_requests == [
            {
                "insertText": {
                    "text": "Hello\n",
                    "location": {"segmentId": "", "index": 1},
                }
            }
        ]
        assert result.newline_style_before_table is None

    def test_runs_are_inserted_at_their_own_index(self):
        result = _handle(_content(paragraph(1, "Hello ", "world\n"), paragraph(13)))
        locations = [r["insertText"]["location"]["index"] for r in result.insert_requests]
        assert locations == [1, 7]

    def test_text_style_follows_insertions(self):
        styled = paragraph(1, "Bold\n")
        styled["paragraph"]["elements"] = [text_run(1, "Bold\n", bold=True)]
        result = _handle(_content(styled, paragraph(6)))

        assert kinds(result.insert_requests) == ["insertText", "updateTextStyle"]
        update = result.insert_requests[1]["updateTextStyle"]
        assert update["fields"] == "bold"
        assert update["range"] == {"startIndex": 1, "endIndex": 6, "segmentId": ""}

    def test_style_range_counts_utf16_units(self):
        styled = paragraph(1, "\U0001f600\n")
        styled["paragraph"]["elements"] = [text_run(1, "\U0001f600\n", italic=True)]
        result = _handle(_content(styled, paragraph(4)))
        assert result.insert_requests[1]["updateTextStyle"]["range"]["endIndex"] == 4

    def test_paragraph_style_comes_last(self):
        heading = paragraph(
            1,
            "Title\n",
            paragraph_style={"namedStyleType": "HEADING_1", "headingId": "h.abc"},
        )
        result = _handle(_content(heading, paragraph(7)))

        assert kinds(result.insert_requests) == ["insertText", "updateParagraphStyle"]
        update = result.insert_requests[-1]["updateParagraphStyle"]
        assert update["fields"] == "namedStyleType"
        assert "headingId" not in update["paragraphStyle"]
        assert update["range"] == {"startIndex": 1, "endIndex": 7, "segmentId": ""}

    def test_tab_stops_are_dropped(self):
        tab_stop = {"offset": {"magnitude": 36, "unit": "PT"}, "alignment": "START"}
        styled = paragraph(
            1,
            "Col\n",
            paragraph_style={"namedStyleType": "NORMAL_TEXT", "tabStops": [tab_stop]},
        )
        result = _handle(_content(styled, paragraph(5)))

        update = result.insert_requests[-1]["updateParagraphStyle"]
        assert update["fields"] == "namedStyleType"
        assert "tabStops" not in update["paragraphStyle"]

    def test_tab_stops_are_dropped_from_held_style(self):
        style = {"tabStops": [], "alignment": "END"}
        intro = paragraph(1, "Intro\n", paragraph_style=style)
        result = _handle(_content(intro, table(7, [["a"]]), paragraph(12)))

        pending = result.newline_style_before_table
        assert pending is not None
        assert pending["updateParagraphStyle"]["fields"] == "alignment"


class TestNewlineHandling:
    def test_trailing_empty_paragraph_produces_nothing(self):
        content = _content(paragraph(1, "Text\n"), paragraph(6))
        result = _handle(content, current_index=1)
        assert result.insert_requests == []
        assert result.newline_style_before_table is None

    def test_trailing_text_paragraph_is_kept(self):
        result = _handle(_content(paragraph(1, "End\n")))
        assert result.insert_requests[0]["insertText"]["text"] == "End\n"

    def test_newline_dropped_before_table(self):
        content = _content(paragraph(1, "Intro\n"), table(7, [["a"]]), paragraph(12))
        result = _handle(content)
        assert result.insert_requests[0]["insertText"]["text"] == "Intro"
        assert result.newline_style_before_table is None

    def test_paragraph_style_held_for_table(self):
        intro = paragraph(1, "Intro\n", paragraph_style={"alignment": "CENTER"})
        content = _content(intro, table(7, [["a"]]), paragraph(12))
        result = _handle(content)

        assert kinds(result.insert_requests) == ["insertText"]
        pending = result.newline_style_before_table
        assert pending is not None
        assert pending["updateParagraphStyle"]["fields"] == "alignment"
        assert pending["updateParagraphStyle"]["range"]["startIndex"] == 1

    def test_last_paragraph_of_cell_drops_newline(self):
        result = _handle(
            _content(paragraph(16, "a\n")), is_last_content_of_table_cell=True
        )
        assert result.insert_requests[0]["insertText"] == {
            "text": "a",
            "location": {"segmentId": "", "index": 16},
        }

    def test_empty_cell_paragraph_inserts_nothing(self):
        result = _handle(_content(paragraph(16)), is_last_content_of_table_cell=True)
        assert result.insert_requests == []

    def test_earlier_cell_paragraph_keeps_newline(self):
        content = _content(paragraph(16, "x\n"), paragraph(18, "y\n"))
        result = _handle(content, current_index=0, is_last_content_of_table_cell=False)
        assert result.insert_requests[0]["insertText"]["text"] == "x\n"


def _image_objects(**embedded: Any) -> dict[str, InlineObject]:
    return {
        "kix.img": InlineObject.model_validate(
            {
                "objectId": "kix.img",
                "inlineObjectProperties": {"embeddedObject": embedded},
            }
        )
    }


def _paragraph_with(element: dict[str, Any], start: int = 1) -> dict[str, Any]:
    newline = text_run(start + 1, "\n")
    return {
        "startIndex": start,
        "endIndex": start + 2,
        "paragraph": {"elements": [element, newline], "paragraphStyle": {}},
    }


class TestInlineContent:
    def test_inline_image(self):
        image = {
            "startIndex": 1,
            "endIndex": 2,
            "inlineObjectElement": {"inlineObjectId": "kix.img"},
        }
        inline_objects = _image_objects(
            imageProperties={"contentUri": "https://example.com/a.png"},
            size={
                "width": {"magnitude": 100, "unit": "PT"},
                "height": {"magnitude": 50, "unit": "PT"},
            },
        )
        content = _content(_paragraph_with(image), paragraph(3))
        result = _handle(content, 0, inline_objects)

        insert = result.insert_requests[0]["insertInlineImage"]
        assert insert["uri"] == "https://example.com/a.png"
        assert insert["location"] == {"segmentId": "", "index": 1}
        assert insert["objectSize"]["width"]["magnitude"] == 100
        assert kinds(result.insert_requests) == ["insertInlineImage", "insertText"]

    def test_inline_object_without_image_fails(self):
        element = {
            "startIndex": 1,
            "endIndex": 2,
            "inlineObjectElement": {"inlineObjectId": "kix.img"},
        }
        with pytest.raises(UnsupportedContentError, match="kix.img"):
            _handle(_content(_paragraph_with(element), paragraph(3)), 0, _image_objects())

    def test_unknown_inline_object_fails(self):
        element = {
            "startIndex": 1,
            "endIndex": 2,
            "inlineObjectElement": {"inlineObjectId": "kix.missing"},
        }
        with pytest.raises(UnsupportedContentError):
            _handle(_content(_paragraph_with(element), paragraph(3)))

    def test_page_break_supplies_following_newline(self):
        page_break = {"startIndex": 7, "endIndex": 8, "pageBreak": {}}
        broken = {
            "startIndex": 1,
            "endIndex": 9,
            "paragraph": {
                "elements": [text_run(1, "Before"), page_break, text_run(8, "\n")],
            },
        }
        result = _handle(_content(broken, paragraph(9)))
        assert kinds(result.insert_requests) == ["insertText", "insertPageBreak"]
        assert result.insert_requests[1]["insertPageBreak"]["location"]["index"] == 7

    def test_page_break_keeps_rest_of_run(self):
        page_break = {"startIndex": 1, "endIndex": 2, "pageBreak": {}}
        broken = {
            "startIndex": 1,
            "endIndex": 8,
            "paragraph": {"elements": [page_break, text_run(2, "\nNext\n")]},
        }
        result = _handle(_content(broken, paragraph(8)))
        assert result.insert_requests[1]["insertText"] == {
            "text": "Next\n",
            "location": {"segmentId": "", "index": 3},
        }

    def test_page_break_before_table_fails(self):
        page_break = {"startIndex": 1, "endIndex": 2, "pageBreak": {}}
        broken = {
            "startIndex": 1,
            "endIndex": 3,
            "paragraph": {"elements": [page_break, text_run(2, "\n")]},
        }
        content = _content(broken, table(3, [["a"]]), paragraph(8))
        with pytest.raises(UnsupportedContentError, match="Page break"):
            _handle(content)

    def test_unsupported_element_fails(self):
        rule = {"startIndex": 1, "endIndex": 2, "horizontalRule": {}}
        with pytest.raises(UnsupportedContentError, match="horizontalRule"):
            _handle(_content(_paragraph_with(rule), paragraph(3)))
