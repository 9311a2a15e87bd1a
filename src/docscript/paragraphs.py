"""Default paragraph handler.

Content is inserted at the index it occupies in the source. Paragraphs are
compiled in document order, so every index before the one being written
already holds the same content as the source, which keeps source indexes
valid as target addresses.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from docscript.api_types import (
    ElementKind,
    InlineObject,
    InlineObjectElement,
    Paragraph,
    StructuralElement,
    classify_element,
)
from docscript.exceptions import UnsupportedContentError
from docscript.fields import (
    PARAGRAPH_READ_ONLY_FIELDS,
    field_mask,
    strip_fields,
    style_dict,
)
from docscript.requests import (
    make_insert_inline_image,
    make_insert_page_break,
    make_insert_text,
    make_update_paragraph_style,
    make_update_text_style,
    utf16_len,
)

logger = logging.getLogger(__name__)


@dataclass
class ParagraphRequests:
    """Requests produced for one paragraph.

    ``newline_style_before_table`` is set when a table follows the paragraph:
    inserting that table creates the paragraph's closing newline, so its
    style update can only be applied after the table's own requests.
    """

    insert_requests: list[dict[str, Any]] = field(default_factory=list)
    newline_style_before_table: dict[str, Any] | None = None


class ParagraphHandler(Protocol):
    """Callable turning one paragraph into requests."""

    def __call__(
        self,
        *,
        paragraph: Paragraph,
        content: Sequence[StructuralElement],
        current_index: int,
        inline_objects: Mapping[str, InlineObject],
        start_index: int,
        end_index: int,
        is_last_content_of_table_cell: bool,
    ) -> ParagraphRequests: ...


def _next_is_table(content: Sequence[StructuralElement], current_index: int) -> bool:
    following = current_index + 1
    return following < len(content) and (
        classify_element(content[following]) is ElementKind.TABLE
    )


def _is_empty(paragraph: Paragraph) -> bool:
    elements = paragraph.elements or []
    return all(e.text_run is not None for e in elements) and "".join(
        e.text_run.content or "" for e in elements if e.text_run is not None
    ) in ("", "\n")


def _insert_inline_image(
    element: InlineObjectElement,
    inline_objects: Mapping[str, InlineObject],
    index: int,
) -> dict[str, Any]:
    object_id = element.inline_object_id
    inline_object = inline_objects.get(object_id) if object_id else None
    properties = inline_object.inline_object_properties if inline_object else None
    embedded = properties.embedded_object if properties else None
    image = embedded.image_properties if embedded else None

    if image is None or not image.content_uri:
        raise UnsupportedContentError(
            f"Inline object {object_id!r} at index {index} has no image content"
        )

    size = style_dict(embedded.size) if embedded and embedded.size else None
    return make_insert_inline_image(image.content_uri, index, size)


def handle_paragraph(
    *,
    paragraph: Paragraph,
    content: Sequence[StructuralElement],
    current_index: int,
    inline_objects: Mapping[str, InlineObject],
    start_index: int,
    end_index: int,
    is_last_content_of_table_cell: bool = False,
) -> ParagraphRequests:
    """Generate the requests that rebuild one paragraph.

    Args:
        paragraph: The paragraph to rebuild
        content: The sequence the paragraph belongs to (body or table cell)
        current_index: Position of the paragraph within ``content``
        inline_objects: Inline objects of the source document, by id
        start_index: Source start index of the paragraph
        end_index: Source end index of the paragraph
        is_last_content_of_table_cell: The paragraph closes a table cell,
            whose newline already exists in a freshly inserted table

    Returns:
        ParagraphRequests with insertions, then text styles, then the
        paragraph style (or the paragraph style held back for the table
        that follows)

    Raises:
        UnsupportedContentError: For inline content that cannot be inserted
            without shifting every later index
    """
    is_trailing = (
        not is_last_content_of_table_cell and current_index == len(content) - 1
    )
    if is_trailing and _is_empty(paragraph):
        # The new document's own newline stands in for it
        return ParagraphRequests()

    table_follows = _next_is_table(content, current_index)
    drop_newline = table_follows or is_last_content_of_table_cell

    inserts: list[dict[str, Any]] = []
    text_styles: list[dict[str, Any]] = []
    elements = paragraph.elements or []
    last_position = len(elements) - 1
    skip_newline = False

    for position, element in enumerate(elements):
        index = element.start_index if element.start_index is not None else 0

        if skip_newline:
            run = element.text_run
            if run is None or not (run.content or "").startswith("\n"):
                raise UnsupportedContentError(
                    f"Page break at index {index - 1} is not followed by a newline"
                )

        if element.text_run is not None:
            text = element.text_run.content or ""
            if skip_newline:
                # insertPageBreak already wrote this newline
                text = text[1:]
                index += 1
                skip_newline = False
            if position == last_position and drop_newline and text.endswith("\n"):
                text = text[:-1]
            if not text:
                continue

            inserts.append(make_insert_text(text, index))
            text_style = style_dict(element.text_run.text_style)
            if text_style:
                text_styles.append(
                    make_update_text_style(
                        index,
                        index + utf16_len(text),
                        text_style,
                        field_mask(text_style),
                    )
                )
        elif element.inline_object_element is not None:
            inserts.append(
                _insert_inline_image(
                    element.inline_object_element, inline_objects, index
                )
            )
        elif element.page_break is not None:
            if drop_newline:
                raise UnsupportedContentError(
                    f"Page break at index {index} closes a paragraph whose "
                    "newline is supplied by a table or cell"
                )
            inserts.append(make_insert_page_break(index))
            skip_newline = True
        else:
            raise UnsupportedContentError(
                f"Cannot rebuild {element.unsupported_kind or 'unknown'} "
                f"element at index {index}"
            )

    paragraph_style = strip_fields(
        paragraph.paragraph_style, *PARAGRAPH_READ_ONLY_FIELDS
    )
    fields = field_mask(paragraph_style)
    style_request = (
        make_update_paragraph_style(start_index, end_index, paragraph_style, fields)
        if fields
        else None
    )

    requests = inserts + text_styles
    if table_follows:
        logger.debug(
            "Holding paragraph style at %d-%d until the next table is inserted",
            start_index,
            end_index,
        )
        return ParagraphRequests(requests, style_request)

    if style_request is not None:
        requests.append(style_request)
    return ParagraphRequests(requests)
