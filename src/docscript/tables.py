"""Default table handler.

Inserts an empty table of the right shape, fills the cells in row-major order
through the paragraph handler, then applies cell, row and column styling and
finally merges spanning cells. Filling cells front to back keeps every
source index valid: when a cell is written, all cells before it already hold
their source content.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol

from docscript.api_types import (
    ElementKind,
    InlineObject,
    StructuralElement,
    Table,
    TableCell,
    classify_element,
)
from docscript.exceptions import UnsupportedContentError
from docscript.fields import TABLE_CELL_READ_ONLY_FIELDS, field_mask, strip_fields
from docscript.paragraphs import ParagraphHandler, handle_paragraph
from docscript.requests import (
    make_insert_table,
    make_merge_table_cells,
    make_update_table_cell_style,
    make_update_table_column_properties,
    make_update_table_row_style,
)

logger = logging.getLogger(__name__)


class TableHandler(Protocol):
    """Callable turning one table into requests."""

    def __call__(
        self,
        *,
        table: Table,
        start_index: int,
        end_index: int,
        inline_objects: Mapping[str, InlineObject],
    ) -> list[dict[str, Any]]: ...


def _cell_content_requests(
    cell: TableCell,
    inline_objects: Mapping[str, InlineObject],
    paragraph_handler: ParagraphHandler,
) -> list[dict[str, Any]]:
    content: list[StructuralElement] = cell.content or []
    requests: list[dict[str, Any]] = []

    for i, element in enumerate(content):
        kind = classify_element(element)
        if kind is ElementKind.TABLE:
            raise UnsupportedContentError(
                f"Nested table at index {element.start_index} is not supported"
            )
        if kind is not ElementKind.PARAGRAPH:
            logger.debug("Skipping %s element inside table cell", kind.value)
            continue
        assert element.paragraph is not None

        result = paragraph_handler(
            paragraph=element.paragraph,
            content=content,
            current_index=i,
            inline_objects=inline_objects,
            start_index=element.start_index or 0,
            end_index=element.end_index or 0,
            is_last_content_of_table_cell=i == len(content) - 1,
        )
        requests.extend(result.insert_requests)

    return requests


def handle_table(
    *,
    table: Table,
    start_index: int,
    end_index: int,
    inline_objects: Mapping[str, InlineObject],
    paragraph_handler: ParagraphHandler = handle_paragraph,
) -> list[dict[str, Any]]:
    """Generate the requests that rebuild one table.

    Args:
        table: The table to rebuild
        start_index: Source start index of the table
        end_index: Source end index of the table
        inline_objects: Inline objects of the source document, by id
        paragraph_handler: Handler used for paragraphs inside cells

    Returns:
        List of request dicts, insertTable first

    Raises:
        UnsupportedContentError: For nested tables or cell content the
            paragraph handler cannot rebuild
    """
    _ = end_index
    table_rows = table.table_rows or []
    rows = table.rows or len(table_rows)
    columns = table.columns or max(
        (len(row.table_cells or []) for row in table_rows), default=0
    )

    # The API writes a newline before the table, in place of the newline
    # the preceding paragraph left out
    requests: list[dict[str, Any]] = [
        make_insert_table(rows, columns, start_index - 1)
    ]

    for row in table_rows:
        for cell in row.table_cells or []:
            requests.extend(
                _cell_content_requests(cell, inline_objects, paragraph_handler)
            )

    merges: list[dict[str, Any]] = []
    for row_index, row in enumerate(table_rows):
        for column_index, cell in enumerate(row.table_cells or []):
            cell_style = strip_fields(
                cell.table_cell_style, *TABLE_CELL_READ_ONLY_FIELDS
            )
            fields = field_mask(cell_style)
            if fields:
                requests.append(
                    make_update_table_cell_style(
                        start_index, row_index, column_index, cell_style, fields
                    )
                )

            spans = cell.table_cell_style
            row_span = (spans.row_span or 1) if spans else 1
            column_span = (spans.column_span or 1) if spans else 1
            if row_span > 1 or column_span > 1:
                merges.append(
                    make_merge_table_cells(
                        start_index, row_index, column_index, row_span, column_span
                    )
                )

        row_style = strip_fields(row.table_row_style)
        fields = field_mask(row_style)
        if fields:
            requests.append(
                make_update_table_row_style(start_index, row_index, row_style, fields)
            )

    column_properties = (
        table.table_style.table_column_properties if table.table_style else None
    )
    for column_index, properties in enumerate(column_properties or []):
        column_style = strip_fields(properties)
        fields = field_mask(column_style)
        if fields:
            requests.append(
                make_update_table_column_properties(
                    start_index, column_index, column_style, fields
                )
            )

    # Merging moves cell content, so it goes last
    requests.extend(merges)
    return requests
