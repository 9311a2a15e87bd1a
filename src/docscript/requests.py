"""Builders for batchUpdate request dicts.

Each request is a dict with exactly one key naming the operation
(``insertText``, ``updateSectionStyle``, ...). The key is the request's tag;
``request_kind`` reads it back.
"""

from __future__ import annotations

from typing import Any

# The document body
ROOT_SEGMENT = ""


def request_kind(request: dict[str, Any]) -> str:
    """Return the operation name of a request dict."""
    return next(iter(request.keys()))


# ---------------------------------------------------------------------------
# Addressing
# ---------------------------------------------------------------------------


def utf16_len(text: str) -> int:
    """Length of a string in UTF-16 code units, the unit of document indexes.

    Characters outside the BMP take a surrogate pair, two code units.
    """
    return sum(2 if ord(char) > 0xFFFF else 1 for char in text)


def make_location(index: int, segment_id: str = ROOT_SEGMENT) -> dict[str, Any]:
    return {"segmentId": segment_id, "index": index}


def make_end_of_segment_location(segment_id: str = ROOT_SEGMENT) -> dict[str, Any]:
    return {"segmentId": segment_id}


def make_range(
    start: int, end: int, segment_id: str = ROOT_SEGMENT
) -> dict[str, Any]:
    return {"startIndex": start, "endIndex": end, "segmentId": segment_id}


def _table_cell_location(
    table_start: int, row_index: int, column_index: int
) -> dict[str, Any]:
    return {
        "tableStartLocation": make_location(table_start),
        "rowIndex": row_index,
        "columnIndex": column_index,
    }


def _table_range(
    table_start: int,
    row_index: int,
    column_index: int,
    row_span: int = 1,
    column_span: int = 1,
) -> dict[str, Any]:
    return {
        "tableCellLocation": _table_cell_location(
            table_start, row_index, column_index
        ),
        "rowSpan": row_span,
        "columnSpan": column_span,
    }


# ---------------------------------------------------------------------------
# Insertions
# ---------------------------------------------------------------------------


def make_insert_text(text: str, index: int) -> dict[str, Any]:
    return {"insertText": {"text": text, "location": make_location(index)}}


def make_insert_inline_image(
    uri: str, index: int, object_size: dict[str, Any] | None = None
) -> dict[str, Any]:
    body: dict[str, Any] = {"uri": uri, "location": make_location(index)}
    if object_size:
        body["objectSize"] = object_size
    return {"insertInlineImage": body}


def make_insert_page_break(index: int) -> dict[str, Any]:
    return {"insertPageBreak": {"location": make_location(index)}}


def make_insert_section_break(
    section_type: str, index: int | None = None
) -> dict[str, Any]:
    """Create an insertSectionBreak request.

    Without an index the break is placed at the end of the body, the only
    position that exists before the document has any section structure.
    """
    body: dict[str, Any] = {"sectionType": section_type}
    if index is None:
        body["endOfSegmentLocation"] = make_end_of_segment_location()
    else:
        body["location"] = make_location(index)
    return {"insertSectionBreak": body}


def make_insert_table(rows: int, columns: int, index: int) -> dict[str, Any]:
    return {
        "insertTable": {
            "rows": rows,
            "columns": columns,
            "location": make_location(index),
        }
    }


# ---------------------------------------------------------------------------
# Style updates
# ---------------------------------------------------------------------------


def make_update_text_style(
    start: int, end: int, text_style: dict[str, Any], fields: str
) -> dict[str, Any]:
    return {
        "updateTextStyle": {
            "textStyle": text_style,
            "fields": fields,
            "range": make_range(start, end),
        }
    }


def make_update_paragraph_style(
    start: int, end: int, paragraph_style: dict[str, Any], fields: str
) -> dict[str, Any]:
    return {
        "updateParagraphStyle": {
            "paragraphStyle": paragraph_style,
            "fields": fields,
            "range": make_range(start, end),
        }
    }


def make_update_section_style(
    start: int, end: int, section_style: dict[str, Any], fields: str
) -> dict[str, Any]:
    return {
        "updateSectionStyle": {
            "sectionStyle": section_style,
            "range": make_range(start, end),
            "fields": fields,
        }
    }


def make_update_document_style(
    document_style: dict[str, Any], fields: str
) -> dict[str, Any]:
    return {
        "updateDocumentStyle": {
            "documentStyle": document_style,
            "fields": fields,
        }
    }


def make_update_table_cell_style(
    table_start: int,
    row_index: int,
    column_index: int,
    table_cell_style: dict[str, Any],
    fields: str,
) -> dict[str, Any]:
    return {
        "updateTableCellStyle": {
            "tableCellStyle": table_cell_style,
            "fields": fields,
            "tableRange": _table_range(table_start, row_index, column_index),
        }
    }


def make_update_table_row_style(
    table_start: int,
    row_index: int,
    table_row_style: dict[str, Any],
    fields: str,
) -> dict[str, Any]:
    return {
        "updateTableRowStyle": {
            "tableStartLocation": make_location(table_start),
            "rowIndices": [row_index],
            "tableRowStyle": table_row_style,
            "fields": fields,
        }
    }


def make_update_table_column_properties(
    table_start: int,
    column_index: int,
    column_properties: dict[str, Any],
    fields: str,
) -> dict[str, Any]:
    return {
        "updateTableColumnProperties": {
            "tableStartLocation": make_location(table_start),
            "columnIndices": [column_index],
            "tableColumnProperties": column_properties,
            "fields": fields,
        }
    }


def make_merge_table_cells(
    table_start: int,
    row_index: int,
    column_index: int,
    row_span: int,
    column_span: int,
) -> dict[str, Any]:
    return {
        "mergeTableCells": {
            "tableRange": _table_range(
                table_start, row_index, column_index, row_span, column_span
            )
        }
    }
