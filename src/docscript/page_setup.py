"""Requests that prepare a freshly created document before content is added.

A new Google Doc already contains a single newline. Everything docscript
inserts lands in front of it, so after the build that newline is the last
line of the document. It is shrunk to a 1pt line with no spacing so that a
source document filling its last page does not spill onto an extra, empty
page.
"""

from __future__ import annotations

from typing import Any

from docscript.api_types import Dimension, DocumentStyle
from docscript.fields import field_mask
from docscript.requests import (
    make_update_document_style,
    make_update_paragraph_style,
    make_update_text_style,
)

# Range of the placeholder newline in a new document
_PLACEHOLDER_START = 1
_PLACEHOLDER_END = 2


def shrink_original_newline() -> list[dict[str, Any]]:
    """Shrink the placeholder newline so it takes almost no vertical space."""
    return [
        make_update_text_style(
            _PLACEHOLDER_START,
            _PLACEHOLDER_END,
            {"fontSize": {"magnitude": 1, "unit": "PT"}},
            "fontSize",
        ),
        make_update_paragraph_style(
            _PLACEHOLDER_START,
            _PLACEHOLDER_END,
            {
                "lineSpacing": 0.06,
                "spaceAbove": {"magnitude": 0, "unit": "PT"},
                "spaceBelow": {"magnitude": 0, "unit": "PT"},
            },
            "lineSpacing,spaceAbove,spaceBelow",
        ),
    ]


def _points(magnitude: float | None) -> dict[str, Any] | None:
    if magnitude is None:
        return None
    return {"magnitude": magnitude, "unit": "PT"}


def change_page_dimensions(
    *, width: float | None, height: float | None
) -> dict[str, Any]:
    """Set the page size. Absent magnitudes are left out of the request."""
    page_size = {
        key: value
        for key, value in (("width", _points(width)), ("height", _points(height)))
        if value is not None
    }
    style = {"pageSize": page_size} if page_size else {}
    return make_update_document_style(style, field_mask(style))


def change_page_margins(
    *,
    top: float | None,
    bottom: float | None,
    right: float | None,
    left: float | None,
) -> dict[str, Any]:
    """Set the page margins. Absent magnitudes are left out of the request."""
    style = {
        "marginTop": _points(top),
        "marginBottom": _points(bottom),
        "marginRight": _points(right),
        "marginLeft": _points(left),
    }
    style = {key: value for key, value in style.items() if value is not None}
    return make_update_document_style(style, field_mask(style))


def change_page_orientation(flip: bool | None) -> dict[str, Any]:
    """Set whether pages are landscape."""
    style = {} if flip is None else {"flipPageOrientation": flip}
    return make_update_document_style(style, field_mask(style))


def _magnitude(dimension: Dimension | None) -> float | None:
    return dimension.magnitude if dimension else None


def document_setup_requests(
    document_style: DocumentStyle | None,
) -> list[dict[str, Any]]:
    """Requests that always open a build, in their fixed order.

    The two placeholder-newline requests come first, followed by page size,
    orientation and margins.
    """
    style = document_style or DocumentStyle()
    page_size = style.page_size

    return [
        *shrink_original_newline(),
        change_page_dimensions(
            width=_magnitude(page_size.width if page_size else None),
            height=_magnitude(page_size.height if page_size else None),
        ),
        change_page_orientation(style.flip_page_orientation),
        change_page_margins(
            top=_magnitude(style.margin_top),
            bottom=_magnitude(style.margin_bottom),
            right=_magnitude(style.margin_right),
            left=_magnitude(style.margin_left),
        ),
    ]
