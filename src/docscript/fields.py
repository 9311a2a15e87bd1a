"""Field masks for partial style updates.

Every ``update*Style`` request names the fields it is allowed to touch; fields
left out of the mask keep whatever value the target already has.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

# Output-only style fields the API rejects in update requests
SECTION_READ_ONLY_FIELDS = (
    "sectionType",
    "defaultHeaderId",
    "defaultFooterId",
    "firstPageHeaderId",
    "firstPageFooterId",
    "evenPageHeaderId",
    "evenPageFooterId",
)
PARAGRAPH_READ_ONLY_FIELDS = ("headingId", "tabStops")
TABLE_CELL_READ_ONLY_FIELDS = ("rowSpan", "columnSpan")


def style_dict(style: BaseModel | Mapping[str, Any] | None) -> dict[str, Any]:
    """Return an API-shaped copy of a style, dropping absent values."""
    if style is None:
        return {}
    if isinstance(style, BaseModel):
        return style.model_dump(by_alias=True, exclude_none=True)
    return {key: value for key, value in style.items() if value is not None}


def field_mask(style: BaseModel | Mapping[str, Any] | None) -> str:
    """Name the top-level fields present on a partial style.

    The names keep the style's own key order and are joined with commas.
    Keys whose value is ``None`` are not part of the mask.

    Example:
        >>> field_mask({"lineSpacing": 0.06, "spaceAbove": {"magnitude": 0}})
        'lineSpacing,spaceAbove'
        >>> field_mask({})
        ''
    """
    return ",".join(style_dict(style))


def strip_fields(
    style: BaseModel | Mapping[str, Any] | None, *names: str
) -> dict[str, Any]:
    """Return a copy of ``style`` without the given fields."""
    return {key: value for key, value in style_dict(style).items() if key not in names}
