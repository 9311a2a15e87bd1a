"""Requests for section break structural elements."""

from __future__ import annotations

from typing import Any

from docscript.api_types import SectionBreak, SectionType
from docscript.fields import SECTION_READ_ONLY_FIELDS, field_mask, strip_fields
from docscript.requests import make_insert_section_break, make_update_section_style


def resolve_start_index(start_index: int | None) -> int:
    """The first section break of a body is reported without a start index."""
    return start_index if start_index is not None else 0


def handle_section_break(
    *,
    section_break: SectionBreak,
    start_index: int | None,
    end_index: int,
) -> list[dict[str, Any]]:
    """Insert a section break and apply its style.

    A break at index 0 opens the document. The target has no section
    structure yet, so it is inserted at the end of the body and typed
    CONTINUOUS. Any other break is inserted at its own index with its own
    type, an unspecified type being treated as CONTINUOUS.

    The source's ``sectionType`` is read-only and never part of the style
    update.
    """
    start = resolve_start_index(start_index)
    section_style = section_break.section_style

    style = strip_fields(section_style, *SECTION_READ_ONLY_FIELDS)
    update = make_update_section_style(start, end_index, style, field_mask(style))

    if start == 0:
        return [make_insert_section_break(SectionType.CONTINUOUS.value), update]

    section_type = section_style.section_type if section_style else None
    if section_type in (None, SectionType.SECTION_TYPE_UNSPECIFIED):
        section_type = SectionType.CONTINUOUS
    return [make_insert_section_break(section_type.value, start), update]
