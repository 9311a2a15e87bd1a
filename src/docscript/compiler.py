"""Compile a source document into the batchUpdate requests that rebuild it.

The requests are meant for a newly created, empty document. They open with
the fixed setup requests from ``page_setup`` and continue with the requests
of every structural element, in source order.

One piece of state crosses element boundaries. Inserting a table makes the
API write a newline in front of it, which is the closing newline of the
paragraph before the table. That paragraph's style can only be applied once
the table exists, so the paragraph handler hands it back as a pending
newline style and the compiler emits it right after the table's requests.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, assert_never

from pydantic import ValidationError

from docscript.api_types import (
    Document,
    ElementKind,
    InlineObject,
    StructuralElement,
    classify_element,
)
from docscript.exceptions import (
    CompileError,
    HandlerError,
    MalformedDocumentError,
    PendingNewlineError,
    SectionBreakPlacementError,
)
from docscript.page_setup import document_setup_requests
from docscript.paragraphs import ParagraphHandler, handle_paragraph
from docscript.sections import handle_section_break, resolve_start_index
from docscript.source import extract_source
from docscript.tables import TableHandler, handle_table

logger = logging.getLogger(__name__)


class FailureKind(Enum):
    """Why a compilation produced no requests."""

    MALFORMED_INPUT = "malformed_input"
    COLLABORATOR_FAULT = "collaborator_fault"
    INVARIANT_VIOLATION = "invariant_violation"
    INTERNAL = "internal"


@dataclass(frozen=True)
class CompileFailure:
    """Details of a failed compilation."""

    kind: FailureKind
    message: str
    element_index: int | None = None


@dataclass(frozen=True)
class CompileResult:
    """Either the complete request list or the reason there is none.

    A failed compilation never exposes the requests built before the fault.
    """

    requests: list[dict[str, Any]] | None = None
    failure: CompileFailure | None = None

    @property
    def success(self) -> bool:
        return self.failure is None

    def unwrap(self) -> list[dict[str, Any]]:
        """Return the requests, raising CompileError for a failed compilation."""
        if self.failure is not None:
            raise CompileError(f"{self.failure.kind.value}: {self.failure.message}")
        assert self.requests is not None
        return self.requests


@dataclass(frozen=True)
class _Pass:
    """Inputs shared by every step of one compilation pass."""

    content: Sequence[StructuralElement]
    inline_objects: Mapping[str, InlineObject]
    paragraph_handler: ParagraphHandler
    table_handler: TableHandler


def _required_end(element: StructuralElement, index: int) -> int:
    if element.end_index is None:
        raise MalformedDocumentError(f"Structural element {index} has no endIndex")
    return element.end_index


def _check_section_break_placement(
    step: _Pass, index: int, element: StructuralElement
) -> None:
    start = resolve_start_index(element.start_index)
    if start == 0 and index != 0:
        raise SectionBreakPlacementError(
            index, "a section break at index 0 must be the first element"
        )
    if start != 0 and index == len(step.content) - 1:
        raise SectionBreakPlacementError(
            index, "a trailing section break must be removed before compiling"
        )
    # insertSectionBreak writes its own newline before the break, so a break
    # after earlier content lands one index past its source position.
    if start != 0:
        raise SectionBreakPlacementError(
            index,
            f"a section break at source index {start} cannot follow body content",
        )


def _compile_element(
    step: _Pass,
    index: int,
    element: StructuralElement,
    pending_newline_style: dict[str, Any] | None,
) -> tuple[list[dict[str, Any]], dict[str, Any] | None]:
    """Compile one element.

    Takes the pending newline style left by the previous element and returns
    the element's requests with the pending newline style for the next one.
    """
    kind = classify_element(element)
    if pending_newline_style is not None and kind is not ElementKind.TABLE:
        raise PendingNewlineError(
            index,
            f"Element {index} is a {kind.value}, but the previous paragraph "
            "left a newline style for a table",
        )

    match kind:
        case ElementKind.PARAGRAPH:
            assert element.paragraph is not None
            try:
                result = step.paragraph_handler(
                    paragraph=element.paragraph,
                    content=step.content,
                    current_index=index,
                    inline_objects=step.inline_objects,
                    start_index=element.start_index or 0,
                    end_index=_required_end(element, index),
                    is_last_content_of_table_cell=False,
                )
            except MalformedDocumentError:
                raise
            except Exception as e:
                raise HandlerError("paragraph", index, e) from e
            return list(result.insert_requests), result.newline_style_before_table

        case ElementKind.SECTION_BREAK:
            assert element.section_break is not None
            _check_section_break_placement(step, index, element)
            requests = handle_section_break(
                section_break=element.section_break,
                start_index=element.start_index,
                end_index=_required_end(element, index),
            )
            return requests, None

        case ElementKind.TABLE:
            assert element.table is not None
            try:
                requests = list(
                    step.table_handler(
                        table=element.table,
                        start_index=element.start_index or 0,
                        end_index=_required_end(element, index),
                        inline_objects=step.inline_objects,
                    )
                )
            except MalformedDocumentError:
                raise
            except Exception as e:
                raise HandlerError("table", index, e) from e
            if pending_newline_style is not None:
                requests.append(pending_newline_style)
            return requests, None

        case ElementKind.UNSUPPORTED:
            logger.debug("Skipping unsupported structural element %d", index)
            return [], None

        case _:
            assert_never(kind)


def compile_structural_elements(
    content: Sequence[StructuralElement],
    inline_objects: Mapping[str, InlineObject],
    *,
    paragraph_handler: ParagraphHandler = handle_paragraph,
    table_handler: TableHandler = handle_table,
) -> list[dict[str, Any]]:
    """Compile body content into requests, in source order.

    Raises:
        CompileError: On malformed content, a failing handler, or a pending
            newline style that no table consumed
    """
    step = _Pass(content, inline_objects, paragraph_handler, table_handler)
    requests: list[dict[str, Any]] = []
    pending_newline_style: dict[str, Any] | None = None

    for index, element in enumerate(content):
        emitted, pending_newline_style = _compile_element(
            step, index, element, pending_newline_style
        )
        requests.extend(emitted)

    if pending_newline_style is not None:
        raise PendingNewlineError(
            len(content) - 1,
            "Content ends with a newline style waiting for a table",
        )
    return requests


def _failure_kind(error: Exception) -> FailureKind:
    if isinstance(error, (MalformedDocumentError, ValidationError)):
        return FailureKind.MALFORMED_INPUT
    if isinstance(error, HandlerError):
        return FailureKind.COLLABORATOR_FAULT
    if isinstance(error, PendingNewlineError):
        return FailureKind.INVARIANT_VIOLATION
    return FailureKind.INTERNAL


def compile_document(
    document: Document | Mapping[str, Any],
    *,
    paragraph_handler: ParagraphHandler = handle_paragraph,
    table_handler: TableHandler = handle_table,
    tab_id: str | None = None,
) -> CompileResult:
    """Compile a document into the requests that rebuild it from empty.

    Args:
        document: A Document, or the raw JSON returned by documents.get
        paragraph_handler: Handler for top-level paragraphs
        table_handler: Handler for top-level tables
        tab_id: Tab to compile when the document carries tab content

    Returns:
        CompileResult holding every request, setup requests first, or the
        failure that stopped the pass
    """
    try:
        source = extract_source(document, tab_id=tab_id)
        requests = [
            *document_setup_requests(source.document_style),
            *compile_structural_elements(
                source.content,
                source.inline_objects,
                paragraph_handler=paragraph_handler,
                table_handler=table_handler,
            ),
        ]
    except Exception as e:
        kind = _failure_kind(e)
        element_index = getattr(e, "element_index", None)
        logger.exception(
            "Document compilation failed (%s, element %s): %s",
            kind.value,
            element_index,
            e,
        )
        return CompileResult(
            failure=CompileFailure(
                kind=kind, message=str(e), element_index=element_index
            )
        )

    logger.debug(
        "Compiled %d structural elements into %d requests",
        len(source.content),
        len(requests),
    )
    return CompileResult(requests=requests)
