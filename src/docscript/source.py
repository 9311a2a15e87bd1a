"""The slice of a source document the compiler works from."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from docscript.api_types import (
    Body,
    Document,
    DocumentStyle,
    InlineObject,
    StructuralElement,
    Tab,
)
from docscript.exceptions import MalformedDocumentError


@dataclass(frozen=True)
class SourceDocument:
    """Document-wide style, body content and inline objects of one document."""

    document_style: DocumentStyle | None
    content: tuple[StructuralElement, ...]
    inline_objects: Mapping[str, InlineObject]


def _iter_tabs(tabs: list[Tab] | None) -> Iterator[Tab]:
    for tab in tabs or []:
        yield tab
        yield from _iter_tabs(tab.child_tabs)


def _find_tab(document: Document, tab_id: str | None) -> Tab:
    tabs = list(_iter_tabs(document.tabs))
    if not tabs:
        raise MalformedDocumentError("Document has neither a body nor tabs")
    if tab_id is None:
        return tabs[0]
    for tab in tabs:
        if tab.tab_properties and tab.tab_properties.tab_id == tab_id:
            return tab
    raise MalformedDocumentError(f"Tab not found: {tab_id}")


def extract_source(
    document: Document | Mapping[str, Any],
    *,
    tab_id: str | None = None,
) -> SourceDocument:
    """Pick the body, document style and inline objects out of a document.

    Documents fetched without tab content carry them at the top level.
    Documents fetched with ``includeTabsContent=true`` carry them per tab;
    the first tab is used unless ``tab_id`` names another.

    Raises:
        pydantic.ValidationError: If a raw mapping is not a valid Document
        MalformedDocumentError: If there is no body content to compile
    """
    if not isinstance(document, Document):
        document = Document.model_validate(document)

    body: Body | None
    if document.body is not None and tab_id is None:
        body = document.body
        document_style = document.document_style
        inline_objects = document.inline_objects
    else:
        tab = _find_tab(document, tab_id)
        if tab.document_tab is None:
            raise MalformedDocumentError("Tab has no document content")
        body = tab.document_tab.body
        document_style = tab.document_tab.document_style
        inline_objects = tab.document_tab.inline_objects

    if body is None or body.content is None:
        raise MalformedDocumentError("Document body has no content")

    return SourceDocument(
        document_style=document_style,
        content=tuple(body.content),
        inline_objects=MappingProxyType(dict(inline_objects or {})),
    )
