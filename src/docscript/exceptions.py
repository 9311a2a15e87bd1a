"""Exceptions raised while compiling a document into batchUpdate requests."""

from __future__ import annotations


class CompileError(Exception):
    """Base exception for all compilation errors."""

    pass


class MalformedDocumentError(CompileError):
    """Raised when the source document lacks fields compilation depends on."""

    pass


class SectionBreakPlacementError(MalformedDocumentError):
    """Raised when a section break sits where its address cannot be trusted."""

    def __init__(self, element_index: int, message: str) -> None:
        self.element_index = element_index
        super().__init__(f"Section break at element {element_index}: {message}")


class UnsupportedContentError(CompileError):
    """Raised by a handler for content it cannot rebuild without shifting indexes."""

    pass


class HandlerError(CompileError):
    """Raised when a paragraph or table handler fails."""

    def __init__(self, handler: str, element_index: int, cause: Exception) -> None:
        self.handler = handler
        self.element_index = element_index
        self.cause = cause
        super().__init__(
            f"{handler} handler failed at element {element_index}: "
            f"{type(cause).__name__}: {cause}"
        )


class PendingNewlineError(CompileError):
    """Raised when a pending newline style is not consumed by the next table."""

    def __init__(self, element_index: int, message: str) -> None:
        self.element_index = element_index
        super().__init__(message)
