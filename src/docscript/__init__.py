"""docscript - Compile Google Docs into batchUpdate requests that rebuild them.

This library turns a document returned by documents.get into the ordered
list of batchUpdate requests that reproduces it in a new, empty document.
"""

__version__ = "0.1.0"

from docscript.api_types import Document, ElementKind, classify_element
from docscript.client import ReplicateClient, ReplicateResult
from docscript.compiler import (
    CompileFailure,
    CompileResult,
    FailureKind,
    compile_document,
    compile_structural_elements,
)
from docscript.exceptions import (
    CompileError,
    HandlerError,
    MalformedDocumentError,
    PendingNewlineError,
    SectionBreakPlacementError,
    UnsupportedContentError,
)
from docscript.fields import field_mask, strip_fields
from docscript.paragraphs import ParagraphRequests, handle_paragraph
from docscript.tables import handle_table
from docscript.transport import (
    APIError,
    AuthenticationError,
    GoogleDocsTransport,
    LocalFileTransport,
    NotFoundError,
    Transport,
    TransportError,
)

__all__ = [
    "APIError",
    "AuthenticationError",
    "CompileError",
    "CompileFailure",
    "CompileResult",
    "Document",
    "ElementKind",
    "FailureKind",
    "GoogleDocsTransport",
    "HandlerError",
    "LocalFileTransport",
    "MalformedDocumentError",
    "NotFoundError",
    "ParagraphRequests",
    "PendingNewlineError",
    "ReplicateClient",
    "ReplicateResult",
    "SectionBreakPlacementError",
    "Transport",
    "TransportError",
    "UnsupportedContentError",
    "__version__",
    "classify_element",
    "compile_document",
    "compile_structural_elements",
    "field_mask",
    "handle_paragraph",
    "handle_table",
    "strip_fields",
]
