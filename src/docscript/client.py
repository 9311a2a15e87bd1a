"""ReplicateClient - main interface for docscript compile/replicate operations.

Fetches a source document through a transport, compiles it, and applies the
resulting requests to a newly created document.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from docscript.compiler import CompileFailure, CompileResult, compile_document
from docscript.paragraphs import ParagraphHandler, handle_paragraph
from docscript.tables import TableHandler, handle_table

if TYPE_CHECKING:
    from docscript.transport import Transport

logger = logging.getLogger(__name__)


@dataclass
class ReplicateResult:
    """Result of a replicate operation."""

    success: bool
    source_document_id: str
    document_id: str | None = None
    requests_applied: int = 0
    message: str = ""
    failure: CompileFailure | None = None


class ReplicateClient:
    """Main client for compiling and replicating Google Docs."""

    def __init__(
        self,
        transport: Transport,
        *,
        paragraph_handler: ParagraphHandler = handle_paragraph,
        table_handler: TableHandler = handle_table,
    ) -> None:
        self._transport = transport
        self._paragraph_handler = paragraph_handler
        self._table_handler = table_handler

    async def compile(
        self, document_id: str, *, tab_id: str | None = None
    ) -> CompileResult:
        """Fetch a document and compile it into batchUpdate requests.

        Args:
            document_id: The source document identifier
            tab_id: Tab to compile, the first tab when omitted

        Returns:
            CompileResult for the fetched document
        """
        document_data = await self._transport.get_document(document_id)
        return compile_document(
            document_data.raw,
            paragraph_handler=self._paragraph_handler,
            table_handler=self._table_handler,
            tab_id=tab_id,
        )

    async def replicate(
        self,
        document_id: str,
        *,
        title: str | None = None,
        tab_id: str | None = None,
    ) -> ReplicateResult:
        """Rebuild a document as a new Google Doc.

        The target is only created once compilation has succeeded, and all
        requests are sent in a single batchUpdate.

        Args:
            document_id: The source document identifier
            title: Title of the copy, "Copy of <source title>" when omitted
            tab_id: Tab to replicate, the first tab when omitted

        Returns:
            ReplicateResult with the new document id on success
        """
        document_data = await self._transport.get_document(document_id)
        result = compile_document(
            document_data.raw,
            paragraph_handler=self._paragraph_handler,
            table_handler=self._table_handler,
            tab_id=tab_id,
        )

        if not result.success:
            assert result.failure is not None
            return ReplicateResult(
                success=False,
                source_document_id=document_id,
                message=f"Compilation failed: {result.failure.message}",
                failure=result.failure,
            )

        requests = result.unwrap()
        target = await self._transport.create_document(
            title or f"Copy of {document_data.title}".strip()
        )
        logger.info(
            "Applying %d requests to %s", len(requests), target.document_id
        )
        await self._transport.batch_update(target.document_id, requests)

        return ReplicateResult(
            success=True,
            source_document_id=document_id,
            document_id=target.document_id,
            requests_applied=len(requests),
            message=f"Applied {len(requests)} requests",
        )
