"""Where source documents come from and where compiled batches go.

``GoogleDocsTransport`` talks to the Docs REST API over httpx.
``LocalFileTransport`` serves documents from JSON files on disk and keeps
every created document and applied batch in memory.
"""

from __future__ import annotations

import json
import ssl
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path

import certifi
import httpx

API_BASE = "https://docs.googleapis.com/v1/documents"
DEFAULT_TIMEOUT = 60


class TransportError(Exception):
    """A document could not be read, created or updated."""


class AuthenticationError(TransportError):
    """The access token was rejected (401) or lacks permission (403)."""


class NotFoundError(TransportError):
    """No document with the requested ID is visible to the caller."""


class APIError(TransportError):
    """Any other non-success response from the Docs API."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


_STATUS_ERRORS: dict[int, tuple[type[TransportError], str]] = {
    401: (AuthenticationError, "Access token is invalid or expired"),
    403: (AuthenticationError, "Token lacks the documents scope or access"),
    404: (NotFoundError, "No such document, or it is not shared with you"),
}


def _error_for_status(response: httpx.Response) -> TransportError:
    status = response.status_code
    if status in _STATUS_ERRORS:
        error_class, message = _STATUS_ERRORS[status]
        return error_class(message)
    return APIError(f"API error ({status}): {response.text}", status_code=status)


@dataclass(frozen=True)
class DocumentData:
    """A document resource as returned by the API, plus its id and title."""

    document_id: str
    title: str
    raw: dict[str, Any]

    @classmethod
    def from_response(
        cls, response: dict[str, Any], document_id: str
    ) -> DocumentData:
        return cls(
            document_id=response.get("documentId", document_id),
            title=response.get("title", ""),
            raw=response,
        )


class Transport(ABC):
    """Reads source documents, creates targets and applies batches."""

    @abstractmethod
    async def get_document(self, document_id: str) -> DocumentData:
        """Fetch a document with all of its tabs."""
        ...

    @abstractmethod
    async def create_document(self, title: str) -> DocumentData:
        """Create an empty document titled ``title``."""
        ...

    @abstractmethod
    async def batch_update(
        self, document_id: str, requests: list[dict[str, Any]]
    ) -> dict[str, Any]:
        """Send ``requests`` to ``document_id`` as one batchUpdate call.

        Returns:
            The batchUpdate response, one reply per request
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        ...


class GoogleDocsTransport(Transport):
    """Transport backed by the Docs REST API."""

    def __init__(
        self,
        access_token: str,
        timeout: int = DEFAULT_TIMEOUT,
        *,
        api_base: str = API_BASE,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Build a client authorised with a bearer token.

        Args:
            access_token: OAuth2 token carrying the documents scope
            timeout: Seconds before a request is abandoned
            api_base: Documents endpoint, overridable for tests and proxies
            client: HTTP client to use as is, skipping token and TLS setup
        """
        self._api_base = api_base.rstrip("/")
        if client is not None:
            self._client = client
            return
        ssl_context = ssl.create_default_context(cafile=certifi.where())
        self._client = httpx.AsyncClient(
            timeout=timeout,
            verify=ssl_context,
            headers={
                "Authorization": f"Bearer {access_token}",
                "Accept": "application/json",
            },
        )

    async def get_document(self, document_id: str) -> DocumentData:
        url = f"{self._api_base}/{document_id}?includeTabsContent=true"
        response = await self._send("GET", url)
        return DocumentData.from_response(response, document_id)

    async def create_document(self, title: str) -> DocumentData:
        response = await self._send("POST", self._api_base, {"title": title})
        return DocumentData(
            document_id=response["documentId"],
            title=response.get("title", title),
            raw=response,
        )

    async def batch_update(
        self, document_id: str, requests: list[dict[str, Any]]
    ) -> dict[str, Any]:
        url = f"{self._api_base}/{document_id}:batchUpdate"
        return await self._send("POST", url, {"requests": requests})

    async def _send(
        self, method: str, url: str, body: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        try:
            response = await self._client.request(method, url, json=body)
        except httpx.RequestError as e:
            raise TransportError(f"Network error: {e}") from e
        if response.is_error:
            raise _error_for_status(response)
        result: dict[str, Any] = response.json()
        return result

    async def close(self) -> None:
        await self._client.aclose()


class LocalFileTransport(Transport):
    """Transport over a directory of ``<document_id>.json`` files.

    Nothing is written to disk. Created documents land in ``created`` and each
    batch is appended to ``applied[document_id]``.
    """

    def __init__(self, golden_dir: Path) -> None:
        self._golden_dir = golden_dir
        self.created: list[DocumentData] = []
        self.applied: dict[str, list[list[dict[str, Any]]]] = {}

    async def get_document(self, document_id: str) -> DocumentData:
        path = self._golden_dir / f"{document_id}.json"
        if not path.exists():
            raise NotFoundError(f"Document not found: {path}")
        response = json.loads(path.read_text(encoding="utf-8"))
        return DocumentData.from_response(response, document_id)

    async def create_document(self, title: str) -> DocumentData:
        document_id = f"local_document_{len(self.created) + 1}"
        document = DocumentData(
            document_id=document_id,
            title=title,
            raw={"documentId": document_id, "title": title},
        )
        self.created.append(document)
        return document

    async def batch_update(
        self, document_id: str, requests: list[dict[str, Any]]
    ) -> dict[str, Any]:
        self.applied.setdefault(document_id, []).append(list(requests))
        return {"documentId": document_id, "replies": [{}] * len(requests)}

    async def close(self) -> None:
        pass
