"""Appwrite REST client — remote document database, blob storage and account lookup."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from app.config import Settings
from app.exceptions import DocumentNotFound, UpstreamFailure
from app.storage import BlobFile, Document, DocumentList
from app.storage.query import Query

logger = logging.getLogger(__name__)

# Plain document keys <-> Appwrite system attributes
SYSTEM_ATTRIBUTES = {
    "id": "$id",
    "createdAt": "$createdAt",
    "updatedAt": "$updatedAt",
}
_FROM_WIRE = {v: k for k, v in SYSTEM_ATTRIBUTES.items()}


class AppwriteClient:
    """Thin async HTTP client bound to one endpoint/project.

    Admin calls authenticate with the API key; account calls use the
    end user's session secret instead.
    """

    def __init__(
        self,
        endpoint: str,
        project_id: str,
        api_key: str = "",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._endpoint = endpoint.rstrip("/")
        self._project_id = project_id
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> AppwriteClient:
        return cls(
            endpoint=settings.appwrite_endpoint,
            project_id=settings.appwrite_project_id,
            api_key=settings.appwrite_api_key,
            timeout=settings.request_timeout_seconds,
            **kwargs,
        )

    def _headers(self, session: str | None) -> dict[str, str]:
        headers = {"X-Appwrite-Project": self._project_id}
        if session:
            headers["X-Appwrite-Session"] = session
        elif self._api_key:
            headers["X-Appwrite-Key"] = self._api_key
        return headers

    async def request(
        self,
        method: str,
        path: str,
        *,
        session: str | None = None,
        **kwargs,
    ) -> Any:
        """Send one request; HTTP and transport errors become UpstreamFailure."""
        url = f"{self._endpoint}{path}"
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.request(method, url, headers=self._headers(session), **kwargs)
                resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            message = _error_message(exc.response)
            if exc.response.status_code == 404:
                raise DocumentNotFound(message) from exc
            raise UpstreamFailure(f"{method} {path} failed ({exc.response.status_code}): {message}") from exc
        except httpx.HTTPError as exc:
            raise UpstreamFailure(f"{method} {path} failed: {exc}") from exc

        if resp.status_code == 204 or not resp.content:
            return None
        return resp.json()


class AppwriteDatabases:
    """DocumentStore backed by the remote databases API."""

    def __init__(self, client: AppwriteClient):
        self._client = client

    @staticmethod
    def _path(database_id: str, collection_id: str, document_id: str | None = None) -> str:
        path = f"/databases/{database_id}/collections/{collection_id}/documents"
        return f"{path}/{document_id}" if document_id else path

    async def create_document(
        self, database_id: str, collection_id: str, document_id: str, data: Document
    ) -> Document:
        payload = {"documentId": document_id, "data": _to_wire(data)}
        result = await self._client.request("POST", self._path(database_id, collection_id), json=payload)
        return _from_wire(result)

    async def list_documents(
        self, database_id: str, collection_id: str, queries: list[Query] | None = None
    ) -> DocumentList:
        params = [("queries[]", q.to_json(SYSTEM_ATTRIBUTES)) for q in queries or []]
        result = await self._client.request("GET", self._path(database_id, collection_id), params=params)
        return DocumentList(
            total=result.get("total", 0),
            documents=[_from_wire(doc) for doc in result.get("documents", [])],
        )

    async def update_document(
        self, database_id: str, collection_id: str, document_id: str, data: Document
    ) -> Document:
        result = await self._client.request(
            "PATCH",
            self._path(database_id, collection_id, document_id),
            json={"data": _to_wire(data)},
        )
        return _from_wire(result)

    async def delete_document(self, database_id: str, collection_id: str, document_id: str) -> None:
        await self._client.request("DELETE", self._path(database_id, collection_id, document_id))


class AppwriteStorage:
    """BlobStore backed by the remote storage buckets API."""

    def __init__(self, client: AppwriteClient):
        self._client = client

    async def create_file(self, bucket_id: str, file_id: str, data: bytes, filename: str) -> BlobFile:
        result = await self._client.request(
            "POST",
            f"/storage/buckets/{bucket_id}/files",
            data={"fileId": file_id},
            files={"file": (filename, data)},
        )
        return BlobFile(
            id=result["$id"],
            name=result["name"],
            size=result.get("sizeOriginal", len(data)),
            mime_type=result.get("mimeType"),
        )

    async def delete_file(self, bucket_id: str, file_id: str) -> None:
        await self._client.request("DELETE", f"/storage/buckets/{bucket_id}/files/{file_id}")


class AppwriteAccount:
    """Account lookup for a session secret."""

    def __init__(self, client: AppwriteClient):
        self._client = client

    async def get(self, session: str) -> Document:
        result = await self._client.request("GET", "/account", session=session)
        return _from_wire(result)


def _to_wire(data: Document) -> Document:
    return {k: v for k, v in data.items() if k not in SYSTEM_ATTRIBUTES}


def _from_wire(doc: Document) -> Document:
    out: Document = {}
    for key, value in doc.items():
        if key in _FROM_WIRE:
            out[_FROM_WIRE[key]] = value
        elif not key.startswith("$"):
            out[key] = value
    return out


def _error_message(resp: httpx.Response) -> str:
    try:
        return resp.json().get("message", resp.text)
    except ValueError:
        return resp.text
