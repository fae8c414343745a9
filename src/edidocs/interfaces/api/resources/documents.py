"""Document API resources."""

import mimetypes
from uuid import UUID

import falcon.asgi

from edidocs.application.dto import DocumentFilter, DocumentOutput
from edidocs.application.use_cases.document.get_document import GetDocumentUseCase
from edidocs.application.use_cases.document.list_check_identifiers import (
    ListCheckIdentifiersUseCase,
)
from edidocs.application.use_cases.document.list_documents import ListDocumentsUseCase
from edidocs.domain.exceptions import NotFound
from edidocs.domain.value_objects import DocumentKind


def _optional_date(value) -> str | None:
    return value.isoformat() if value else None


def _document_to_dict(d: DocumentOutput) -> dict:
    return {
        "id": str(d.id),
        "title": d.title,
        "document_name": d.document_name,
        "source_uri": d.source_uri,
        "filename": d.filename,
        "kind": d.kind.value,
        "message_types": d.message_types,
        "bdew_process": d.bdew_process,
        "message_type_version": d.message_type_version,
        "document_date": _optional_date(d.document_date),
        "valid_from": _optional_date(d.valid_from),
        "valid_to": _optional_date(d.valid_to),
        "is_latest_version": d.is_latest_version,
        "check_identifiers": {str(k): v for k, v in sorted(d.check_identifiers.items())},
        "created_at": d.created_at.isoformat(),
        "updated_at": d.updated_at.isoformat(),
    }


def _parse_document_id(document_id: str, resp: falcon.asgi.Response) -> UUID | None:
    try:
        return UUID(document_id)
    except ValueError:
        resp.status = falcon.HTTP_400
        resp.media = {"error": "Invalid UUID"}
        return None


class DocumentsResource:
    """GET /v1/documents - list documents.

    Query params: latest (bool), kind (ahb, mig, general), message_type,
    bdew_process.
    """

    def __init__(self, list_documents: ListDocumentsUseCase) -> None:
        self._list_documents = list_documents

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        kind_param = req.get_param("kind")
        try:
            kind = DocumentKind(kind_param) if kind_param else None
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid kind: {kind_param}"}
            return

        document_filter = DocumentFilter(
            latest_only=req.get_param_as_bool("latest", default=False),
            kind=kind,
            message_type=req.get_param("message_type"),
            bdew_process=req.get_param("bdew_process"),
        )
        documents = await self._list_documents.execute(document_filter)
        resp.media = {"documents": [_document_to_dict(d) for d in documents]}
        resp.status = falcon.HTTP_200


class DocumentResource:
    """GET /v1/documents/{id} - get document."""

    def __init__(self, get_document: GetDocumentUseCase) -> None:
        self._get_document = get_document

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        document_id: str,
    ) -> None:
        doc_id = _parse_document_id(document_id, resp)
        if doc_id is None:
            return
        try:
            result = await self._get_document.execute(doc_id)
            resp.media = _document_to_dict(result)
            resp.status = falcon.HTTP_200
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Document not found"}


class DocumentFileResource:
    """GET /v1/documents/{id}/file - mirrored binary as download."""

    def __init__(self, get_document: GetDocumentUseCase) -> None:
        self._get_document = get_document

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        document_id: str,
    ) -> None:
        doc_id = _parse_document_id(document_id, resp)
        if doc_id is None:
            return
        try:
            attachment = await self._get_document.attachment(doc_id)
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "File not found"}
            return
        content_type, _ = mimetypes.guess_type(attachment.filename)
        resp.content_type = content_type or "application/octet-stream"
        resp.downloadable_as = attachment.filename
        resp.data = attachment.content
        resp.status = falcon.HTTP_200


class CheckIdentifiersResource:
    """GET /v1/check-identifiers - identifiers of the current AHBs."""

    def __init__(self, list_check_identifiers: ListCheckIdentifiersUseCase) -> None:
        self._list_check_identifiers = list_check_identifiers

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        identifiers = await self._list_check_identifiers.execute()
        resp.media = {"check_identifiers": identifiers}
        resp.status = falcon.HTTP_200
