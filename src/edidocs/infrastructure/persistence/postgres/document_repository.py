"""PostgreSQL document repository implementation."""

from typing import Any
from uuid import UUID

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from edidocs.application.dto import Attachment
from edidocs.domain.entities import EdiDocument
from edidocs.domain.value_objects import PENDING, Mirrored

_COLUMNS = (
    "id, raw_title, document_name, source_uri, mirror_filename, contained_message_types, "
    "is_mig, is_ahb, bdew_process, message_type_version, document_date, valid_from, "
    "valid_to, is_latest_version, check_identifiers, created_at, updated_at"
)


def _row_to_document(r: tuple[Any, ...]) -> EdiDocument:
    return EdiDocument(
        id=r[0],
        raw_title=r[1],
        document_name=r[2],
        source_uri=r[3],
        mirror=Mirrored(filename=r[4]) if r[4] else PENDING,
        contained_message_types=tuple(r[5]) if r[5] is not None else None,
        is_mig=r[6],
        is_ahb=r[7],
        bdew_process=r[8],
        message_type_version=r[9],
        document_date=r[10],
        valid_from=r[11],
        valid_to=r[12],
        is_latest_version=r[13],
        # JSON object keys are strings
        check_identifiers={int(k): list(v) for k, v in (r[14] or {}).items()},
        created_at=r[15],
        updated_at=r[16],
    )


def _document_params(document: EdiDocument) -> tuple[Any, ...]:
    return (
        document.raw_title,
        document.document_name,
        document.source_uri,
        document.filename,
        list(document.contained_message_types)
        if document.contained_message_types is not None
        else None,
        document.is_mig,
        document.is_ahb,
        document.bdew_process,
        document.message_type_version,
        document.document_date,
        document.valid_from,
        document.valid_to,
        document.is_latest_version,
        Jsonb({str(k): v for k, v in document.check_identifiers.items()}),
        document.updated_at,
    )


class PostgresDocumentRepository:
    """Document repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, document_id: UUID) -> EdiDocument | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM edi_document WHERE id = %s", (document_id,)
        )
        r = await cur.fetchone()
        return _row_to_document(r) if r else None

    async def list_all(self) -> list[EdiDocument]:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM edi_document ORDER BY created_at, id"
        )
        return [_row_to_document(r) for r in await cur.fetchall()]

    async def list_pending(self, *, limit: int) -> list[EdiDocument]:
        """Documents without a mirrored file, oldest first."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM edi_document WHERE mirror_filename IS NULL "
            "ORDER BY created_at, id LIMIT %s",
            (limit,),
        )
        return [_row_to_document(r) for r in await cur.fetchall()]

    async def create(self, document: EdiDocument) -> EdiDocument:
        await self._conn.execute(
            f"INSERT INTO edi_document ({_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (document.id, *_document_params(document)[:-1], document.created_at, document.updated_at),
        )
        return document

    async def update(self, document: EdiDocument) -> EdiDocument:
        await self._conn.execute(
            "UPDATE edi_document SET raw_title=%s, document_name=%s, source_uri=%s, "
            "mirror_filename=%s, contained_message_types=%s, is_mig=%s, is_ahb=%s, "
            "bdew_process=%s, message_type_version=%s, document_date=%s, valid_from=%s, "
            "valid_to=%s, is_latest_version=%s, check_identifiers=%s, updated_at=%s "
            "WHERE id=%s",
            (*_document_params(document), document.id),
        )
        return document

    async def delete(self, document_id: UUID) -> None:
        """Hard delete; the attachment goes with it (ON DELETE CASCADE)."""
        await self._conn.execute("DELETE FROM edi_document WHERE id = %s", (document_id,))

    async def save_attachment(self, document_id: UUID, attachment: Attachment) -> None:
        await self._conn.execute(
            "INSERT INTO edi_document_attachment (document_id, filename, content) "
            "VALUES (%s, %s, %s) "
            "ON CONFLICT (document_id) DO UPDATE SET filename = EXCLUDED.filename, "
            "content = EXCLUDED.content",
            (document_id, attachment.filename, attachment.content),
        )

    async def get_attachment(self, document_id: UUID) -> Attachment | None:
        cur = await self._conn.execute(
            "SELECT filename, content FROM edi_document_attachment WHERE document_id = %s",
            (document_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return Attachment(filename=r[0], content=bytes(r[1]))
