"""Document DTOs."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from edidocs.domain.entities import EdiDocument
from edidocs.domain.value_objects import DocumentKind


@dataclass
class DocumentFilter:
    """Optional filters for listing documents."""

    latest_only: bool = False
    kind: DocumentKind | None = None
    message_type: str | None = None
    bdew_process: str | None = None

    def matches(self, document: EdiDocument) -> bool:
        if self.latest_only and not document.is_latest_version:
            return False
        if self.kind is not None and document.kind is not self.kind:
            return False
        if self.message_type is not None and self.message_type not in document.message_types:
            return False
        if self.bdew_process is not None and document.bdew_process != self.bdew_process:
            return False
        return True


@dataclass
class DocumentOutput:
    """Output DTO for document."""

    id: UUID
    title: str
    document_name: str
    source_uri: str
    filename: str | None
    kind: DocumentKind
    message_types: list[str]
    bdew_process: str | None
    message_type_version: str | None
    document_date: date | None
    valid_from: date | None
    valid_to: date | None
    is_latest_version: bool
    check_identifiers: dict[int, list[int]]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, document: EdiDocument) -> "DocumentOutput":
        return cls(
            id=document.id,
            title=document.raw_title,
            document_name=document.document_name,
            source_uri=document.source_uri,
            filename=document.filename,
            kind=document.kind,
            message_types=list(document.message_types),
            bdew_process=document.bdew_process,
            message_type_version=document.message_type_version,
            document_date=document.document_date,
            valid_from=document.valid_from,
            valid_to=document.valid_to,
            is_latest_version=document.is_latest_version,
            check_identifiers=dict(document.check_identifiers),
            created_at=document.created_at,
            updated_at=document.updated_at,
        )
