"""Document repository port."""

from typing import Protocol
from uuid import UUID

from edidocs.application.dto.attachment import Attachment
from edidocs.domain.entities import EdiDocument


class DocumentRepository(Protocol):
    """Port for document persistence."""

    async def get_by_id(self, document_id: UUID) -> EdiDocument | None: ...

    async def list_all(self) -> list[EdiDocument]: ...

    async def list_pending(self, *, limit: int) -> list[EdiDocument]: ...

    async def create(self, document: EdiDocument) -> EdiDocument: ...

    async def update(self, document: EdiDocument) -> EdiDocument: ...

    async def delete(self, document_id: UUID) -> None: ...

    async def save_attachment(self, document_id: UUID, attachment: Attachment) -> None: ...

    async def get_attachment(self, document_id: UUID) -> Attachment | None: ...
