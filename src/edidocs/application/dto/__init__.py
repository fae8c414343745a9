"""Application DTOs."""

from edidocs.application.dto.attachment import Attachment
from edidocs.application.dto.document_dto import DocumentFilter, DocumentOutput
from edidocs.application.dto.fetched_resource import FetchedResource
from edidocs.application.dto.run_results import MirrorBatchResult, SyncResult

__all__ = [
    "Attachment",
    "DocumentFilter",
    "DocumentOutput",
    "FetchedResource",
    "MirrorBatchResult",
    "SyncResult",
]
