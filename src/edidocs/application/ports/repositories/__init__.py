"""Repository ports."""

from edidocs.application.ports.repositories.document_repository import DocumentRepository
from edidocs.application.ports.repositories.run_statistics_repository import (
    RunStatisticsRepository,
)

__all__ = [
    "DocumentRepository",
    "RunStatisticsRepository",
]
