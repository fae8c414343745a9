"""Domain entities."""

from edidocs.domain.entities.document import EdiDocument
from edidocs.domain.entities.run_statistics import RunStatistics

__all__ = [
    "EdiDocument",
    "RunStatistics",
]
