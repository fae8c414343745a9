"""Catalog run statistics entity."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class RunStatistics:
    """Bookkeeping of the last finished catalog run."""

    run_finished_at: datetime
    catalog_entries: int
    new_documents: int
    updated_documents: int
