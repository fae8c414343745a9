"""Results of catalog and mirror runs."""

from dataclasses import dataclass, field
from uuid import UUID


@dataclass
class SyncResult:
    """Outcome of one catalog synchronisation."""

    catalog_entries: int = 0
    new_documents: int = 0
    updated_documents: int = 0
    pending_documents: int = 0
    removed_duplicates: int = 0
    timeline_changes: int = 0
    latest_version_changes: int = 0
    dry_run: bool = False


@dataclass
class MirrorBatchResult:
    """Outcome of one batch of pending downloads."""

    processed: list[UUID] = field(default_factory=list)
    failed: list[UUID] = field(default_factory=list)
    has_more: bool = False
