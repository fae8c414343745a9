"""Resolve versions use case."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from loguru import logger

from edidocs.domain.entities import EdiDocument
from edidocs.domain.services import (
    find_duplicates,
    resolve_latest_versions,
    resolve_validity_timeline,
)


@dataclass
class Resolution:
    """Documents touched by one resolution pass."""

    removed: list[EdiDocument]
    timeline_changed: list[EdiDocument]
    latest_changed: list[EdiDocument]

    @property
    def changed(self) -> list[EdiDocument]:
        unique: dict[int, EdiDocument] = {}
        for document in self.timeline_changed + self.latest_changed:
            unique.setdefault(id(document), document)
        return list(unique.values())


def resolve_snapshot(documents: list[EdiDocument], now: datetime) -> Resolution:
    """Deduplicate, back-fill validity ends and mark latest versions in memory."""
    removed = find_duplicates(documents)
    removed_ids = {d.id for d in removed}
    kept = [d for d in documents if d.id not in removed_ids]

    timeline_changed = resolve_validity_timeline(kept)
    latest_changed = resolve_latest_versions(kept, now.date())
    return Resolution(
        removed=removed,
        timeline_changed=timeline_changed,
        latest_changed=latest_changed,
    )


class ResolveVersionsUseCase:
    """Run the resolvers over the whole corpus and write back the changes."""

    def __init__(
        self,
        unit_of_work_factory: type,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock

    async def execute(self) -> Resolution:
        now = self._clock()
        async with self._uow_factory() as uow:
            documents = await uow.documents.list_all()
            resolution = resolve_snapshot(documents, now)

            for duplicate in resolution.removed:
                logger.info(f"Removing duplicate {duplicate.id} of {duplicate.source_uri}")
                await uow.documents.delete(duplicate.id)
            for document in resolution.changed:
                document.updated_at = now
                await uow.documents.update(document)

        logger.info(
            f"Resolution pass: {len(resolution.removed)} duplicates removed, "
            f"{len(resolution.changed)} documents updated"
        )
        return resolution
