"""Sync catalog use case."""

import asyncio
from collections.abc import Callable
from datetime import UTC, datetime

from loguru import logger

from edidocs.application.dto import Attachment, SyncResult
from edidocs.application.ports import CatalogSource
from edidocs.application.use_cases.catalog.resolve_versions import resolve_snapshot
from edidocs.application.use_cases.document.mirror_document import MirrorDocumentUseCase
from edidocs.domain.entities import EdiDocument, RunStatistics
from edidocs.domain.exceptions import ExtractionError, FetchError
from edidocs.domain.services import (
    MatchMode,
    apply_catalog_update,
    create_document,
    match_catalog,
    normalize_title,
)
from edidocs.domain.value_objects import CatalogEntry


def _unique_new_entries(entries: list[CatalogEntry], mode: MatchMode) -> list[CatalogEntry]:
    """The current and the future catalog view may list the same document twice."""
    seen: set[str] = set()
    unique = []
    for entry in entries:
        key = entry.uri if mode is MatchMode.SOURCE_URI else normalize_title(entry.raw_title)
        if key in seen:
            continue
        seen.add(key)
        unique.append(entry)
    return unique


def _window(document: EdiDocument) -> tuple:
    return document.valid_from, document.valid_to, document.message_type_version


def _state(document: EdiDocument) -> tuple:
    return *_window(document), document.is_latest_version


class SyncCatalogUseCase:
    """Load the catalog, register new documents and resolve all families.

    Catalog updates and the resolvers run on one in-memory snapshot; only
    documents whose state differs from the stored one at the end are written.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        catalog_source: CatalogSource,
        mirror_document: MirrorDocumentUseCase,
        match_mode: MatchMode = MatchMode.SOURCE_URI,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._catalog_source = catalog_source
        self._mirror_document = mirror_document
        self._match_mode = match_mode
        self._clock = clock

    async def execute(self, prefer_cache: bool = False, dry_run: bool = False) -> SyncResult:
        """Run the whole pipeline.

        With dry_run nothing is written; classification, download and date
        inference still run so that bad titles and filenames surface.
        """
        now = self._clock()
        result = SyncResult(dry_run=dry_run)

        entries = await self._catalog_source.fetch_entries(prefer_cache=prefer_cache)
        result.catalog_entries = len(entries)
        logger.info(f"Extracted {len(entries)} catalog entries")

        async with self._uow_factory() as uow:
            existing = await uow.documents.list_all()
        stored = {d.id: _state(d) for d in existing}

        matches = match_catalog(entries, existing, self._match_mode)
        for match in matches:
            if match.existing is not None:
                apply_catalog_update(match.existing, match.entry)

        new_entries = _unique_new_entries([m.entry for m in matches if m.is_new], self._match_mode)
        new_documents = [create_document(entry, now) for entry in new_entries]
        attachments = await self._mirror_all(new_documents, prefer_cache)
        result.pending_documents = sum(1 for a in attachments if a is None)

        resolution = resolve_snapshot(existing + new_documents, now)
        removed_ids = {d.id for d in resolution.removed}
        created = [
            (document, attachment)
            for document, attachment in zip(new_documents, attachments, strict=True)
            if document.id not in removed_ids
        ]
        changed = [
            d for d in existing if d.id not in removed_ids and _state(d) != stored[d.id]
        ]
        result.new_documents = len(created)
        result.updated_documents = sum(1 for d in changed if _window(d) != stored[d.id][:3])
        result.removed_duplicates = len(resolution.removed)
        result.timeline_changes = sum(
            1
            for d in resolution.timeline_changed
            if d.id not in stored or _window(d) != stored[d.id][:3]
        )
        result.latest_version_changes = len(resolution.latest_changed)

        if dry_run:
            logger.info("Dry run done, nothing written")
            return result

        async with self._uow_factory() as uow:
            for duplicate in resolution.removed:
                if duplicate.id in stored:
                    logger.info(f"Removing duplicate {duplicate.id} of {duplicate.source_uri}")
                    await uow.documents.delete(duplicate.id)
            for document, attachment in created:
                await uow.documents.create(document)
                if attachment is not None:
                    await uow.documents.save_attachment(document.id, attachment)
                logger.info(f"Saved new document {document.id} ({document.document_name!r})")
            for document in changed:
                document.updated_at = now
                await uow.documents.update(document)
            await uow.run_statistics.add(
                RunStatistics(
                    run_finished_at=self._clock(),
                    catalog_entries=result.catalog_entries,
                    new_documents=result.new_documents,
                    updated_documents=result.updated_documents,
                )
            )
        logger.info(
            f"Sync done: {result.new_documents} new, {len(changed)} updated, "
            f"{result.removed_duplicates} duplicates removed"
        )
        return result

    async def _mirror_all(
        self, documents: list[EdiDocument], prefer_cache: bool
    ) -> list[Attachment | None]:
        """Mirror concurrently; the first classification or date error cancels the rest."""
        try:
            async with asyncio.TaskGroup() as group:
                tasks = [
                    group.create_task(self._mirror_new(document, prefer_cache))
                    for document in documents
                ]
        except ExceptionGroup as eg:
            raise eg.exceptions[0] from eg
        return [task.result() for task in tasks]

    async def _mirror_new(self, document: EdiDocument, prefer_cache: bool) -> Attachment | None:
        """Fetch and extraction failures leave the document pending for the mirror batch."""
        try:
            return await self._mirror_document.execute(document, prefer_cache=prefer_cache)
        except (FetchError, ExtractionError) as e:
            logger.warning(f"Keeping {document.source_uri} pending: {e}")
            return None
