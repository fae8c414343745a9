"""Mirror pending documents use case."""

from collections.abc import Callable
from datetime import UTC, datetime

from loguru import logger

from edidocs.application.dto import MirrorBatchResult
from edidocs.application.use_cases.catalog.resolve_versions import ResolveVersionsUseCase
from edidocs.application.use_cases.document.mirror_document import MirrorDocumentUseCase
from edidocs.domain.exceptions import ExtractionError, FetchError


class MirrorPendingDocumentsUseCase:
    """Complete download and extraction of documents that are not mirrored yet."""

    def __init__(
        self,
        unit_of_work_factory: type,
        mirror_document: MirrorDocumentUseCase,
        resolve_versions: ResolveVersionsUseCase,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._mirror_document = mirror_document
        self._resolve_versions = resolve_versions
        self._clock = clock

    async def execute(self, batch_size: int, prefer_cache: bool = False) -> MirrorBatchResult:
        """Process one batch; has_more tells whether pending documents remain beyond it."""
        if batch_size < 1:
            raise ValueError("batch_size must be positive")

        async with self._uow_factory() as uow:
            pending = await uow.documents.list_pending(limit=batch_size + 1)
        batch = pending[:batch_size]
        result = MirrorBatchResult(has_more=len(pending) > batch_size)

        for document in batch:
            try:
                attachment = await self._mirror_document.execute(document, prefer_cache=prefer_cache)
            except (FetchError, ExtractionError) as e:
                logger.warning(f"Mirroring {document.source_uri} failed, retrying next run: {e}")
                result.failed.append(document.id)
                continue
            document.updated_at = self._clock()
            async with self._uow_factory() as uow:
                await uow.documents.update(document)
                if attachment is not None:
                    await uow.documents.save_attachment(document.id, attachment)
            result.processed.append(document.id)

        if result.processed:
            await self._resolve_versions.execute()
        logger.info(
            f"Mirror batch: {len(result.processed)} processed, {len(result.failed)} failed, "
            f"more pending: {result.has_more}"
        )
        return result
