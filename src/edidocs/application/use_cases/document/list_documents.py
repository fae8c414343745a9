"""List documents use case."""

from datetime import date

from edidocs.application.dto import DocumentFilter, DocumentOutput


class ListDocumentsUseCase:
    """List documents, newest first."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, document_filter: DocumentFilter | None = None) -> list[DocumentOutput]:
        document_filter = document_filter or DocumentFilter()
        async with self._uow_factory() as uow:
            documents = await uow.documents.list_all()
        selected = [d for d in documents if document_filter.matches(d)]
        selected.sort(key=lambda d: (d.document_date or date.min, d.document_name), reverse=True)
        return [DocumentOutput.from_entity(d) for d in selected]
