"""List check identifiers use case."""


class ListCheckIdentifiersUseCase:
    """Distinct check identifiers of the latest open-ended AHBs."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self) -> list[int]:
        async with self._uow_factory() as uow:
            documents = await uow.documents.list_all()
        identifiers = {
            identifier
            for d in documents
            if d.is_ahb and d.is_latest_version and d.valid_to is None
            for identifier in d.check_identifiers
        }
        return sorted(identifiers)
