"""Run statistics repository port."""

from typing import Protocol

from edidocs.domain.entities import RunStatistics


class RunStatisticsRepository(Protocol):
    """Port for the bookkeeping of finished catalog runs."""

    async def get_latest(self) -> RunStatistics | None: ...

    async def add(self, statistics: RunStatistics) -> None: ...
