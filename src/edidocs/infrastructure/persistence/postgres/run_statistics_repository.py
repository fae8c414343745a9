"""PostgreSQL run statistics repository implementation."""

from psycopg import AsyncConnection

from edidocs.domain.entities import RunStatistics


class PostgresRunStatisticsRepository:
    """Finished catalog runs, one row per run."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_latest(self) -> RunStatistics | None:
        cur = await self._conn.execute(
            "SELECT run_finished_at, catalog_entries, new_documents, updated_documents "
            "FROM export_run ORDER BY run_finished_at DESC LIMIT 1"
        )
        r = await cur.fetchone()
        if not r:
            return None
        return RunStatistics(
            run_finished_at=r[0],
            catalog_entries=r[1],
            new_documents=r[2],
            updated_documents=r[3],
        )

    async def add(self, statistics: RunStatistics) -> None:
        await self._conn.execute(
            "INSERT INTO export_run (run_finished_at, catalog_entries, new_documents, "
            "updated_documents) VALUES (%s, %s, %s, %s)",
            (
                statistics.run_finished_at,
                statistics.catalog_entries,
                statistics.new_documents,
                statistics.updated_documents,
            ),
        )
