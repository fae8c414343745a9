"""Pool lifespan middleware - opens pool on startup, closes on shutdown."""

from typing import Any

from loguru import logger
from psycopg_pool import AsyncConnectionPool


class PoolLifespanMiddleware:
    """Ties the connection pool to the ASGI lifespan."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    async def process_startup(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        await self._pool.open()
        logger.info("Database pool opened")

    async def process_shutdown(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        await self._pool.close()
        logger.info("Database pool closed")
