"""Catalog source port."""

from typing import Protocol

from edidocs.domain.value_objects import CatalogEntry


class CatalogSource(Protocol):
    """Yields the entries of the published document catalog."""

    async def fetch_entries(self, prefer_cache: bool = False) -> list[CatalogEntry]:
        """Entries of all catalog views, in no particular order."""
        ...
