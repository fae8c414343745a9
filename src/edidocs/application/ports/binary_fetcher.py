"""Binary fetcher port."""

from typing import Protocol

from edidocs.application.dto.fetched_resource import FetchedResource


class BinaryFetcher(Protocol):
    """Retrieves remote resources, possibly from a local cache."""

    async def get(self, uri: str, prefer_cache: bool = False) -> FetchedResource:
        """Raises FetchError on network or HTTP failure, never returns empty silently."""
        ...
