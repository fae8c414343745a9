"""Fetched resource DTO."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FetchedResource:
    """Body of a remote resource and the filename the server suggested."""

    content: bytes
    filename: str
