"""Catalog entry as published by the document source."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class CatalogEntry:
    """One row of the published catalog."""

    raw_title: str
    valid_from: date | None
    valid_to: date | None
    uri: str
