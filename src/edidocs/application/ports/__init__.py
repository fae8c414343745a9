"""Application ports - interfaces for external adapters."""

from edidocs.application.ports.binary_fetcher import BinaryFetcher
from edidocs.application.ports.catalog_source import CatalogSource
from edidocs.application.ports.text_extractor import TextExtractor
from edidocs.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "BinaryFetcher",
    "CatalogSource",
    "TextExtractor",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
