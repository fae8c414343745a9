"""Create documents from catalog entries."""

from datetime import date, datetime
from uuid import uuid4

from loguru import logger

from edidocs.domain.entities import EdiDocument
from edidocs.domain.exceptions import DocumentDateNotFound
from edidocs.domain.services.date_inference import infer_document_date
from edidocs.domain.services.title_classifier import classify_title
from edidocs.domain.value_objects import PENDING, CatalogEntry


def _date_before_mirroring(entry: CatalogEntry) -> date | None:
    """Date from title and validity alone; None if it needs the filename."""
    try:
        return infer_document_date(entry.raw_title, None, entry.valid_from, entry.valid_to)
    except DocumentDateNotFound:
        logger.debug(f"Dating {entry.uri} has to wait for the mirrored filename")
        return None


def create_document(entry: CatalogEntry, now: datetime) -> EdiDocument:
    """Classify the entry's title and build a pending document.

    The document date is set already if title or validity window yield one;
    mirroring recomputes it with the filename.
    """
    classification = classify_title(entry.raw_title)
    return EdiDocument(
        id=uuid4(),
        raw_title=classification.raw_title,
        document_name=classification.document_name,
        source_uri=entry.uri,
        is_mig=classification.is_mig,
        is_ahb=classification.is_ahb,
        contained_message_types=classification.contained_message_types,
        bdew_process=classification.bdew_process,
        message_type_version=classification.message_type_version,
        valid_from=entry.valid_from,
        valid_to=entry.valid_to,
        created_at=now,
        updated_at=now,
        document_date=_date_before_mirroring(entry),
        mirror=PENDING,
    )
