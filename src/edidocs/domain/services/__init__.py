"""Pure document classification and versioning rules."""

from edidocs.domain.services.check_identifiers import extract_check_identifiers
from edidocs.domain.services.date_inference import infer_document_date
from edidocs.domain.services.document_factory import create_document
from edidocs.domain.services.latest_version import resolve_latest_versions
from edidocs.domain.services.matcher import (
    CatalogMatch,
    MatchMode,
    apply_catalog_update,
    find_duplicates,
    match_catalog,
)
from edidocs.domain.services.timeline import resolve_validity_timeline
from edidocs.domain.services.title_classifier import (
    TitleClassification,
    classify_title,
    normalize_title,
)

__all__ = [
    "CatalogMatch",
    "MatchMode",
    "TitleClassification",
    "apply_catalog_update",
    "classify_title",
    "create_document",
    "extract_check_identifiers",
    "find_duplicates",
    "infer_document_date",
    "match_catalog",
    "normalize_title",
    "resolve_latest_versions",
    "resolve_validity_timeline",
]
