"""Domain value objects."""

from edidocs.domain.value_objects.catalog_entry import CatalogEntry
from edidocs.domain.value_objects.document_kind import DocumentKind
from edidocs.domain.value_objects.family_key import (
    FamilyKey,
    GeneralFamilyKey,
    VersionFamilyKey,
    canonical_message_types,
)
from edidocs.domain.value_objects.mirror_state import (
    PENDING,
    Mirrored,
    MirrorState,
    Pending,
)

__all__ = [
    "CatalogEntry",
    "DocumentKind",
    "FamilyKey",
    "GeneralFamilyKey",
    "Mirrored",
    "MirrorState",
    "PENDING",
    "Pending",
    "VersionFamilyKey",
    "canonical_message_types",
]
