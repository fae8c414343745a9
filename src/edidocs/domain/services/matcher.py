"""Align catalog entries with known documents."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import StrEnum

from edidocs.domain.entities import EdiDocument
from edidocs.domain.services.title_classifier import normalize_title
from edidocs.domain.value_objects import CatalogEntry


@dataclass(frozen=True)
class CatalogMatch:
    """Catalog entry and the known document it belongs to, if any."""

    entry: CatalogEntry
    existing: EdiDocument | None

    @property
    def is_new(self) -> bool:
        return self.existing is None


class MatchMode(StrEnum):
    """Identity used to recognise known documents."""

    SOURCE_URI = "source_uri"
    TITLE = "title"


def match_catalog(
    entries: Iterable[CatalogEntry],
    existing: Sequence[EdiDocument],
    mode: MatchMode = MatchMode.SOURCE_URI,
) -> list[CatalogMatch]:
    """Pair every entry with the first known document of the same identity."""
    index: dict[str, EdiDocument] = {}
    for document in existing:
        key = document.source_uri if mode is MatchMode.SOURCE_URI else document.raw_title
        index.setdefault(key, document)

    matches = []
    for entry in entries:
        key = entry.uri if mode is MatchMode.SOURCE_URI else normalize_title(entry.raw_title)
        matches.append(CatalogMatch(entry=entry, existing=index.get(key)))
    return matches


def apply_catalog_update(document: EdiDocument, entry: CatalogEntry) -> bool:
    """Overwrite the validity window with the published one; True if it changed.

    A derived end is reopened when the catalog has none; the timeline
    resolver closes it again from the current family.
    """
    if (document.valid_from, document.valid_to) == (entry.valid_from, entry.valid_to):
        return False
    document.valid_from = entry.valid_from
    document.valid_to = entry.valid_to
    return True


def find_duplicates(documents: Iterable[EdiDocument]) -> list[EdiDocument]:
    """Documents sharing a source URI with an earlier created one."""
    by_uri: dict[str, list[EdiDocument]] = {}
    for document in documents:
        by_uri.setdefault(document.source_uri, []).append(document)

    duplicates = []
    for group in by_uri.values():
        if len(group) > 1:
            ordered = sorted(group, key=lambda d: (d.created_at, str(d.id)))
            duplicates.extend(ordered[1:])
    return duplicates
