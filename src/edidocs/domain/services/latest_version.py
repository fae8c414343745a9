"""Mark the currently authoritative documents of every family."""

from collections.abc import Callable, Hashable, Iterable
from datetime import date

from loguru import logger

from edidocs.domain.entities import EdiDocument


def _group(
    documents: Iterable[EdiDocument],
    key: Callable[[EdiDocument], Hashable],
) -> list[list[EdiDocument]]:
    groups: dict[Hashable, list[EdiDocument]] = {}
    for document in documents:
        groups.setdefault(key(document), []).append(document)
    return list(groups.values())


def _recency(document: EdiDocument) -> tuple:
    # equal dates: the later discovered upload wins
    return (document.document_date or date.min, document.created_at)


def _newest(candidates: list[EdiDocument]) -> EdiDocument | None:
    return max(candidates, key=_recency, default=None)


def _is_past(document: EdiDocument, today: date) -> bool:
    return document.valid_to is not None and document.valid_to < today


def _is_current(document: EdiDocument, today: date) -> bool:
    started = document.valid_from is not None and document.valid_from <= today
    return started and (document.valid_to is None or document.valid_to >= today)


def _reaches_future(document: EdiDocument, today: date) -> bool:
    return document.valid_to is None or document.valid_to > today


def general_edition_winners(family: list[EdiDocument], today: date) -> list[EdiDocument]:
    """Newest past, current and future edition of a general document."""
    winners = [
        _newest([d for d in family if _is_past(d, today)]),
        _newest([d for d in family if _is_current(d, today)]),
        _newest([d for d in family if _reaches_future(d, today)]),
    ]
    unique: dict[int, EdiDocument] = {}
    for winner in winners:
        if winner is not None:
            unique.setdefault(id(winner), winner)
    return list(unique.values())


def resolve_latest_versions(documents: Iterable[EdiDocument], today: date) -> list[EdiDocument]:
    """Recompute is_latest_version for every document; return the changed ones."""
    documents = list(documents)
    before = {id(d): d.is_latest_version for d in documents}
    for document in documents:
        document.is_latest_version = False

    versioned = [d for d in documents if not d.is_general_document]
    for family in _group(versioned, EdiDocument.version_family_key):
        winner = _newest(family)
        if winner is not None:
            winner.is_latest_version = True

    general = [d for d in documents if d.is_general_document]
    for family in _group(general, lambda d: d.document_name):
        for winner in general_edition_winners(family, today):
            winner.is_latest_version = True

    changed = [d for d in documents if d.is_latest_version != before[id(d)]]
    logger.info(
        f"Latest versions resolved, {sum(d.is_latest_version for d in documents)} marked, "
        f"{len(changed)} changed"
    )
    return changed
