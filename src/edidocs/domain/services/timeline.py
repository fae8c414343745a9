"""Back-fill missing validity ends within document families.

Family members are walked newest first. Every member without a validity
end gets one derived from the member seen just before it, so that a family
ends up with non-overlapping intervals and at most one open one.
"""

from collections.abc import Callable, Hashable, Iterable, Sequence
from dataclasses import dataclass
from datetime import date, timedelta
from functools import reduce

from loguru import logger

from edidocs.domain.entities import EdiDocument
from edidocs.domain.overrides import VERSION_REPUBLICATION_DATE


@dataclass(frozen=True)
class TimelineUpdate:
    """New validity end (and possibly version) for one document."""

    valid_to: date | None
    message_type_version: str | None


@dataclass(frozen=True)
class _FoldState:
    last: EdiDocument | None
    changed: tuple[EdiDocument, ...]


def next_versioned_update(last: EdiDocument, current: EdiDocument) -> TimelineUpdate | None:
    """Transition rule for AHB and MIG families; None keeps current as is."""
    if current.valid_to is not None:
        return None
    if current.valid_from != last.valid_from:
        return TimelineUpdate(
            valid_to=last.valid_from - timedelta(days=1),
            message_type_version=current.message_type_version,
        )
    if current.message_type_version == last.message_type_version:
        return TimelineUpdate(
            valid_to=last.valid_to,
            message_type_version=current.message_type_version,
        )
    version = current.message_type_version
    if current.valid_from == VERSION_REPUBLICATION_DATE:
        # old versions were republished under the new token at this date
        version = last.message_type_version
    return TimelineUpdate(valid_to=last.document_date, message_type_version=version)


def next_general_update(last: EdiDocument, current: EdiDocument) -> TimelineUpdate | None:
    """Transition rule for general document families."""
    if current.valid_to is not None:
        return None
    if current.valid_from != last.valid_from:
        return TimelineUpdate(
            valid_to=last.valid_from - timedelta(days=1),
            message_type_version=current.message_type_version,
        )
    return TimelineUpdate(
        valid_to=last.document_date,
        message_type_version=current.message_type_version,
    )


def _apply(document: EdiDocument, update: TimelineUpdate) -> bool:
    if (document.valid_to, document.message_type_version) == (
        update.valid_to,
        update.message_type_version,
    ):
        return False
    document.valid_to = update.valid_to
    document.message_type_version = update.message_type_version
    return True


def fold_family(
    ordered: Sequence[EdiDocument],
    rule: Callable[[EdiDocument, EdiDocument], TimelineUpdate | None],
) -> list[EdiDocument]:
    """Walk a newest-first family and apply rule to each member; return changed ones."""

    def step(state: _FoldState, current: EdiDocument) -> _FoldState:
        if state.last is None:
            return _FoldState(last=current, changed=state.changed)
        update = rule(state.last, current)
        if update is not None and _apply(current, update):
            return _FoldState(last=current, changed=state.changed + (current,))
        return _FoldState(last=current, changed=state.changed)

    return list(reduce(step, ordered, _FoldState(last=None, changed=())).changed)


def _desc(value: date | str | None, empty: date | str) -> tuple[bool, date | str]:
    return (value is not None, value if value is not None else empty)


def _versioned_order(document: EdiDocument) -> tuple:
    return (
        _desc(document.valid_from, date.min),
        _desc(document.message_type_version, ""),
        _desc(document.document_date, date.min),
    )


def _general_order(document: EdiDocument) -> tuple:
    return (
        _desc(document.valid_from, date.min),
        _desc(document.document_date, date.min),
    )


def _open_families(
    documents: Iterable[EdiDocument],
    key: Callable[[EdiDocument], Hashable],
) -> list[list[EdiDocument]]:
    groups: dict[Hashable, list[EdiDocument]] = {}
    for document in documents:
        groups.setdefault(key(document), []).append(document)
    return [g for g in groups.values() if sum(1 for d in g if d.valid_to is None) > 1]


def _dated(documents: Iterable[EdiDocument]) -> list[EdiDocument]:
    dated = []
    for document in documents:
        if document.document_date is None:
            logger.warning(f"Document {document.id} has no document date yet, left out of timeline")
            continue
        dated.append(document)
    return dated


def resolve_validity_timeline(documents: Iterable[EdiDocument]) -> list[EdiDocument]:
    """Fill missing validity ends of all families; return the changed documents."""
    dated = _dated(documents)
    changed: list[EdiDocument] = []

    versioned = [d for d in dated if not d.is_general_document and d.message_types]
    for family in _open_families(versioned, EdiDocument.family_key):
        ordered = sorted(family, key=_versioned_order, reverse=True)
        changed.extend(fold_family(ordered, next_versioned_update))

    general = [d for d in dated if d.is_general_document]
    for family in _open_families(general, EdiDocument.general_family_key):
        ordered = sorted(family, key=_general_order, reverse=True)
        changed.extend(fold_family(ordered, next_general_update))

    logger.info(f"Validity timeline resolved, {len(changed)} documents changed")
    return changed
