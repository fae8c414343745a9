"""Derive profile, message types, process and version from a catalog title."""

import re
from dataclasses import dataclass

from edidocs.domain.constants import (
    BDEW_PROCESSES,
    HKNR_DEFAULT_MESSAGE_TYPES,
    HKNR_MARKER,
    MESSAGE_TYPES,
)
from edidocs.domain.exceptions import AmbiguousProcess
from edidocs.domain.overrides import TITLE_VERSION_OVERRIDES

_BLANKS = re.compile(r"[ \t\f\v\xa0]+")
_VERSION = re.compile(r"(?<![\w.])([GS]?\d\.\d[a-z]?)")


@dataclass(frozen=True)
class TitleClassification:
    """Structural attributes of a title."""

    raw_title: str
    document_name: str
    contained_message_types: tuple[str, ...] | None
    is_mig: bool
    is_ahb: bool
    bdew_process: str | None
    message_type_version: str | None

    @property
    def is_general_document(self) -> bool:
        return not (self.is_mig or self.is_ahb)


def normalize_title(raw_title: str) -> str:
    """Collapse runs of blanks to one space, keeping line breaks."""
    return _BLANKS.sub(" ", raw_title.strip())


def _message_types(title: str) -> tuple[str, ...] | None:
    found = tuple(mt for mt in MESSAGE_TYPES if mt in title)
    if not found and HKNR_MARKER in title:
        found = HKNR_DEFAULT_MESSAGE_TYPES
    return found or None


def _bdew_process(title: str) -> str | None:
    candidates = [
        name
        for name, keywords in BDEW_PROCESSES.items()
        if any(keyword in title for keyword in keywords)
    ]
    if len(candidates) > 1:
        raise AmbiguousProcess(title, candidates)
    return candidates[0] if candidates else None


def _message_type_version(title: str, document_name: str) -> str | None:
    override = TITLE_VERSION_OVERRIDES.get(document_name)
    if override is not None:
        return override
    match = _VERSION.search(title)
    return match.group(1) if match else None


def classify_title(raw_title: str) -> TitleClassification:
    """Classify a catalog title.

    Raises AmbiguousProcess if the title names more than one process.
    """
    title = normalize_title(raw_title)
    document_name = re.split(r"[\r\n]", title, maxsplit=1)[0].strip()

    is_mig = "MIG" in title
    bdew_process = None if is_mig else _bdew_process(title)
    is_ahb = "AHB" in title or bdew_process is not None
    is_general = not (is_mig or is_ahb)

    return TitleClassification(
        raw_title=title,
        document_name=document_name,
        contained_message_types=_message_types(title),
        is_mig=is_mig,
        is_ahb=is_ahb,
        bdew_process=bdew_process,
        message_type_version=None if is_general else _message_type_version(title, document_name),
    )
