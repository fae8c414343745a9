"""Composite grouping keys for document families."""

from collections.abc import Iterable
from dataclasses import dataclass


def canonical_message_types(message_types: Iterable[str] | None) -> tuple[str, ...]:
    """Sorted, de-duplicated message types; empty tuple for None."""
    if not message_types:
        return ()
    return tuple(sorted(set(message_types)))


@dataclass(frozen=True, order=True)
class FamilyKey:
    """Validity timeline family of AHB and MIG documents."""

    bdew_process: str | None
    is_ahb: bool
    is_mig: bool
    message_types: tuple[str, ...]


@dataclass(frozen=True, order=True)
class VersionFamilyKey:
    """Latest-version family: one winner per key."""

    bdew_process: str | None
    message_type_version: str | None
    is_ahb: bool
    is_mig: bool
    message_types: tuple[str, ...]


@dataclass(frozen=True, order=True)
class GeneralFamilyKey:
    """Validity timeline family of general documents."""

    document_name: str
    message_types: tuple[str, ...]
