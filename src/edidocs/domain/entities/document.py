"""EDI document entity."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID

from edidocs.domain.exceptions import ValidationError
from edidocs.domain.value_objects import (
    PENDING,
    DocumentKind,
    FamilyKey,
    GeneralFamilyKey,
    Mirrored,
    MirrorState,
    VersionFamilyKey,
    canonical_message_types,
)


@dataclass
class EdiDocument:
    """Classified, dated catalog document.

    The profile flags come from title classification only; the general
    document flag is derived from them and cannot be set.
    """

    id: UUID
    raw_title: str
    document_name: str
    source_uri: str
    is_mig: bool
    is_ahb: bool
    contained_message_types: tuple[str, ...] | None
    bdew_process: str | None
    message_type_version: str | None
    valid_from: date | None
    valid_to: date | None
    created_at: datetime
    updated_at: datetime
    document_date: date | None = None
    mirror: MirrorState = PENDING
    is_latest_version: bool = False
    check_identifiers: dict[int, list[int]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.is_mig and self.bdew_process is not None:
            raise ValidationError("MIG documents are never attributed to a process")
        if self.is_general_document and (
            self.message_type_version is not None or self.check_identifiers
        ):
            raise ValidationError(
                "general documents carry neither a message type version nor check identifiers"
            )

    @property
    def is_general_document(self) -> bool:
        return not (self.is_mig or self.is_ahb)

    @property
    def kind(self) -> DocumentKind:
        if self.is_mig:
            return DocumentKind.MIG
        if self.is_ahb:
            return DocumentKind.AHB
        return DocumentKind.GENERAL

    @property
    def filename(self) -> str | None:
        return self.mirror.filename

    @property
    def is_mirrored(self) -> bool:
        return isinstance(self.mirror, Mirrored)

    @property
    def message_types(self) -> tuple[str, ...]:
        return canonical_message_types(self.contained_message_types)

    def family_key(self) -> FamilyKey:
        return FamilyKey(
            bdew_process=self.bdew_process,
            is_ahb=self.is_ahb,
            is_mig=self.is_mig,
            message_types=self.message_types,
        )

    def version_family_key(self) -> VersionFamilyKey:
        return VersionFamilyKey(
            bdew_process=self.bdew_process,
            message_type_version=self.message_type_version,
            is_ahb=self.is_ahb,
            is_mig=self.is_mig,
            message_types=self.message_types,
        )

    def general_family_key(self) -> GeneralFamilyKey:
        return GeneralFamilyKey(
            document_name=self.document_name,
            message_types=self.message_types,
        )
