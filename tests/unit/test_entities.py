"""Unit tests for the document entity and its value objects."""

from datetime import date

import pytest

from edidocs.domain.exceptions import ValidationError
from edidocs.domain.value_objects import (
    PENDING,
    DocumentKind,
    FamilyKey,
    Mirrored,
    canonical_message_types,
)

from tests.conftest import make_document, make_general_document


def test_mig_with_process_is_rejected() -> None:
    with pytest.raises(ValidationError):
        make_document("UTILMD MIG 6.0", is_mig=True, is_ahb=False, bdew_process="WiM")


def test_general_document_without_version() -> None:
    with pytest.raises(ValidationError):
        make_document("Leitfaden", is_ahb=False, bdew_process=None, message_type_version="1.0")
    with pytest.raises(ValidationError):
        make_general_document(check_identifiers={11001: [1]})


def test_kind_and_general_flag() -> None:
    ahb = make_document()
    mig = make_document("APERAK MIG 2.1a", is_mig=True, is_ahb=False, bdew_process=None)
    general = make_general_document()

    assert (ahb.kind, mig.kind, general.kind) == (
        DocumentKind.AHB,
        DocumentKind.MIG,
        DocumentKind.GENERAL,
    )
    assert general.is_general_document is True
    assert ahb.is_general_document is False
    assert mig.is_general_document is False


def test_general_flag_is_derived() -> None:
    document = make_document()
    with pytest.raises(AttributeError):
        document.is_general_document = True


def test_mirror_lifecycle() -> None:
    document = make_document()
    assert document.mirror is PENDING
    assert document.filename is None
    assert document.is_mirrored is False

    document.mirror = Mirrored("UTILMD_AHB_6_0a_20141001.pdf")

    assert document.is_mirrored is True
    assert document.filename == "UTILMD_AHB_6_0a_20141001.pdf"


def test_mirrored_requires_filename() -> None:
    with pytest.raises(ValueError):
        Mirrored("")


def test_family_keys_ignore_message_type_order() -> None:
    a = make_document(contained_message_types=("UTILMD", "MSCONS"))
    b = make_document(contained_message_types=("MSCONS", "UTILMD"))

    assert a.family_key() == b.family_key()
    assert hash(a.version_family_key()) == hash(b.version_family_key())


def test_family_key_separates_profiles() -> None:
    ahb = make_document(bdew_process=None)
    mig = make_document(is_mig=True, is_ahb=False, bdew_process=None)
    assert ahb.family_key() != mig.family_key()


def test_family_key_has_no_separator_collisions() -> None:
    joined = FamilyKey(bdew_process=None, is_ahb=True, is_mig=False, message_types=("AB_C",))
    split = FamilyKey(bdew_process=None, is_ahb=True, is_mig=False, message_types=("AB", "C"))
    assert joined != split


def test_canonical_message_types() -> None:
    assert canonical_message_types(None) == ()
    assert canonical_message_types(["UTILMD", "APERAK", "UTILMD"]) == ("APERAK", "UTILMD")


def test_general_family_key_uses_display_name() -> None:
    a = make_general_document("Allgemeine Festlegungen", valid_from=date(2019, 1, 1))
    b = make_general_document("Allgemeine Festlegungen", valid_from=date(2020, 1, 1))
    assert a.general_family_key() == b.general_family_key()
