"""Unit tests for the latest-version resolver."""

from datetime import date, timedelta

from edidocs.domain.services import resolve_latest_versions
from edidocs.domain.services.latest_version import general_edition_winners

from tests.conftest import NOW, make_document, make_general_document

TODAY = date(2024, 6, 1)


def test_exactly_one_latest_per_family() -> None:
    family = [
        make_document(document_date=date(2019, 10, 1)),
        make_document(document_date=date(2020, 10, 1)),
        make_document(document_date=date(2020, 4, 1)),
    ]

    resolve_latest_versions(family, TODAY)

    assert [d.is_latest_version for d in family] == [False, True, False]


def test_each_version_is_its_own_family() -> None:
    v60 = make_document(message_type_version="6.0", document_date=date(2019, 1, 1))
    v61 = make_document(message_type_version="6.1", document_date=date(2020, 1, 1))
    mig = make_document(
        "UTILMD MIG 6.1",
        is_mig=True,
        is_ahb=False,
        bdew_process=None,
        message_type_version="6.1",
    )

    resolve_latest_versions([v60, v61, mig], TODAY)

    assert v60.is_latest_version and v61.is_latest_version and mig.is_latest_version


def test_tie_goes_to_later_created() -> None:
    first = make_document(created_at=NOW)
    second = make_document(created_at=NOW + timedelta(minutes=5))

    resolve_latest_versions([second, first], TODAY)

    assert second.is_latest_version is True
    assert first.is_latest_version is False


def test_stale_flags_are_cleared_and_reported() -> None:
    old = make_document(document_date=date(2019, 1, 1), is_latest_version=True)
    new = make_document(document_date=date(2020, 1, 1))

    changed = resolve_latest_versions([old, new], TODAY)

    assert old.is_latest_version is False
    assert new.is_latest_version is True
    assert set(map(id, changed)) == {id(old), id(new)}


def test_second_run_changes_nothing() -> None:
    family = [make_document(document_date=date(2019, 1, 1)), make_document()]
    resolve_latest_versions(family, TODAY)
    assert resolve_latest_versions(family, TODAY) == []


def test_general_editions_past_current_future() -> None:
    older_past = make_general_document(
        valid_from=date(2017, 1, 1), valid_to=date(2018, 12, 31), document_date=date(2016, 10, 1)
    )
    past = make_general_document(
        valid_from=date(2019, 1, 1), valid_to=date(2020, 12, 31), document_date=date(2018, 10, 1)
    )
    current = make_general_document(
        valid_from=date(2021, 1, 1), valid_to=date(2024, 9, 30), document_date=date(2020, 10, 1)
    )
    future = make_general_document(
        valid_from=date(2024, 10, 1), valid_to=None, document_date=date(2024, 5, 1)
    )

    resolve_latest_versions([older_past, past, current, future], TODAY)

    assert older_past.is_latest_version is False
    assert past.is_latest_version is True
    assert current.is_latest_version is True
    assert future.is_latest_version is True


def test_general_edition_winners_deduplicated() -> None:
    only = make_general_document(valid_from=date(2020, 1, 1), valid_to=None)
    assert general_edition_winners([only], TODAY) == [only]


def test_empty_input() -> None:
    assert resolve_latest_versions([], TODAY) == []
