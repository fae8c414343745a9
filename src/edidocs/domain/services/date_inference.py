"""Infer the authoritative date of a document.

Rules are tried in a fixed order and the first hit wins:

1. a "Stand:" marker in the title (German long date),
2. a date encoded in the filename, most unambiguous pattern first,
3. the start of the validity window for old, still open documents,
4. the override table for known data-entry errors of the source,
5. an ISO date (`_YYYY-MM-DD`) at the end of the filename.

Nothing is guessed beyond that; an unmatched document raises
DocumentDateNotFound.
"""

import re
from datetime import date
from pathlib import PurePosixPath

from loguru import logger

from edidocs.domain.exceptions import DocumentDateNotFound, InvalidDate
from edidocs.domain.overrides import (
    DATE_OVERRIDES,
    FILENAME_TYPO_FIXES,
    VALID_FROM_FALLBACK_CUTOFF_YEAR,
)
from edidocs.domain.services.german_dates import parse_german_date

STAND_MARKER = "Stand:"
END_SUFFIX = "_end"

# (rule name, pattern); every pattern captures year, month and day
FILENAME_DATE_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    # APERAK_MIG_2_1a_2014_04_01
    ("suffix_yyyy_mm_dd", re.compile(r"_(\d{4})_(\d{2})_(\d{2})$")),
    # BK6-13-200_Beschluss_2014_04_16_Anlage_5
    # EDI_Energy_AWH_MaKo2020_2020.02.18_Lieferschein_final_V1.1
    ("embedded_yyyy_mm_dd", re.compile(r"_(\d{4})[._](\d{2})[._](\d{2})_")),
    # CONTRL-APERAK_AHB_2_3a_20141001
    ("suffix_yyyymmdd", re.compile(r"_(\d{4})(\d{2})(\d{2})$")),
    # PID_1_3_20200401_V3, Codeliste-OBIS-Kennzahlen_2_2h_20190401_2
    ("tagged_yyyymmdd", re.compile(r"_(20\d{2})(\d{2})(\d{2})_[A-Za-z0-9]{1,12}$")),
)

# APERAK_MIG_2_1a_2014-04-01; tried after the validity fallback and overrides
ISO_SUFFIX_PATTERN = ("suffix_iso", re.compile(r"_(\d{4})-(\d{2})-(\d{2})$"))


def _date_from_stand(raw_title: str) -> date | None:
    if STAND_MARKER not in raw_title:
        return None
    fragment = raw_title.split(STAND_MARKER, 1)[1]
    return parse_german_date(fragment)


def normalize_filename_stem(filename: str) -> str:
    """Strip the extension, fix known typos and drop a trailing "_end"."""
    stem = PurePosixPath(filename).stem
    for wrong, right in FILENAME_TYPO_FIXES.items():
        stem = stem.replace(wrong, right)
    if stem.endswith(END_SUFFIX):
        stem = stem[: -len(END_SUFFIX)]
    return stem


def _date_from_filename(
    filename: str,
    patterns: tuple[tuple[str, re.Pattern[str]], ...] = FILENAME_DATE_PATTERNS,
) -> date | None:
    stem = normalize_filename_stem(filename)
    for rule, pattern in patterns:
        match = pattern.search(stem)
        if not match:
            continue
        year, month, day = (int(g) for g in match.groups())
        try:
            found = date(year, month, day)
        except ValueError:
            logger.debug(f"Filename {filename!r} matches {rule} but is no calendar date")
            continue
        logger.debug(f"Filename {filename!r} dated {found} by {rule}")
        return found
    return None


def _date_from_validity(valid_from: date | None, valid_to: date | None) -> date | None:
    if valid_from is None or valid_to is not None:
        return None
    if valid_from.year < VALID_FROM_FALLBACK_CUTOFF_YEAR:
        return valid_from
    return None


def _date_from_overrides(filename: str) -> date | None:
    if filename in DATE_OVERRIDES:
        return DATE_OVERRIDES[filename]
    return DATE_OVERRIDES.get(PurePosixPath(filename).stem)


def infer_document_date(
    raw_title: str,
    filename: str | None,
    valid_from: date | None = None,
    valid_to: date | None = None,
) -> date:
    """Return the document date or raise DocumentDateNotFound."""
    try:
        stand = _date_from_stand(raw_title)
    except InvalidDate as e:
        raise DocumentDateNotFound(raw_title, filename) from e
    if stand is not None:
        return stand

    found = _date_from_filename(filename) if filename else None
    if found is None:
        found = _date_from_validity(valid_from, valid_to)
    if found is None and filename:
        found = _date_from_overrides(filename)
    if found is None and filename:
        found = _date_from_filename(filename, (ISO_SUFFIX_PATTERN,))
    if found is None:
        raise DocumentDateNotFound(raw_title, filename)
    return found
