"""Parsing of German date notations used by the document source."""

import re
from datetime import date

from edidocs.domain.constants import GERMAN_MONTHS
from edidocs.domain.exceptions import InvalidDate

_NUMERIC = re.compile(r"^(\d{1,2})\.\s?(\d{1,2})\.\s?(\d{4})")
_LONG = re.compile(r"^(\d{1,2})\.?\s+([^\W\d_]+(?:&auml;[^\W\d_]+)?)\.?\s+(\d{4})")


def _month_number(name: str) -> int | None:
    name = name.lower()
    if name in GERMAN_MONTHS:
        return GERMAN_MONTHS[name]
    # abbreviations such as "Aug." or "Sept."
    if len(name) >= 3:
        for month_name, number in GERMAN_MONTHS.items():
            if month_name.startswith(name):
                return number
    return None


def parse_german_date(text: str) -> date:
    """Parse "29. August 2014", "29. Aug. 2014" or "29.08.2014".

    Text after the date is ignored. Raises InvalidDate.
    """
    fragment = text.strip()
    numeric = _NUMERIC.match(fragment)
    if numeric:
        day, month, year = (int(g) for g in numeric.groups())
    else:
        long_form = _LONG.match(fragment)
        if not long_form:
            raise InvalidDate(text)
        month = _month_number(long_form.group(2))
        if month is None:
            raise InvalidDate(text)
        day, year = int(long_form.group(1)), int(long_form.group(3))
    try:
        return date(year, month, day)
    except ValueError as e:
        raise InvalidDate(text) from e


def parse_german_date_or_none(text: str | None) -> date | None:
    """Lenient variant for table cells: empty or unparseable text yields None."""
    if not text or not text.strip():
        return None
    try:
        return parse_german_date(text)
    except InvalidDate:
        return None
