"""Append-only patch list for known data-entry errors of the document source.

Every entry here papers over one concrete publication mistake. Review the
tables whenever the source changes its naming conventions and drop entries
that no longer occur in the catalog.
"""

from datetime import date

# filename stem (or full filename) -> document date the source never published
DATE_OVERRIDES: dict[str, date] = {
    "INVOIC_MIG_2_7_2020401": date(2020, 4, 1),
    "Aenderungsantrag_EBD.xlsx": date(2019, 11, 11),
}

# mistyped filename fragment -> corrected fragment, applied before date parsing
FILENAME_TYPO_FIXES: dict[str, str] = {
    # day and month swapped: 2019-13-10 does not exist
    "_20191310": "_20191013",
}

# first title line -> corrected message type version
TITLE_VERSION_OVERRIDES: dict[str, str] = {
    # published without the "S" of the electricity variant
    "UTILMD MIG Strom 2.1": "S2.1",
}

# validity start at which old versions were republished under new version tokens
VERSION_REPUBLICATION_DATE = date(2021, 4, 1)

# documents starting before this year without an end date are dated at their start
VALID_FROM_FALLBACK_CUTOFF_YEAR = 2017
