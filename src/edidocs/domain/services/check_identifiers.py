"""Extract check identifiers from the page texts of an AHB."""

import re
from collections.abc import Iterable

from loguru import logger

from edidocs.domain.constants import CHECK_IDENTIFIER_PREFIXES


def check_identifier_pattern(message_types: Iterable[str] | None) -> re.Pattern[str] | None:
    """Alternation of the reserved prefixes of the given types, each followed by three digits."""
    prefixes = sorted(
        {
            prefix
            for message_type in message_types or ()
            for prefix in CHECK_IDENTIFIER_PREFIXES.get(message_type, ())
        }
    )
    if not prefixes:
        return None
    alternation = "|".join(f"{prefix}\\d{{3}}" for prefix in prefixes)
    return re.compile(f"(?<!\\d)(?:{alternation})(?!\\d)")


def extract_check_identifiers(
    is_ahb: bool,
    message_types: Iterable[str] | None,
    pages: Iterable[str],
) -> dict[int, list[int]]:
    """Map each check identifier to the 1-based pages it appears on.

    Only AHB documents with at least one message type owning a reserved
    prefix are scanned; everything else yields an empty mapping.
    """
    if not is_ahb:
        logger.debug("Not an AHB document, skipping check identifier extraction")
        return {}
    pattern = check_identifier_pattern(message_types)
    if pattern is None:
        return {}

    result: dict[int, list[int]] = {}
    for page_number, text in enumerate(pages, start=1):
        for identifier in sorted({int(m) for m in pattern.findall(text)}):
            result.setdefault(identifier, []).append(page_number)

    if result:
        logger.debug(f"Extracted {len(result)} check identifiers with pattern {pattern.pattern}")
    else:
        logger.debug("Extracted no check identifiers")
    return result
