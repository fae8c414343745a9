"""Catalog source reading the HTML listing pages of the document portal."""

import re
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from loguru import logger

from edidocs.application.ports import BinaryFetcher
from edidocs.domain.services import normalize_title
from edidocs.domain.services.german_dates import parse_german_date_or_none
from edidocs.domain.value_objects import CatalogEntry

# per-request cache buster, differs between page loads of the same document
_CHASH = re.compile(r"&cHash=[A-Za-z0-9]+")


def clean_link(href: str, base_url: str) -> str:
    """Absolute, stable URI for a catalog link."""
    href = _CHASH.sub("", href.replace("&amp;", "&").strip())
    return urljoin(base_url.rstrip("/") + "/", href)


def parse_catalog_page(
    html: str,
    base_url: str,
    excluded_titles: tuple[str, ...] | list[str] = (),
) -> list[CatalogEntry]:
    """Entries of the first table on a listing page.

    Only rows carrying a link count; title, validity start, validity end and
    link are taken from the first four cells in that order.
    """
    soup = BeautifulSoup(html, "html.parser")
    table = soup.find("table")
    if table is None:
        logger.warning("Catalog page contains no table")
        return []

    entries = []
    for row in table.find_all("tr"):
        if row.find("a", href=True) is None:
            continue
        cells = row.find_all("td")
        if len(cells) < 4:
            logger.debug(f"Skipping catalog row with {len(cells)} cells")
            continue
        link = cells[3].find("a", href=True)
        if link is None:
            continue
        for line_break in cells[0].find_all("br"):
            line_break.replace_with("\n")
        raw_title = normalize_title(cells[0].get_text())
        if any(excluded in raw_title for excluded in excluded_titles):
            logger.debug(f"Skipping excluded catalog entry {raw_title!r}")
            continue
        entries.append(
            CatalogEntry(
                raw_title=raw_title,
                valid_from=parse_german_date_or_none(cells[1].get_text()),
                valid_to=parse_german_date_or_none(cells[2].get_text()),
                uri=clean_link(link["href"], base_url),
            )
        )
    return entries


class HtmlCatalogSource:
    """Reads all configured listing pages through the binary fetcher."""

    def __init__(
        self,
        fetcher: BinaryFetcher,
        catalog_urls: list[str],
        base_url: str,
        excluded_titles: list[str] | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._catalog_urls = catalog_urls
        self._base_url = base_url
        self._excluded_titles = tuple(excluded_titles or ())

    async def fetch_entries(self, prefer_cache: bool = False) -> list[CatalogEntry]:
        entries: list[CatalogEntry] = []
        for url in self._catalog_urls:
            page = await self._fetcher.get(url, prefer_cache=prefer_cache)
            html = page.content.decode("utf-8", errors="replace")
            found = parse_catalog_page(html, self._base_url, self._excluded_titles)
            logger.debug(f"{len(found)} entries on {url}")
            entries.extend(found)
        return entries
