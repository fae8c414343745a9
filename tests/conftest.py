"""Pytest fixtures for edidocs tests."""

from __future__ import annotations

import io
from contextlib import asynccontextmanager
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

import pytest
from pypdf import PdfWriter
from pypdf.generic import DecodedStreamObject, DictionaryObject, NameObject

from edidocs.application.dto import Attachment, FetchedResource
from edidocs.domain.entities import EdiDocument, RunStatistics
from edidocs.domain.exceptions import FetchError
from edidocs.domain.value_objects import PENDING, CatalogEntry, MirrorState

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)


# --- Fake repositories ---


class FakeDocumentRepository:
    """In-memory document repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, EdiDocument] = {}
        self._attachments: dict[UUID, Attachment] = {}
        self.updated: list[UUID] = []

    async def get_by_id(self, document_id: UUID) -> EdiDocument | None:
        return self._by_id.get(document_id)

    async def list_all(self) -> list[EdiDocument]:
        return sorted(self._by_id.values(), key=lambda d: (d.created_at, str(d.id)))

    async def list_pending(self, *, limit: int) -> list[EdiDocument]:
        pending = [d for d in await self.list_all() if not d.is_mirrored]
        return pending[:limit]

    async def create(self, document: EdiDocument) -> EdiDocument:
        self._by_id[document.id] = document
        return document

    async def update(self, document: EdiDocument) -> EdiDocument:
        self._by_id[document.id] = document
        self.updated.append(document.id)
        return document

    async def delete(self, document_id: UUID) -> None:
        self._by_id.pop(document_id, None)
        self._attachments.pop(document_id, None)

    async def save_attachment(self, document_id: UUID, attachment: Attachment) -> None:
        self._attachments[document_id] = attachment

    async def get_attachment(self, document_id: UUID) -> Attachment | None:
        return self._attachments.get(document_id)

    def add(self, document: EdiDocument, attachment: Attachment | None = None) -> None:
        self._by_id[document.id] = document
        if attachment is not None:
            self._attachments[document.id] = attachment


class FakeRunStatisticsRepository:
    """In-memory run statistics."""

    def __init__(self) -> None:
        self.runs: list[RunStatistics] = []

    async def get_latest(self) -> RunStatistics | None:
        return max(self.runs, key=lambda r: r.run_finished_at, default=None)

    async def add(self, statistics: RunStatistics) -> None:
        self.runs.append(statistics)


class FakeUnitOfWork:
    """Fake Unit of Work with in-memory repos."""

    def __init__(self) -> None:
        self.documents = FakeDocumentRepository()
        self.run_statistics = FakeRunStatisticsRepository()
        self.commits = 0

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        pass


def make_uow_factory(uow: FakeUnitOfWork):
    """Factory yielding the same UoW for every transaction of a test."""

    @asynccontextmanager
    async def _factory():
        yield uow
        await uow.commit()

    return _factory


# --- Fake adapters ---


class FakeFetcher:
    """Binary fetcher serving canned resources by URI."""

    def __init__(self, resources: dict[str, FetchedResource] | None = None) -> None:
        self.resources = resources or {}
        self.failing: set[str] = set()
        self.requests: list[str] = []

    async def get(self, uri: str, prefer_cache: bool = False) -> FetchedResource:
        self.requests.append(uri)
        if uri in self.failing or uri not in self.resources:
            raise FetchError(uri, RuntimeError("unreachable"))
        return self.resources[uri]


class FakeCatalogSource:
    """Catalog source with a fixed list of entries."""

    def __init__(self, entries: list[CatalogEntry] | None = None) -> None:
        self.entries = entries or []

    async def fetch_entries(self, prefer_cache: bool = False) -> list[CatalogEntry]:
        return list(self.entries)


class FakeTextExtractor:
    """Text extractor returning preset pages for PDF files."""

    def __init__(self, pages: dict[str, list[str]] | None = None) -> None:
        self.pages = pages or {}

    def supports(self, filename: str) -> bool:
        return filename.lower().endswith(".pdf")

    def extract_pages(self, content: bytes, filename: str) -> list[str]:
        return self.pages.get(filename, [])


# --- Builders ---


def make_document(
    raw_title: str = "UTILMD AHB GPKE GeLi Gas 6.0a",
    *,
    document_name: str | None = None,
    source_uri: str | None = None,
    is_mig: bool = False,
    is_ahb: bool = True,
    contained_message_types: tuple[str, ...] | None = ("UTILMD",),
    bdew_process: str | None = "GPKE GeLi Gas",
    message_type_version: str | None = "6.0a",
    valid_from: date | None = date(2020, 1, 1),
    valid_to: date | None = None,
    document_date: date | None = date(2019, 10, 1),
    mirror: MirrorState = PENDING,
    is_latest_version: bool = False,
    check_identifiers: dict[int, list[int]] | None = None,
    created_at: datetime = NOW,
) -> EdiDocument:
    return EdiDocument(
        id=uuid4(),
        raw_title=raw_title,
        document_name=document_name or raw_title.splitlines()[0],
        source_uri=source_uri or f"https://example.test/{uuid4().hex}",
        is_mig=is_mig,
        is_ahb=is_ahb,
        contained_message_types=contained_message_types,
        bdew_process=bdew_process,
        message_type_version=message_type_version,
        valid_from=valid_from,
        valid_to=valid_to,
        created_at=created_at,
        updated_at=created_at,
        document_date=document_date,
        mirror=mirror,
        is_latest_version=is_latest_version,
        check_identifiers=check_identifiers or {},
    )


def make_general_document(name: str = "Allgemeine Festlegungen", **kwargs) -> EdiDocument:
    kwargs.setdefault("contained_message_types", None)
    return make_document(
        name,
        is_ahb=False,
        bdew_process=None,
        message_type_version=None,
        **kwargs,
    )


def make_pdf(pages: list[str]) -> bytes:
    """Minimal PDF with one line of Helvetica text per page."""
    writer = PdfWriter()
    font = DictionaryObject(
        {
            NameObject("/Type"): NameObject("/Font"),
            NameObject("/Subtype"): NameObject("/Type1"),
            NameObject("/BaseFont"): NameObject("/Helvetica"),
        }
    )
    for text in pages:
        page = writer.add_blank_page(width=595, height=842)
        page[NameObject("/Resources")] = DictionaryObject(
            {
                NameObject("/Font"): DictionaryObject(
                    {NameObject("/F1"): font}
                )
            }
        )
        stream = DecodedStreamObject()
        stream.set_data(f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode("latin-1"))
        page[NameObject("/Contents")] = writer._add_object(stream)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture
def uow() -> FakeUnitOfWork:
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(uow: FakeUnitOfWork):
    return make_uow_factory(uow)
