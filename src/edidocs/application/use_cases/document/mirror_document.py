"""Mirror document use case."""

from loguru import logger

from edidocs.application.dto import Attachment
from edidocs.application.ports import BinaryFetcher, TextExtractor
from edidocs.domain.entities import EdiDocument
from edidocs.domain.services import extract_check_identifiers, infer_document_date
from edidocs.domain.value_objects import Mirrored


class MirrorDocumentUseCase:
    """Download a pending document, date it and extract its check identifiers."""

    def __init__(self, fetcher: BinaryFetcher, text_extractor: TextExtractor) -> None:
        self._fetcher = fetcher
        self._text_extractor = text_extractor

    async def execute(self, document: EdiDocument, prefer_cache: bool = False) -> Attachment | None:
        """Mirror the document in place and return its attachment.

        Already mirrored documents are left alone and yield None. The document
        is only touched once every step succeeded, so a failure leaves it
        pending. Raises FetchError, ExtractionError or DocumentDateNotFound.
        """
        if document.is_mirrored:
            logger.debug(f"Document {document.id} already mirrored as {document.filename}")
            return None

        logger.debug(f"Downloading copy of {document.source_uri}")
        resource = await self._fetcher.get(document.source_uri, prefer_cache=prefer_cache)

        document_date = infer_document_date(
            document.raw_title,
            resource.filename,
            document.valid_from,
            document.valid_to,
        )

        check_identifiers: dict[int, list[int]] = {}
        if self._text_extractor.supports(resource.filename):
            logger.debug(f"Analyzing text of {resource.filename} ({len(resource.content)} bytes)")
            pages = self._text_extractor.extract_pages(resource.content, resource.filename)
            check_identifiers = extract_check_identifiers(
                document.is_ahb, document.contained_message_types, pages
            )

        document.mirror = Mirrored(filename=resource.filename)
        document.document_date = document_date
        document.check_identifiers = check_identifiers
        logger.info(f"Mirrored {document.document_name!r} as {resource.filename} dated {document_date}")
        return Attachment(filename=resource.filename, content=resource.content)
