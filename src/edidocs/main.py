"""Application entry point and composition root."""

import asyncio
import sys
from dataclasses import dataclass

import falcon.asgi
from loguru import logger

from edidocs import __version__
from edidocs.application.ports import BinaryFetcher, CatalogSource, TextExtractor
from edidocs.application.use_cases.catalog.resolve_versions import ResolveVersionsUseCase
from edidocs.application.use_cases.catalog.sync_catalog import SyncCatalogUseCase
from edidocs.application.use_cases.document.export_mig_files import ExportMigFilesUseCase
from edidocs.application.use_cases.document.get_document import GetDocumentUseCase
from edidocs.application.use_cases.document.list_check_identifiers import (
    ListCheckIdentifiersUseCase,
)
from edidocs.application.use_cases.document.list_documents import ListDocumentsUseCase
from edidocs.application.use_cases.document.mirror_document import MirrorDocumentUseCase
from edidocs.application.use_cases.document.mirror_pending import MirrorPendingDocumentsUseCase
from edidocs.config import Settings, get_settings
from edidocs.domain.exceptions import EdiDocsError
from edidocs.infrastructure.catalog.html_catalog_source import HtmlCatalogSource
from edidocs.infrastructure.http.cached_http_client import CachedHttpClient
from edidocs.infrastructure.pdf.pypdf_text_extractor import PypdfTextExtractor
from edidocs.infrastructure.persistence.postgres.connection import create_pool
from edidocs.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from edidocs.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from edidocs.interfaces.api.resources.documents import (
    CheckIdentifiersResource,
    DocumentFileResource,
    DocumentResource,
    DocumentsResource,
)
from edidocs.interfaces.api.resources.health import HealthResource
from edidocs.interfaces.cli.commands import COMMANDS
from edidocs.interfaces.cli.parser import build_parser
from edidocs.logging_setup import configure_logging


@dataclass
class Services:
    """Wired use cases."""

    sync_catalog: SyncCatalogUseCase
    mirror_pending: MirrorPendingDocumentsUseCase
    resolve_versions: ResolveVersionsUseCase
    export_mig_files: ExportMigFilesUseCase
    list_documents: ListDocumentsUseCase
    get_document: GetDocumentUseCase
    list_check_identifiers: ListCheckIdentifiersUseCase


def build_services(
    settings: Settings,
    uow_factory,
    fetcher: BinaryFetcher,
    catalog_source: CatalogSource | None = None,
    text_extractor: TextExtractor | None = None,
) -> Services:
    catalog_source = catalog_source or HtmlCatalogSource(
        fetcher=fetcher,
        catalog_urls=settings.catalog_urls,
        base_url=settings.base_url,
        excluded_titles=settings.catalog_excluded_titles,
    )
    mirror_document = MirrorDocumentUseCase(
        fetcher=fetcher,
        text_extractor=text_extractor or PypdfTextExtractor(),
    )
    resolve_versions = ResolveVersionsUseCase(unit_of_work_factory=uow_factory)
    return Services(
        sync_catalog=SyncCatalogUseCase(
            unit_of_work_factory=uow_factory,
            catalog_source=catalog_source,
            mirror_document=mirror_document,
            match_mode=settings.match_mode,
        ),
        mirror_pending=MirrorPendingDocumentsUseCase(
            unit_of_work_factory=uow_factory,
            mirror_document=mirror_document,
            resolve_versions=resolve_versions,
        ),
        resolve_versions=resolve_versions,
        export_mig_files=ExportMigFilesUseCase(unit_of_work_factory=uow_factory),
        list_documents=ListDocumentsUseCase(unit_of_work_factory=uow_factory),
        get_document=GetDocumentUseCase(unit_of_work_factory=uow_factory),
        list_check_identifiers=ListCheckIdentifiersUseCase(unit_of_work_factory=uow_factory),
    )


def create_http_client(settings: Settings) -> CachedHttpClient:
    return CachedHttpClient(
        cache_dir=settings.cache_dir,
        prefer_cache=settings.prefer_cache,
        timeout_seconds=settings.http_timeout_seconds,
        max_attempts=settings.http_max_attempts,
        login_url=settings.login_url,
        username=settings.username,
        password=settings.password,
    )


def create_api(services: Services, health_resource: HealthResource, middleware=None):
    """Falcon app with the read-only routes."""
    app = falcon.asgi.App(middleware=middleware or [])

    async def log_exception(req, resp, ex, params):
        logger.opt(exception=ex).error(f"Unhandled error on {req.method} {req.path}")
        resp.status = falcon.HTTP_500
        resp.media = {"title": "500 Internal Server Error"}

    app.add_error_handler(Exception, log_exception)
    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/documents", DocumentsResource(services.list_documents))
    app.add_route("/v1/documents/{document_id}", DocumentResource(services.get_document))
    app.add_route("/v1/documents/{document_id}/file", DocumentFileResource(services.get_document))
    app.add_route(
        "/v1/check-identifiers",
        CheckIdentifiersResource(services.list_check_identifiers),
    )
    return app


def create_edidocs_app():
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_file)
    pool = create_pool(settings.database_url)
    services = build_services(settings, create_uow_factory(pool), create_http_client(settings))
    return create_api(
        services,
        HealthResource(pool),
        middleware=[PoolLifespanMiddleware(pool)],
    )


async def _run_command(args, settings: Settings) -> int:
    pool = create_pool(settings.database_url)
    http_client = create_http_client(settings)
    await pool.open()
    try:
        services = build_services(settings, create_uow_factory(pool), http_client)
        return await COMMANDS[args.command](services, args, settings)
    finally:
        await http_client.aclose()
        await pool.close()


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(args.log_level or settings.log_level, settings.log_file)
    logger.debug(f"edidocs v{__version__}, environment {settings.environment}")

    if args.command == "serve":
        import uvicorn

        uvicorn.run(create_edidocs_app(), host=args.host, port=args.port)
        return 0

    try:
        return asyncio.run(_run_command(args, settings))
    except EdiDocsError:
        logger.exception(f"Command {args.command!r} failed")
        return 1


if __name__ == "__main__":
    sys.exit(main())
