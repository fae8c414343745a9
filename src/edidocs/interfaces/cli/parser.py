"""Command line parser."""

import argparse
from pathlib import Path

from edidocs import __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="edidocs",
        description="Mirror and classify the EDI@Energy document catalog",
    )
    parser.add_argument("--version", action="version", version=f"edidocs {__version__}")
    parser.add_argument("--log-level", default=None, help="Override EDIDOCS_LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    sync = sub.add_parser("sync", help="Load the catalog and register new documents")
    sync.add_argument(
        "--prefer-cache",
        action="store_true",
        help="Serve cached copies of pages and files where present",
    )
    sync.add_argument(
        "--dry-run",
        action="store_true",
        help="Classify, download and date documents without writing anything",
    )

    mirror = sub.add_parser("mirror", help="Download documents that are still pending")
    mirror.add_argument("--batch-size", type=int, default=None, help="Documents per batch")
    mirror.add_argument("--prefer-cache", action="store_true", help="Serve cached copies")
    mirror.add_argument(
        "--all",
        action="store_true",
        help="Repeat batches while pending documents remain and progress is made",
    )

    export = sub.add_parser("export-migs", help="Write the latest MIG files to a folder tree")
    export.add_argument("--target", type=Path, default=None, help="Target directory")

    sub.add_parser("check-identifiers", help="Print check identifiers of the current AHBs")

    serve = sub.add_parser("serve", help="Run the read-only HTTP API")
    serve.add_argument("--host", default="0.0.0.0", help="Bind address")
    serve.add_argument("--port", type=int, default=8000, help="Bind port")
    return parser
