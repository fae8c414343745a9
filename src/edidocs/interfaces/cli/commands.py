"""Command implementations.

Each command receives the wired use cases and the parsed arguments and
returns the process exit code.
"""

import argparse

from loguru import logger

from edidocs.config import Settings


async def run_sync(services, args: argparse.Namespace, settings: Settings) -> int:
    result = await services.sync_catalog.execute(
        prefer_cache=args.prefer_cache or settings.prefer_cache,
        dry_run=args.dry_run,
    )
    prefix = "[dry run] " if result.dry_run else ""
    print(
        f"{prefix}{result.catalog_entries} catalog entries, {result.new_documents} new, "
        f"{result.updated_documents} updated, {result.pending_documents} pending, "
        f"{result.removed_duplicates} duplicates removed"
    )
    return 0


async def run_mirror(services, args: argparse.Namespace, settings: Settings) -> int:
    batch_size = args.batch_size or settings.mirror_batch_size
    prefer_cache = args.prefer_cache or settings.prefer_cache
    processed = failed = 0
    while True:
        result = await services.mirror_pending.execute(batch_size, prefer_cache=prefer_cache)
        processed += len(result.processed)
        failed += len(result.failed)
        # failed documents stay pending and would be picked up again
        if not (args.all and result.has_more and result.processed):
            break
    print(f"{processed} documents mirrored, {failed} failed")
    return 1 if failed and not processed else 0


async def run_export_migs(services, args: argparse.Namespace, settings: Settings) -> int:
    target = args.target or settings.mig_export_dir
    written = await services.export_mig_files.execute(target)
    for path in written:
        print(path)
    logger.info(f"Exported {len(written)} MIG files to {target}")
    return 0


async def run_check_identifiers(services, args: argparse.Namespace, settings: Settings) -> int:
    identifiers = await services.list_check_identifiers.execute()
    for identifier in identifiers:
        print(identifier)
    logger.info(f"{len(identifiers)} distinct check identifiers")
    return 0


COMMANDS = {
    "sync": run_sync,
    "mirror": run_mirror,
    "export-migs": run_export_migs,
    "check-identifiers": run_check_identifiers,
}
