"""Export MIG files use case."""

from pathlib import Path, PurePosixPath

from loguru import logger

from edidocs.domain.entities import EdiDocument


def mig_export_path(target_dir: Path, document: EdiDocument) -> Path:
    """<target>/<date> MIG/<types>_MIG_<version>_<date><ext>"""
    day = document.document_date.isoformat() if document.document_date else "unknown"
    types = "_".join(document.message_types) or "unknown"
    suffix = PurePosixPath(document.filename or "").suffix
    filename = f"{types}_MIG_{document.message_type_version}_{day}{suffix}"
    return target_dir / f"{day} MIG" / filename


class ExportMigFilesUseCase:
    """Write the latest MIG files to a local folder tree."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, target_dir: Path) -> list[Path]:
        """Existing files are kept; returns the newly written paths."""
        written: list[Path] = []
        async with self._uow_factory() as uow:
            documents = await uow.documents.list_all()
            for document in documents:
                if not (document.is_mig and document.is_latest_version and document.is_mirrored):
                    continue
                path = mig_export_path(target_dir, document)
                if path.exists():
                    continue
                attachment = await uow.documents.get_attachment(document.id)
                if attachment is None:
                    logger.warning(f"Document {document.id} is mirrored but has no attachment")
                    continue
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_bytes(attachment.content)
                logger.info(f"Exported {document.document_name!r} to {path}")
                written.append(path)
        return written
