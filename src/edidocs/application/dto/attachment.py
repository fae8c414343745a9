"""Attachment DTO."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Attachment:
    """Mirrored binary of a document."""

    filename: str
    content: bytes
