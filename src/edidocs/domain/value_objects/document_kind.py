"""Document profiles."""

from enum import StrEnum


class DocumentKind(StrEnum):
    """Profile of a catalog document."""

    AHB = "ahb"
    MIG = "mig"
    GENERAL = "general"
