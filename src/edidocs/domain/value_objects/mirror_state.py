"""Download lifecycle of a catalog document."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Pending:
    """Listed in the catalog, binary not yet downloaded."""

    @property
    def filename(self) -> None:
        return None


@dataclass(frozen=True)
class Mirrored:
    """Binary downloaded and stored as attachment."""

    filename: str

    def __post_init__(self) -> None:
        if not self.filename:
            raise ValueError("Mirrored filename must not be empty")


MirrorState = Pending | Mirrored

PENDING = Pending()
