"""Domain exceptions."""


class EdiDocsError(Exception):
    """Base exception for edidocs."""

    pass


class DocumentDateNotFound(EdiDocsError):
    """No date rule matched the title, filename or validity window."""

    def __init__(self, raw_title: str, filename: str | None) -> None:
        super().__init__(
            f"cannot guess date for document (title={raw_title!r}, filename={filename!r})"
        )
        self.raw_title = raw_title
        self.filename = filename


class AmbiguousProcess(EdiDocsError):
    """Title matches keywords of more than one process."""

    def __init__(self, raw_title: str, candidates: list[str]) -> None:
        super().__init__(
            f"title {raw_title!r} matches more than one process: {', '.join(candidates)}"
        )
        self.raw_title = raw_title
        self.candidates = candidates


class FetchError(EdiDocsError):
    """Retrieving a remote resource failed."""

    def __init__(self, uri: str, cause: BaseException) -> None:
        super().__init__(f"failed to load {uri!r}: {type(cause).__name__}: {cause}")
        self.uri = uri
        self.cause = cause


class ExtractionError(EdiDocsError):
    """Text extraction from a mirrored file failed."""

    def __init__(self, filename: str, cause: BaseException) -> None:
        super().__init__(f"failed to extract text from {filename!r}: {cause}")
        self.filename = filename
        self.cause = cause


class InvalidDate(EdiDocsError):
    """Date fragment could not be parsed."""

    def __init__(self, text: str) -> None:
        super().__init__(f"not a recognised date: {text!r}")
        self.text = text


class NotFound(EdiDocsError):
    """Requested resource was not found."""

    pass


class ValidationError(EdiDocsError):
    """Validation failed for input data."""

    pass
