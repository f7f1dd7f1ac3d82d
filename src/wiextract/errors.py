"""Errors raised by the work instruction extractor."""


class WiExtractError(Exception):
    """Base class for extractor errors."""


class UnsupportedFormatError(WiExtractError):
    """
    Raised when an attachment cannot be opened as a document.

    Attributes:
        filename: Name of the offending file
        reason: Why the loader rejected it
    """

    def __init__(self, filename: str, reason: str) -> None:
        self.filename = filename
        self.reason = reason
        super().__init__(f"Cannot load '{filename}': {reason}")


class ResultSealedError(WiExtractError):
    """Raised when a conversion result is modified after the engine returned it."""

    def __init__(self, filename: str) -> None:
        self.filename = filename
        super().__init__(f"Conversion result for '{filename}' is sealed")
