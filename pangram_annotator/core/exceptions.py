"""
Error taxonomy for an analysis invocation.

Every error is terminal for the invocation that raised it: nothing is
retried and no annotations are partially applied.
"""


class PangramError(Exception):
    """Base class for all errors raised by the annotator."""


class PreconditionError(PangramError):
    """Input text is empty or no API key is configured. No network call is made."""


class TransportError(PangramError):
    """The classification service produced no usable response."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ParseError(PangramError):
    """The response body failed validation against the expected shape."""


class StaleTargetError(PangramError):
    """The document captured at submission time is no longer available."""
