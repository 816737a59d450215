# errors.py
"""Failures raised by the search, detail and recap steps.

Every error carries a ``message`` that is shown to the user verbatim.
"""


class RecapperError(Exception):
    """Base exception for all step failures."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class EmptyQuery(RecapperError):
    """Raised before any request when the query is blank."""

    def __init__(self, message: str = "Please enter a TV series name."):
        super().__init__(message)


class SearchError(RecapperError):
    """Raised when a series search yields no usable results."""


class DetailError(RecapperError):
    """Raised when series details cannot be fetched."""


class RecapError(RecapperError):
    """Base exception for recap generation failures."""


class RecapNoContent(RecapError):
    """Raised when the model answers without any extractable text."""

    def __init__(self, message: str = "No content from AI."):
        super().__init__(message)


class RecapTransportError(RecapError):
    """Raised when the generative endpoint cannot be reached or rejects the call."""
