"""Exceptions raised by the Genomics client."""
from __future__ import annotations

from typing import Iterable, Optional


class GenomicsError(Exception):
    """Base class for Genomics client errors."""


class MissingParameterError(GenomicsError, ValueError):
    """A required request parameter was not supplied.

    Raised before anything is handed to the dispatcher.
    """

    def __init__(self, method: str, missing: Iterable[str]):
        self.method = method
        self.missing = tuple(missing)
        names = ", ".join(self.missing)
        super().__init__(f"Missing required parameters for {method}: {names}")


class UnknownMethodError(GenomicsError, AttributeError):
    """No request descriptor is registered for a resource/action pair."""

    def __init__(self, resource: str, action: str):
        self.resource = resource
        self.action = action
        super().__init__(f"Unknown method: genomics.{resource}.{action}")


class GenomicsApiError(GenomicsError):
    """The API answered with an HTTP error status."""

    def __init__(self, status_code: int, message: str, url: Optional[str] = None):
        self.status_code = status_code
        self.message = message
        self.url = url
        super().__init__(f"ResponseError: code={status_code}, message={message}")
