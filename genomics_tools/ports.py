"""Ports (interfaces) for the Genomics client.

The resource facade only builds requests; executing them is delegated to a
dispatcher behind this interface so the transport can be swapped out
(tests use an in-memory fake).
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from concurrent.futures import Future
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .descriptors import ResolvedRequest
    from .options import ClientOptions


class DispatcherPort(ABC):
    """Abstract request execution."""

    @abstractmethod
    def dispatch(self, request: "ResolvedRequest", options: "ClientOptions") -> Future:
        """Start executing ``request`` and return a future for its result.

        The future completes exactly once, with the decoded response or with
        the error raised by the transport.
        """
