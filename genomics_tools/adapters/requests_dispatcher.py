"""Default dispatcher: executes resolved requests with ``requests`` on a thread pool."""
from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Dict, Optional

import requests

from ..config import DEFAULT_MAX_WORKERS
from ..descriptors import ResolvedRequest
from ..errors import GenomicsApiError
from ..options import ClientOptions
from ..ports import DispatcherPort

log = logging.getLogger("genomics_tools")


def _error_message(response: requests.Response) -> str:
    # Google APIs wrap failures as {"error": {"code": ..., "message": ...}}
    try:
        payload = response.json()
    except ValueError:
        return response.text
    if isinstance(payload, dict):
        message = (payload.get("error") or {}).get("message")
        if message:
            return message
    return response.text


class RequestsDispatcher(DispatcherPort):
    """Thin HTTP executor over a shared ``requests.Session``.

    No retries and no pagination: each dispatched request is one HTTP call.
    HTTP error statuses surface through the future as ``GenomicsApiError``;
    connection problems surface as the ``requests`` exception unchanged.
    """

    def __init__(self, options: ClientOptions, session: Optional[requests.Session] = None):
        self.session = session or requests.Session()
        self.executor = ThreadPoolExecutor(
            max_workers=int(options.extra.get("max_workers", DEFAULT_MAX_WORKERS)),
            thread_name_prefix="genomics",
        )
        if options.token:
            self.session.headers.update({"Authorization": f"Bearer {options.token}"})

    def dispatch(self, request: ResolvedRequest, options: ClientOptions) -> Future:
        return self.executor.submit(self.send, request, options)

    def send(self, request: ResolvedRequest, options: ClientOptions) -> Dict[str, Any]:
        """Perform ``request`` synchronously and return the decoded JSON body."""
        r = self.session.request(
            request.method,
            request.url,
            params=list(request.query) or None,
            json=request.body,
            timeout=options.timeout,
        )
        try:
            r.raise_for_status()
        except requests.HTTPError as e:
            message = _error_message(r)
            log.warning("%s %s failed with %s: %s", request.method, request.url, r.status_code, message)
            raise GenomicsApiError(r.status_code, message, url=request.url) from e
        log.info("%s %s -> %s", request.method, request.url, r.status_code)
        if not r.content:
            return {}
        return r.json()

    def close(self) -> None:
        self.executor.shutdown(wait=True)
        self.session.close()

    def __enter__(self) -> "RequestsDispatcher":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
