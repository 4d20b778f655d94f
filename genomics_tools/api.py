from __future__ import annotations
import logging
from concurrent.futures import Future
from typing import Any, Callable, Dict, Mapping, Optional

from .adapters.requests_dispatcher import RequestsDispatcher
from .descriptors import ResolvedRequest, get_descriptor, resolve
from .options import ClientOptions
from .ports import DispatcherPort

log = logging.getLogger("genomics_tools")

Params = Optional[Mapping[str, Any]]
Callback = Optional[Callable[[Future], Any]]


class Genomics:
    """Client for the Genomics v1 API.

    Store, process, explore and share DNA sequence reads, reference-based
    alignments and variant calls. Every method builds its request from the
    static descriptor table and hands it to the dispatcher, returning the
    dispatcher's future unmodified.

    Keyword overrides that are not ``ClientOptions`` fields (e.g.
    ``max_workers``) are collected into ``options.extra`` for the
    dispatcher. A completion callback runs when the future finishes: on a
    dispatcher worker thread for the default dispatcher, but inline on the
    caller's thread if the dispatcher hands back an already finished future.
    ``close()`` only shuts down a dispatcher the client created itself.

    >>> client = Genomics(token="...", max_workers=2)
    >>> client.datasets.get({"datasetId": "10473108253681171589"}).result()
    >>> client.variants.merge(resource={"variantSetId": "VS1", "variants": [...]})
    >>> client.readgroupsets.coveragebuckets.list(readGroupSetId="R1", pageSize=100)
    """

    def __init__(self, options: Optional[ClientOptions] = None, dispatcher: Optional[DispatcherPort] = None,
                 **overrides: Any):
        if options is None:
            options = ClientOptions.from_env(**overrides)
        elif overrides:
            options = options.with_overrides(**overrides)
        self.options = options
        self._owns_dispatcher = dispatcher is None
        self.dispatcher = dispatcher or RequestsDispatcher(options)

        self.datasets = DatasetsResource(self)
        self.operations = OperationsResource(self)
        self.readgroupsets = ReadGroupSetsResource(self)
        self.reads = ReadsResource(self)
        self.referencesets = ReferenceSetsResource(self)
        self.references = ReferencesResource(self)
        self.variants = VariantsResource(self)
        self.variantsets = VariantSetsResource(self)
        self.callsets = CallSetsResource(self)

    # Positional-only: callers pass the request body as ``resource=``.
    def build_request(self, resource_name: str, action: str, params: Params = None, /,
                      **kwargs: Any) -> ResolvedRequest:
        """Resolve a request without dispatching it."""
        merged: Dict[str, Any] = dict(params or {})
        merged.update(kwargs)
        return resolve(get_descriptor(resource_name, action), merged, self.options.api_root,
                       method_name=f"{resource_name}.{action}")

    def execute(self, resource_name: str, action: str, params: Params = None, callback: Callback = None, /,
                **kwargs: Any) -> Future:
        request = self.build_request(resource_name, action, params, **kwargs)
        log.debug("Dispatching %s.%s: %s %s", resource_name, action, request.method, request.url)
        future = self.dispatcher.dispatch(request, self.options)
        if callback is not None:
            future.add_done_callback(callback)
        return future

    def close(self) -> None:
        if not self._owns_dispatcher:
            return
        close = getattr(self.dispatcher, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> "Genomics":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class Resource:
    """Base class of the per-resource method groups."""

    name = ""

    def __init__(self, client: Genomics):
        self._client = client

    def call(self, action: str, params: Params = None, callback: Callback = None, /, **kwargs: Any) -> Future:
        """Invoke ``action`` by name, e.g. ``variants.call("import", resource={...})``."""
        return self._client.execute(self.name, action, params, callback, **kwargs)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} genomics.{self.name}>"


class DatasetsResource(Resource):
    name = "datasets"

    def list(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        """Lists datasets within a project. Query: projectId, pageSize, pageToken."""
        return self.call("list", params, callback, **kwargs)

    def create(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        return self.call("create", params, callback, **kwargs)

    def get(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        """Gets a dataset. Requires datasetId."""
        return self.call("get", params, callback, **kwargs)

    def patch(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        """Updates a dataset. Requires datasetId; optional updateMask."""
        return self.call("patch", params, callback, **kwargs)

    def delete(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        return self.call("delete", params, callback, **kwargs)

    def undelete(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        """Restores a dataset deleted less than a week ago. Requires datasetId."""
        return self.call("undelete", params, callback, **kwargs)


class OperationsResource(Resource):
    """Long-running operations. ``name`` is the full resource name, e.g. ``operations/123``.

    Polling an operation until it is done is left to the caller.
    """

    name = "operations"

    def get(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        return self.call("get", params, callback, **kwargs)

    def list(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        """Lists operations. ``name`` is the collection (``operations``); query: filter, pageSize, pageToken."""
        return self.call("list", params, callback, **kwargs)

    def cancel(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        return self.call("cancel", params, callback, **kwargs)

    def delete(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        return self.call("delete", params, callback, **kwargs)


class CoverageBucketsResource(Resource):
    name = "readgroupsets.coveragebuckets"

    def list(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        """Lists coverage buckets of a read group set.

        Requires readGroupSetId; query: referenceName, start, end,
        targetBucketWidth, pageToken, pageSize.
        """
        return self.call("list", params, callback, **kwargs)


class ReadGroupSetsResource(Resource):
    name = "readgroupsets"

    def __init__(self, client: Genomics):
        super().__init__(client)
        self.coveragebuckets = CoverageBucketsResource(client)

    def import_(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        """``readgroupsets.import``; returns a long-running operation."""
        return self.call("import", params, callback, **kwargs)

    def export(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        """Exports to a BAM file in Cloud Storage. Requires readGroupSetId."""
        return self.call("export", params, callback, **kwargs)

    def search(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        return self.call("search", params, callback, **kwargs)

    def patch(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        return self.call("patch", params, callback, **kwargs)

    def delete(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        return self.call("delete", params, callback, **kwargs)

    def get(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        return self.call("get", params, callback, **kwargs)


class ReadsResource(Resource):
    name = "reads"

    def search(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        return self.call("search", params, callback, **kwargs)


class ReferenceSetsResource(Resource):
    name = "referencesets"

    def search(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        return self.call("search", params, callback, **kwargs)

    def get(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        return self.call("get", params, callback, **kwargs)


class BasesResource(Resource):
    name = "references.bases"

    def list(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        """Lists the bases of a reference. Requires referenceId; query: start, end, pageToken, pageSize."""
        return self.call("list", params, callback, **kwargs)


class ReferencesResource(Resource):
    name = "references"

    def __init__(self, client: Genomics):
        super().__init__(client)
        self.bases = BasesResource(client)

    def search(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        return self.call("search", params, callback, **kwargs)

    def get(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        return self.call("get", params, callback, **kwargs)


class VariantsResource(Resource):
    name = "variants"

    def import_(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        """``variants.import``; returns a long-running operation."""
        return self.call("import", params, callback, **kwargs)

    def search(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        return self.call("search", params, callback, **kwargs)

    def create(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        return self.call("create", params, callback, **kwargs)

    def patch(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        """Updates names and/or info of a variant. Requires variantId; optional updateMask."""
        return self.call("patch", params, callback, **kwargs)

    def delete(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        return self.call("delete", params, callback, **kwargs)

    def get(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        return self.call("get", params, callback, **kwargs)

    def merge(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        return self.call("merge", params, callback, **kwargs)


class VariantSetsResource(Resource):
    name = "variantsets"

    def create(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        return self.call("create", params, callback, **kwargs)

    def export(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        """Exports variant set data, e.g. to BigQuery. Requires variantSetId."""
        return self.call("export", params, callback, **kwargs)

    def get(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        return self.call("get", params, callback, **kwargs)

    def search(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        return self.call("search", params, callback, **kwargs)

    def delete(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        return self.call("delete", params, callback, **kwargs)

    def patch(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        return self.call("patch", params, callback, **kwargs)


class CallSetsResource(Resource):
    name = "callsets"

    def search(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        return self.call("search", params, callback, **kwargs)

    def create(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        return self.call("create", params, callback, **kwargs)

    def patch(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        return self.call("patch", params, callback, **kwargs)

    def delete(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        return self.call("delete", params, callback, **kwargs)

    def get(self, params: Params = None, callback: Callback = None, **kwargs: Any) -> Future:
        return self.call("get", params, callback, **kwargs)
