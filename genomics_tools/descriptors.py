"""Request descriptors for every Genomics v1 method.

Each (resource, action) pair maps to a :class:`RequestDescriptor`: a URL
template relative to the API root, the HTTP verb and the parameters the
template consumes. :func:`resolve` turns a descriptor and the caller's
parameters into a :class:`ResolvedRequest`, the finished request handed to
the dispatcher.

URL templates use two placeholder forms:

- ``{name}``  the value is percent-encoded, ``/`` included.
- ``{+name}`` reserved expansion; ``/`` is kept so full resource names
  such as ``operations/1234`` land in the path as-is.
"""
from __future__ import annotations
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple
from urllib.parse import quote

from .config import BODY_PARAM, HTTP_METHODS, PAGING_PARAMS
from .errors import MissingParameterError, UnknownMethodError

log = logging.getLogger("genomics_tools")

_PLACEHOLDER = re.compile(r"\{(\+?)([A-Za-z_][A-Za-z0-9_]*)\}")


def template_placeholders(url_template: str) -> Dict[str, bool]:
    """Return ``{name: reserved}`` for every placeholder in ``url_template``."""
    return {m.group(2): bool(m.group(1)) for m in _PLACEHOLDER.finditer(url_template)}


@dataclass(frozen=True)
class RequestDescriptor:
    """Static description of one API method."""

    url_template: str
    http_method: str
    required_params: Tuple[str, ...] = ()
    path_params: Tuple[str, ...] = ()
    query_params: Tuple[str, ...] = ()
    description: str = ""

    def __post_init__(self) -> None:
        if self.http_method not in HTTP_METHODS:
            raise ValueError(f"Unsupported HTTP method {self.http_method!r}")
        placeholders = set(template_placeholders(self.url_template))
        if placeholders != set(self.path_params):
            raise ValueError(
                f"{self.url_template!r}: placeholders {sorted(placeholders)} "
                f"do not match path params {sorted(self.path_params)}"
            )
        not_required = set(self.path_params) - set(self.required_params)
        if not_required:
            raise ValueError(f"{self.url_template!r}: path params {sorted(not_required)} must be required")

    @property
    def custom_verb(self) -> Optional[str]:
        """The ``:verb`` suffix of the template, if any."""
        tail = self.url_template.rsplit("/", 1)[-1]
        if ":" in tail:
            return tail.rsplit(":", 1)[1]
        return None


@dataclass(frozen=True)
class ResolvedRequest:
    """A concrete request: verb, absolute URL, query pairs and body."""

    method: str
    url: str
    query: Tuple[Tuple[str, Any], ...] = ()
    body: Any = None

    @property
    def params(self) -> Dict[str, Any]:
        return dict(self.query)

    def as_dict(self) -> Dict[str, Any]:
        return {"method": self.method, "url": self.url, "query": self.params, "body": self.body}


def _d(url_template: str, http_method: str, path: Tuple[str, ...] = (), query: Tuple[str, ...] = (),
       description: str = "") -> RequestDescriptor:
    # Every path parameter of this API identifies the target resource, so it is always required.
    return RequestDescriptor(
        url_template=url_template,
        http_method=http_method,
        required_params=path,
        path_params=path,
        query_params=query,
        description=description,
    )


_DATASET = ("datasetId",)
_OPERATION = ("name",)
_READ_GROUP_SET = ("readGroupSetId",)
_REFERENCE_SET = ("referenceSetId",)
_REFERENCE = ("referenceId",)
_VARIANT = ("variantId",)
_VARIANT_SET = ("variantSetId",)
_CALL_SET = ("callSetId",)
_UPDATE_MASK = ("updateMask",)

METHOD_TABLE: Dict[Tuple[str, str], RequestDescriptor] = {
    # datasets
    ("datasets", "list"): _d("datasets", "GET", query=("projectId",) + PAGING_PARAMS,
                             description="Lists datasets within a project."),
    ("datasets", "create"): _d("datasets", "POST", description="Creates a new dataset."),
    ("datasets", "get"): _d("datasets/{datasetId}", "GET", _DATASET, description="Gets a dataset by ID."),
    ("datasets", "patch"): _d("datasets/{datasetId}", "PATCH", _DATASET, _UPDATE_MASK,
                              description="Updates a dataset. Supports patch semantics."),
    ("datasets", "delete"): _d("datasets/{datasetId}", "DELETE", _DATASET, description="Deletes a dataset."),
    ("datasets", "undelete"): _d("datasets/{datasetId}:undelete", "POST", _DATASET,
                                 description="Restores a dataset deleted within the last week."),
    # operations
    ("operations", "get"): _d("{+name}", "GET", _OPERATION,
                              description="Gets the latest state of a long-running operation."),
    ("operations", "list"): _d("{+name}", "GET", _OPERATION, ("filter",) + PAGING_PARAMS,
                               description="Lists operations that match the specified filter."),
    ("operations", "cancel"): _d("{+name}:cancel", "POST", _OPERATION,
                                 description="Starts asynchronous cancellation of a long-running operation."),
    ("operations", "delete"): _d("{+name}", "DELETE", _OPERATION,
                                 description="Not implemented by the service; use cancel instead."),
    # readgroupsets
    ("readgroupsets", "import"): _d("readgroupsets:import", "POST",
                                    description="Creates read group sets by asynchronously importing BAM files."),
    ("readgroupsets", "export"): _d("readgroupsets/{readGroupSetId}:export", "POST", _READ_GROUP_SET,
                                    description="Exports a read group set to a BAM file in Cloud Storage."),
    ("readgroupsets", "search"): _d("readgroupsets/search", "POST",
                                    description="Searches for read group sets matching the criteria."),
    ("readgroupsets", "patch"): _d("readgroupsets/{readGroupSetId}", "PATCH", _READ_GROUP_SET, _UPDATE_MASK,
                                   description="Updates a read group set. Supports patch semantics."),
    ("readgroupsets", "delete"): _d("readgroupsets/{readGroupSetId}", "DELETE", _READ_GROUP_SET,
                                    description="Deletes a read group set."),
    ("readgroupsets", "get"): _d("readgroupsets/{readGroupSetId}", "GET", _READ_GROUP_SET,
                                 description="Gets a read group set by ID."),
    ("readgroupsets.coveragebuckets", "list"): _d(
        "readgroupsets/{readGroupSetId}/coveragebuckets", "GET", _READ_GROUP_SET,
        ("referenceName", "start", "end", "targetBucketWidth") + PAGING_PARAMS,
        description="Lists fixed width coverage buckets for a read group set.",
    ),
    # reads
    ("reads", "search"): _d("reads/search", "POST",
                            description="Gets a list of reads for one or more read group sets."),
    # referencesets
    ("referencesets", "search"): _d("referencesets/search", "POST",
                                    description="Searches for reference sets which match the given criteria."),
    ("referencesets", "get"): _d("referencesets/{referenceSetId}", "GET", _REFERENCE_SET,
                                 description="Gets a reference set."),
    # references
    ("references", "search"): _d("references/search", "POST",
                                 description="Searches for references which match the given criteria."),
    ("references", "get"): _d("references/{referenceId}", "GET", _REFERENCE, description="Gets a reference."),
    ("references.bases", "list"): _d("references/{referenceId}/bases", "GET", _REFERENCE,
                                     ("start", "end") + PAGING_PARAMS,
                                     description="Lists the bases in a reference, optionally restricted to a range."),
    # variants
    ("variants", "import"): _d("variants:import", "POST",
                               description="Creates variant data by asynchronously importing VCF files."),
    ("variants", "search"): _d("variants/search", "POST", description="Gets a list of variants matching the criteria."),
    ("variants", "create"): _d("variants", "POST", description="Creates a new variant."),
    ("variants", "patch"): _d("variants/{variantId}", "PATCH", _VARIANT, _UPDATE_MASK,
                              description="Updates a variant. Supports patch semantics."),
    ("variants", "delete"): _d("variants/{variantId}", "DELETE", _VARIANT, description="Deletes a variant."),
    ("variants", "get"): _d("variants/{variantId}", "GET", _VARIANT, description="Gets a variant by ID."),
    ("variants", "merge"): _d("variants:merge", "POST",
                              description="Merges the given variants with existing variants."),
    # variantsets
    ("variantsets", "create"): _d("variantsets", "POST", description="Creates a new variant set."),
    ("variantsets", "export"): _d("variantsets/{variantSetId}:export", "POST", _VARIANT_SET,
                                  description="Exports variant set data to an external destination."),
    ("variantsets", "get"): _d("variantsets/{variantSetId}", "GET", _VARIANT_SET,
                               description="Gets a variant set by ID."),
    ("variantsets", "search"): _d("variantsets/search", "POST",
                                  description="Returns all variant sets matching search criteria."),
    ("variantsets", "delete"): _d("variantsets/{variantSetId}", "DELETE", _VARIANT_SET,
                                  description="Deletes the contents of a variant set."),
    ("variantsets", "patch"): _d("variantsets/{variantSetId}", "PATCH", _VARIANT_SET, _UPDATE_MASK,
                                 description="Updates a variant set. Supports patch semantics."),
    # callsets
    ("callsets", "search"): _d("callsets/search", "POST", description="Gets a list of call sets matching the criteria."),
    ("callsets", "create"): _d("callsets", "POST", description="Creates a new call set."),
    ("callsets", "patch"): _d("callsets/{callSetId}", "PATCH", _CALL_SET, _UPDATE_MASK,
                              description="Updates a call set. Supports patch semantics."),
    ("callsets", "delete"): _d("callsets/{callSetId}", "DELETE", _CALL_SET, description="Deletes a call set."),
    ("callsets", "get"): _d("callsets/{callSetId}", "GET", _CALL_SET, description="Gets a call set by ID."),
}


def get_descriptor(resource: str, action: str) -> RequestDescriptor:
    try:
        return METHOD_TABLE[(resource, action)]
    except KeyError:
        raise UnknownMethodError(resource, action) from None


def iter_methods() -> Iterator[Tuple[str, str, RequestDescriptor]]:
    for (resource, action), descriptor in METHOD_TABLE.items():
        yield resource, action, descriptor


def resolve(descriptor: RequestDescriptor, params: Optional[Mapping[str, Any]], api_root: str,
            method_name: str = "") -> ResolvedRequest:
    """Build the concrete request for ``descriptor`` from caller ``params``.

    Raises :class:`MissingParameterError` if any required parameter is
    absent or ``None``. Path parameters are substituted into the template,
    ``resource`` becomes the body and everything else is sent as a query
    parameter. ``None``-valued optional parameters are dropped.
    """
    params = dict(params or {})
    name = method_name or descriptor.url_template

    missing = [p for p in descriptor.required_params if params.get(p) is None]
    if missing:
        raise MissingParameterError(name, missing)

    body = params.pop(BODY_PARAM, None)
    path_values = {p: str(params.pop(p)) for p in descriptor.path_params}

    def substitute(m: "re.Match[str]") -> str:
        safe = "/" if m.group(1) else ""
        return quote(path_values[m.group(2)], safe=safe)

    url = api_root + _PLACEHOLDER.sub(substitute, descriptor.url_template)

    query = []
    for key, value in params.items():
        if value is None:
            continue
        if key not in descriptor.query_params:
            log.debug("%s: passing undocumented parameter %r through as query", name, key)
        query.append((key, value))

    log.debug("Resolved %s -> %s %s", name, descriptor.http_method, url)
    return ResolvedRequest(method=descriptor.http_method, url=url, query=tuple(query), body=body)
