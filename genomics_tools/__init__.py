"""genomics-tools — light-weight Python client for the Genomics v1 API

Usage
-----
>>> import genomics_tools as gt
>>> client = gt.Genomics(token="ya29....")
>>> dataset = client.datasets.get({"datasetId": "10473108253681171589"}).result()
>>> page = client.variants.search(resource={"variantSetIds": ["VS1"], "pageSize": 100}).result()
>>> gt.to_frame(page, "variants.search")

Every method builds its request from a static descriptor table
(resource, action -> URL template, verb, required and path parameters)
and hands it to a dispatcher, returning a ``concurrent.futures.Future``.

Environment
-----------
- Optional bearer token via env var ``GENOMICS_TOKEN``.
- Dependencies: requests, pandas.
"""

from .api import Genomics
from .descriptors import METHOD_TABLE, RequestDescriptor, ResolvedRequest
from .errors import GenomicsApiError, GenomicsError, MissingParameterError, UnknownMethodError
from .options import ClientOptions
from .utils import to_frame

__all__ = [
    "Genomics",
    "ClientOptions",
    "METHOD_TABLE",
    "RequestDescriptor",
    "ResolvedRequest",
    "GenomicsError",
    "GenomicsApiError",
    "MissingParameterError",
    "UnknownMethodError",
    "to_frame",
]
