from __future__ import annotations
import logging
import os
from typing import Any, Dict, Iterable, Mapping, Optional

import pandas as pd

from .config import GENOMICS_TOKEN_ENV
from .errors import UnknownMethodError

logger = logging.getLogger("genomics_tools")

# Item list key of each list/search response, keyed by "resource.action"
RESPONSE_ITEM_KEYS = {
    "datasets.list": "datasets",
    "operations.list": "operations",
    "readgroupsets.search": "readGroupSets",
    "readgroupsets.coveragebuckets.list": "coverageBuckets",
    "reads.search": "alignments",
    "referencesets.search": "referenceSets",
    "references.search": "references",
    "variants.search": "variants",
    "variantsets.search": "variantSets",
    "callsets.search": "callSets",
}


def read_env_token() -> Optional[str]:
    token = os.environ.get(GENOMICS_TOKEN_ENV)
    if token:
        logger.info("Using token from env var %s", GENOMICS_TOKEN_ENV)
    else:
        logger.info("No %s in environment; requests will be sent unauthenticated.", GENOMICS_TOKEN_ENV)
    return token


def flatten_hits(hits: Iterable[Dict[str, Any]]) -> pd.DataFrame:
    # Flatten nested JSON to dotted columns, e.g. "alignment.position.referenceName"
    return pd.json_normalize(list(hits), sep=".")


def to_frame(response: Mapping[str, Any], method: str | None = None, *, key: str | None = None) -> pd.DataFrame:
    """Tabulate the items of a list/search response.

    The item list is looked up by ``key`` or, failing that, by the method
    name (``"variants.search"`` -> ``"variants"``). A response without items
    gives an empty DataFrame. A method without a known item list raises
    ``UnknownMethodError``.
    """
    if key is None:
        if method is None or method not in RESPONSE_ITEM_KEYS:
            resource, _, action = (method or "").rpartition(".")
            raise UnknownMethodError(resource, action)
        key = RESPONSE_ITEM_KEYS[method]
    return flatten_hits(response.get(key) or [])
