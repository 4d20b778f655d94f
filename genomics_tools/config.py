from __future__ import annotations
import os

GENOMICS_BASE_URL: str = os.environ.get("GENOMICS_BASE_URL", "https://genomics.googleapis.com")
GENOMICS_API_VERSION: str = os.environ.get("GENOMICS_API_VERSION", "v1")
# Where to look for the bearer token by default
GENOMICS_TOKEN_ENV: str = os.environ.get("GENOMICS_TOKEN_ENV", "GENOMICS_TOKEN")

# Seconds; forwarded to requests for every call
DEFAULT_TIMEOUT: int = 60
# Thread pool size of the default dispatcher
DEFAULT_MAX_WORKERS: int = 4

HTTP_METHODS = ("GET", "POST", "PATCH", "DELETE")

# Request parameter holding the JSON body of a call
BODY_PARAM = "resource"

# Actions addressed with a literal ":verb" suffix instead of a REST path
CUSTOM_VERBS = ("undelete", "import", "export", "merge", "cancel")

# Query parameters shared by the list endpoints
PAGING_PARAMS = ("pageToken", "pageSize")
