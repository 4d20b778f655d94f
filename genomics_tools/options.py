from __future__ import annotations
from dataclasses import dataclass, field, fields, replace
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from .config import DEFAULT_TIMEOUT, GENOMICS_API_VERSION, GENOMICS_BASE_URL
from .utils import read_env_token


@dataclass(frozen=True)
class ClientOptions:
    """Immutable per-client configuration.

    ``extra`` holds options this layer does not interpret; they are handed
    to the dispatcher verbatim.
    """

    base_url: str = GENOMICS_BASE_URL
    version: str = GENOMICS_API_VERSION
    token: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    @property
    def api_root(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self.version}/"

    @classmethod
    def from_env(cls, **overrides: Any) -> "ClientOptions":
        """Options with the bearer token taken from the environment.

        Keywords that are not fields are collected into ``extra``.
        """
        if "token" not in overrides:
            overrides["token"] = read_env_token()
        known, extra = _split_overrides(overrides)
        if extra:
            known["extra"] = {**known.get("extra", {}), **extra}
        return cls(**known)

    def with_overrides(self, **changes: Any) -> "ClientOptions":
        known, extra = _split_overrides(changes)
        if extra:
            known["extra"] = {**known.get("extra", self.extra), **extra}
        return replace(self, **known)


def _split_overrides(overrides: Mapping[str, Any]) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    names = {f.name for f in fields(ClientOptions)}
    known = {k: v for k, v in overrides.items() if k in names}
    extra = {k: v for k, v in overrides.items() if k not in names}
    return known, extra
