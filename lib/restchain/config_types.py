from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from importlib import metadata
from types import MappingProxyType
from typing import Mapping

from .errors import RequestBuildError
from .media_types import MediaType

ENV_TIMEOUT_S = "RESTCHAIN_TIMEOUT_S"
DEFAULT_TIMEOUT_S = 15.0

# RFC 6265 cookie-name (token) and cookie-value
_COOKIE_NAME_RE = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")
_COOKIE_VALUE_RE = re.compile(r'[\x21\x23-\x2B\x2D-\x3A\x3C-\x5B\x5D-\x7E]*|"[\x21\x23-\x2B\x2D-\x3A\x3C-\x5B\x5D-\x7E]*"')


def default_timeout() -> float:
    try:
        value = float(os.getenv(ENV_TIMEOUT_S) or DEFAULT_TIMEOUT_S)
    except ValueError:
        return DEFAULT_TIMEOUT_S
    return value if value > 0 else DEFAULT_TIMEOUT_S


def default_user_agent() -> str:
    try:
        version = metadata.version("restchain")
    except metadata.PackageNotFoundError:
        version = "0.0.0"
    return f"restchain/{version}"


@dataclass(frozen=True)
class TransportConfig:
    timeout_s: float = field(default_factory=default_timeout)
    user_agent: str = field(default_factory=default_user_agent)
    follow_redirects: bool = True
    verify_tls: bool = True


@dataclass(frozen=True)
class Cookie:
    name: str
    value: str
    path: str | None = None
    domain: str | None = None
    secure: bool = False
    http_only: bool = False


@dataclass(frozen=True)
class ClientConfig:
    """Immutable snapshot of everything needed to build one request.

    ``headers`` and ``query`` are stored as read-only views over dicts owned
    by this instance alone, so two snapshots never share mutable state.
    """

    base_url: str
    accept: MediaType
    content_type: MediaType
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    query: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    cookies: tuple[Cookie, ...] = ()
    timeout_s: float | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))
        object.__setattr__(self, "query", MappingProxyType(dict(self.query)))
        object.__setattr__(self, "cookies", tuple(self.cookies))


def cookie_header(cookies: tuple[Cookie, ...]) -> str:
    """Render ``cookies`` as one ``Cookie`` header value, in order."""
    pairs = []
    for c in cookies:
        if not _COOKIE_NAME_RE.fullmatch(c.name or ""):
            raise RequestBuildError(f"invalid cookie name {c.name!r}")
        if not _COOKIE_VALUE_RE.fullmatch(c.value or ""):
            raise RequestBuildError(f"invalid value for cookie {c.name!r}")
        pairs.append(f"{c.name}={c.value}")
    return "; ".join(pairs)
