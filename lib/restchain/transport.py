from __future__ import annotations

import logging
import re
from http.cookiejar import CookieJar

import httpx

from .config_types import TransportConfig
from .errors import RequestBuildError, TransportError

logger = logging.getLogger(__name__)

# RFC 7230 token
_METHOD_RE = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")


class _NoCookieJar(CookieJar):
    """Cookie jar that never stores anything."""

    def set_cookie(self, cookie) -> None:
        pass

    def extract_cookies(self, response, request) -> None:
        pass


class Transport:
    """Sends fully-formed requests over a shared ``httpx.Client``.

    One instance may back any number of RestClient snapshots and may be used
    from several threads at once.
    """

    def __init__(self, cfg: TransportConfig | None = None, *, http_transport: httpx.BaseTransport | None = None):
        self._cfg = cfg or TransportConfig()
        self._client = httpx.Client(
            timeout=self._cfg.timeout_s,
            headers={"User-Agent": self._cfg.user_agent},
            follow_redirects=self._cfg.follow_redirects,
            verify=self._cfg.verify_tls,
            cookies=_NoCookieJar(),
            transport=http_transport,
        )

    @property
    def config(self) -> TransportConfig:
        return self._cfg

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> Transport:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def build_request(
            self,
            method: str,
            url: httpx.URL,
            *,
            content: bytes | None = None,
            headers: httpx.Headers | None = None,
            timeout: float | None = None,
    ) -> httpx.Request:
        if not isinstance(method, str) or not _METHOD_RE.fullmatch(method):
            raise RequestBuildError(f"invalid method {method!r}")
        try:
            return self._client.build_request(
                method,
                url,
                content=content,
                headers=headers,
                timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT,
            )
        except (httpx.InvalidURL, TypeError, ValueError) as e:
            raise RequestBuildError(str(e)) from e

    def send(self, request: httpx.Request) -> httpx.Response:
        """Send ``request`` and return the response with its body still unread.

        The caller owns the response and must close it.
        """
        try:
            response = self._client.send(request, stream=True)
        except httpx.RequestError as e:
            raise TransportError(str(e)) from e
        logger.debug("%s %s -> %s", request.method, request.url, response.status_code)
        return response
