from __future__ import annotations

import dataclasses
import logging
from typing import Any, Mapping

import httpx

from .config_types import ClientConfig, Cookie, cookie_header
from .errors import BodyReadError, ContentTypeMismatch, DeserializationError, InvalidURL
from .media_types import APPLICATION_JSON, MediaType
from .transport import Transport

logger = logging.getLogger(__name__)


def make_client(base_url: str, *, transport: Transport | None = None) -> RestClient:
    """Create an immutable RestClient rooted at ``base_url``.

    ``base_url`` should be fully qualified (``https://example.com/api``). It is
    only validated when one of the HTTP verbs runs, so a partial client can be
    stored and built upon later, e.g. per route or handler.
    """
    cfg = ClientConfig(
        base_url=(base_url or "").strip("/"),
        accept=APPLICATION_JSON,
        content_type=APPLICATION_JSON,
    )
    return RestClient(cfg, transport or Transport())


class RestClient:
    def __init__(self, cfg: ClientConfig, transport: Transport):
        self._cfg = cfg
        self._t = transport

    def __repr__(self) -> str:
        return f"RestClient({self._cfg.base_url!r})"

    def _derive(self, **changes: Any) -> RestClient:
        return RestClient(dataclasses.replace(self._cfg, **changes), self._t)

    # --- accessors ---
    @property
    def config(self) -> ClientConfig:
        return self._cfg

    @property
    def transport(self) -> Transport:
        return self._t

    @property
    def url(self) -> str:
        return self._cfg.base_url

    @property
    def accept(self) -> MediaType:
        return self._cfg.accept

    @property
    def content_type(self) -> MediaType:
        return self._cfg.content_type

    @property
    def headers(self) -> Mapping[str, str]:
        return self._cfg.headers

    @property
    def query(self) -> Mapping[str, str]:
        return self._cfg.query

    @property
    def cookies(self) -> tuple[Cookie, ...]:
        return self._cfg.cookies

    # --- immutable builder methods ---
    def with_accept(self, accept: MediaType) -> RestClient:
        return self._derive(accept=accept)

    def with_content_type(self, content_type: MediaType) -> RestClient:
        return self._derive(content_type=content_type)

    def with_path(self, *segments: str) -> RestClient:
        url = self._cfg.base_url
        for segment in segments:
            url = f"{url}/{str(segment).strip('/')}"
        return self._derive(base_url=url)

    def with_query(self, key: str, value: str) -> RestClient:
        query = dict(self._cfg.query)
        query[key] = value
        return self._derive(query=query)

    def with_header(self, key: str, value: str) -> RestClient:
        headers = dict(self._cfg.headers)
        headers[key] = value
        return self._derive(headers=headers)

    def with_cookie(self, cookie: Cookie) -> RestClient:
        return self._derive(cookies=self._cfg.cookies + (cookie,))

    def with_timeout(self, seconds: float | None) -> RestClient:
        return self._derive(timeout_s=seconds)

    # --- HTTP verbs ---
    def get(self, *results: Any) -> None:
        self.execute("GET", None, results)

    def put(self, body: bytes | None, *results: Any) -> None:
        self.execute("PUT", body, results)

    def post(self, body: bytes | None, *results: Any) -> None:
        self.execute("POST", body, results)

    def delete(self, *results: Any) -> None:
        """Reserved. Sends nothing and always succeeds."""
        logger.debug("DELETE %s skipped: delete is a no-op", self._cfg.base_url)

    def execute(self, method: str, body: bytes | None, results: tuple[Any, ...] | list[Any] = ()) -> None:
        """Send one request built from this snapshot and unmarshal the body
        into each of ``results`` in order.

        Every container gets its own decode pass over the same bytes, so
        containers of different shapes can be filled from one response.
        """
        cfg = self._cfg
        url = self._parse_url()
        if cfg.query:
            url = url.copy_merge_params(dict(cfg.query))

        headers = httpx.Headers(dict(cfg.headers))
        headers["Accept"] = str(cfg.accept)
        headers["Content-Type"] = str(cfg.content_type)
        if cfg.cookies:
            headers["Cookie"] = cookie_header(cfg.cookies)

        request = self._t.build_request(method, url, content=body, headers=headers, timeout=cfg.timeout_s)
        logger.debug("%s %s", request.method, request.url)

        response = self._t.send(request)
        try:
            want = str(cfg.accept)
            got = response.headers.get("Content-Type", "")
            if results and want.lower() not in got.lower():
                raise ContentTypeMismatch(got, want)

            try:
                payload = response.read()
            except (httpx.HTTPError, httpx.StreamError) as e:
                raise BodyReadError(str(e)) from e
        finally:
            response.close()

        for target in results:
            try:
                cfg.accept.unmarshal(payload, target)
            except DeserializationError:
                raise
            except Exception as e:
                raise DeserializationError(f"{type(e).__name__}: {e}") from e

    def _parse_url(self) -> httpx.URL:
        try:
            url = httpx.URL(self._cfg.base_url)
        except (httpx.InvalidURL, TypeError) as e:
            raise InvalidURL(f"invalid base url {self._cfg.base_url!r}: {e}") from e
        if not url.scheme or not url.host:
            raise InvalidURL(f"base url {self._cfg.base_url!r} is not fully qualified")
        return url
