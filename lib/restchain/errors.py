from __future__ import annotations


class RestClientError(Exception):
    """Base client error."""


class InvalidURL(RestClientError):
    """Base URL could not be parsed into an absolute URL."""


class RequestBuildError(RestClientError):
    """Outgoing request could not be constructed."""


class TransportError(RestClientError):
    """Transport/network layer error."""


class ContentTypeMismatch(RestClientError):
    def __init__(self, got: str, want: str):
        super().__init__(
            f"Expected response Content-Type [{got}] to match/contain request Accept [{want}]"
        )
        self.got = got
        self.want = want


class BodyReadError(RestClientError):
    """Response body could not be drained."""


class DeserializationError(RestClientError):
    """Response body could not be unmarshalled into a result container."""
