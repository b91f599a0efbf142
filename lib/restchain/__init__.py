import logging

from .client import RestClient, make_client
from .config_types import ClientConfig, Cookie, TransportConfig
from .errors import (
    BodyReadError,
    ContentTypeMismatch,
    DeserializationError,
    InvalidURL,
    RequestBuildError,
    RestClientError,
    TransportError,
)
from .media_types import APPLICATION_JSON, TEXT_PLAIN, JsonMediaType, MediaType, TextMediaType
from .results import Result
from .transport import Transport

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "RestClient",
    "make_client",
    "ClientConfig",
    "Cookie",
    "TransportConfig",
    "Transport",
    "MediaType",
    "JsonMediaType",
    "TextMediaType",
    "APPLICATION_JSON",
    "TEXT_PLAIN",
    "Result",
    "RestClientError",
    "InvalidURL",
    "RequestBuildError",
    "TransportError",
    "ContentTypeMismatch",
    "BodyReadError",
    "DeserializationError",
]
