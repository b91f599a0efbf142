from __future__ import annotations

import logging
from importlib import metadata

import pytest

from restchain import config_types
from restchain.config_types import ClientConfig, Cookie, TransportConfig, cookie_header
from restchain.errors import RequestBuildError
from restchain.media_types import APPLICATION_JSON


def test_default_timeout_env_override(monkeypatch) -> None:
    monkeypatch.setenv(config_types.ENV_TIMEOUT_S, "2.5")
    assert config_types.default_timeout() == 2.5
    assert TransportConfig().timeout_s == 2.5


@pytest.mark.parametrize("raw", ["", "abc", "0", "-3"])
def test_default_timeout_falls_back(monkeypatch, raw) -> None:
    monkeypatch.setenv(config_types.ENV_TIMEOUT_S, raw)
    assert config_types.default_timeout() == config_types.DEFAULT_TIMEOUT_S


def test_user_agent_without_installed_distribution(monkeypatch) -> None:
    def _missing(_: str) -> str:
        raise metadata.PackageNotFoundError("restchain")

    monkeypatch.setattr(config_types.metadata, "version", _missing)
    assert config_types.default_user_agent() == "restchain/0.0.0"


def test_client_config_owns_its_mappings() -> None:
    headers = {"H": "1"}
    cfg = ClientConfig(base_url="http://x", accept=APPLICATION_JSON, content_type=APPLICATION_JSON, headers=headers)
    headers["H"] = "2"

    assert cfg.headers["H"] == "1"
    with pytest.raises(AttributeError):
        cfg.base_url = "http://y"  # type: ignore[misc]


def test_package_logger_has_null_handler() -> None:
    handlers = logging.getLogger("restchain").handlers
    assert any(isinstance(h, logging.NullHandler) for h in handlers)


def test_cookie_header_joins_in_order() -> None:
    cookies = (Cookie("session", "abc"), Cookie("quoted", '"v1"'), Cookie("empty", ""))
    assert cookie_header(cookies) == 'session=abc; quoted="v1"; empty='


@pytest.mark.parametrize(
    "cookie",
    [
        Cookie("a", "x; admin=1"),
        Cookie("a", "has space"),
        Cookie("a", 'half"quoted'),
        Cookie("a", "back\\slash"),
        Cookie("bad name", "v"),
        Cookie("", "v"),
        Cookie("a=b", "v"),
    ],
)
def test_cookie_header_rejects_invalid_cookies(cookie) -> None:
    with pytest.raises(RequestBuildError):
        cookie_header((cookie,))
