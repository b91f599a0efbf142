from __future__ import annotations

import httpx
import pytest

from restchain import Transport, TransportConfig, make_client


@pytest.fixture
def mock_client():
    opened: list[Transport] = []

    def _make(handler, base_url: str = "http://api.test"):
        t = Transport(
            TransportConfig(timeout_s=5.0, user_agent="restchain-tests"),
            http_transport=httpx.MockTransport(handler),
        )
        opened.append(t)
        return make_client(base_url, transport=t)

    yield _make
    for t in opened:
        t.close()
