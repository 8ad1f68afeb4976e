"""Pytest configuration and fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from go_docs_mcp.store import CacheStore


@pytest.fixture
def store(tmp_path):
    """Cache store rooted in an isolated temporary directory."""
    return CacheStore(tmp_path / "cache")


def _make_response(status_code: int = 200, content: bytes = b"") -> MagicMock:
    """Build a stand-in for ``httpx.Response``."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.content = content
    resp.reason_phrase = "OK" if status_code == 200 else "Error"
    return resp


@pytest.fixture
def mock_http():
    """Factory for a mock ``httpx.AsyncClient`` routed by URL.

    ``routes`` maps URL substrings to a response or an exception instance;
    unmatched URLs return 404. Patch ``go_docs_mcp.acquire.httpx.AsyncClient``
    with ``return_value=client`` to use it::

        client = mock_http({"pkg.go.dev": make_response(200)})
        with patch("go_docs_mcp.acquire.httpx.AsyncClient", return_value=client):
            ...
    """

    def factory(routes: dict) -> AsyncMock:
        async def route_get(url, *args, **kwargs):
            for fragment, outcome in routes.items():
                if fragment in url:
                    if isinstance(outcome, BaseException):
                        raise outcome
                    return outcome
            return _make_response(404)

        client = AsyncMock()
        client.get = AsyncMock(side_effect=route_get)
        client.__aenter__.return_value = client
        client.__aexit__.return_value = None
        return client

    return factory


@pytest.fixture
def make_response():
    """Factory for mock ``httpx.Response`` objects."""
    return _make_response
