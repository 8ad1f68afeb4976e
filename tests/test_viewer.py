"""Tests for src/go_docs_mcp/viewer.py: static documentation viewer."""

import threading

import httpx
import pytest

from go_docs_mcp.viewer import make_server, resolve_static


class TestResolveStatic:
    @pytest.mark.parametrize("path", ["/", "/index.html", "/index.html?q=fmt"])
    def test_index_routes(self, path):
        body, content_type = resolve_static(path)
        assert content_type.startswith("text/html")
        assert b"std.js" in body

    def test_script_route(self):
        body, content_type = resolve_static("/std.js")
        assert content_type.startswith("text/javascript")
        assert b"startDocsViewer" in body

    @pytest.mark.parametrize("path", ["/etc/passwd", "/../pyproject.toml", "/static/std.js"])
    def test_unknown_paths(self, path):
        assert resolve_static(path) is None


@pytest.fixture
def live_server():
    server = make_server(0)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_address[1]}"
    server.shutdown()
    server.server_close()


def test_serves_index(live_server):
    resp = httpx.get(f"{live_server}/", trust_env=False)
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert "Go Documentation" in resp.text


def test_unknown_path_is_404(live_server):
    resp = httpx.get(f"{live_server}/missing.css", trust_env=False)
    assert resp.status_code == 404
    assert resp.text == "File not found"
