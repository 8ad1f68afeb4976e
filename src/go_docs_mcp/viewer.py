"""Local static viewer for the bundled documentation page."""

from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from importlib.resources import files

from loguru import logger

# URL path -> (packaged file, content type)
_ROUTES: dict[str, tuple[str, str]] = {
    "/": ("index.html", "text/html; charset=utf-8"),
    "/index.html": ("index.html", "text/html; charset=utf-8"),
    "/std.js": ("std.js", "text/javascript; charset=utf-8"),
}


def resolve_static(path: str) -> tuple[bytes, str] | None:
    """Return (body, content type) for a viewer URL path, or None if unknown."""
    route = _ROUTES.get(path.split("?", 1)[0])
    if route is None:
        return None
    filename, content_type = route
    resource = files("go_docs_mcp").joinpath("static", filename)
    try:
        return resource.read_bytes(), content_type
    except FileNotFoundError:
        return None


class ViewerHandler(BaseHTTPRequestHandler):
    def do_GET(self) -> None:  # noqa: N802
        found = resolve_static(self.path)
        if found is None:
            body = b"File not found"
            self.send_response(404)
            self.send_header("Content-Type", "text/plain; charset=utf-8")
        else:
            body, content_type = found
            self.send_response(200)
            self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args) -> None:
        logger.debug(f"viewer: {format % args}")


def make_server(port: int, host: str = "127.0.0.1") -> ThreadingHTTPServer:
    return ThreadingHTTPServer((host, port), ViewerHandler)


def start_view_server(version: str, port: int = 8080) -> None:
    """Serve the viewer until interrupted."""
    server = make_server(port)
    url = f"http://localhost:{server.server_address[1]}"
    print(f"Server started at {url}")
    print(f"Serving Go {version} documentation")
    print("Press Ctrl+C to stop the server")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        print("\nShutting down server...")
    finally:
        server.server_close()
