"""Go Docs MCP Server - Main server definition."""

import asyncio
import json
import sys
from contextlib import asynccontextmanager

from loguru import logger
from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from mcp.types import ToolAnnotations
from pydantic import ValidationError

from go_docs_mcp.acquire import load_docs
from go_docs_mcp.config import settings
from go_docs_mcp.models import UpdatePolicy
from go_docs_mcp.store import CacheStore, normalize_version
from go_docs_mcp.surface import QuerySurface

# Configure logging (stdout carries the MCP stdio transport)
logger.remove()
logger.add(sys.stderr, level=settings.log_level)

# Module-level state (set by main before the server starts)
_surface: QuerySurface | None = None
_store: CacheStore | None = None


@asynccontextmanager
async def _lifespan(_server: FastMCP):
    """Server lifespan: documentation is loaded before startup, so only log."""
    if _surface:
        logger.info(f"Starting Go Docs MCP Server for Go {_surface.version}...")
    yield
    logger.info("Shutting down Go Docs MCP Server...")


mcp = FastMCP(
    name="GoDocs",
    instructions=(
        "Retrieves documentation for the Go programming language standard "
        "library and builtin functions. "
        "Use `list_builtin_functions` / `get_builtin_function` for builtins, "
        "`search_std_lib` / `get_std_lib_item` for the standard library."
    ),
    lifespan=_lifespan,
)


def _require_surface() -> QuerySurface:
    if _surface is None:
        raise ToolError("Documentation not loaded")
    return _surface


def _dumps(data) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2)


@mcp.tool(
    annotations=ToolAnnotations(
        readOnlyHint=True,
        openWorldHint=False,
        idempotentHint=True,
    ),
)
async def list_builtin_functions() -> str:
    """List all Go builtin functions with their signatures and documentation."""
    surface = _require_surface()
    return _dumps([fn.model_dump() for fn in surface.list_builtin_functions()])


@mcp.tool(
    annotations=ToolAnnotations(
        readOnlyHint=True,
        openWorldHint=False,
        idempotentHint=True,
    ),
)
async def get_builtin_function(function_name: str) -> str:
    """Get documentation for a single Go builtin function (e.g. len, append)."""
    surface = _require_surface()
    fn = surface.get_builtin_function(function_name)
    if fn is None:
        raise ToolError(f"Builtin function '{function_name}' not found")
    return _dumps(fn.model_dump())


@mcp.tool(
    annotations=ToolAnnotations(
        readOnlyHint=True,
        openWorldHint=False,
        idempotentHint=True,
    ),
)
async def search_std_lib(query: str, limit: int = 10) -> str:
    """Search Go standard library packages and functions by name or description.
    Returns at most `limit` items, best matches first.
    """
    surface = _require_surface()
    items = surface.search_std_lib(query, limit)
    return _dumps([item.model_dump() for item in items])


@mcp.tool(
    annotations=ToolAnnotations(
        readOnlyHint=True,
        openWorldHint=False,
        idempotentHint=True,
    ),
)
async def get_std_lib_item(name: str) -> str:
    """Get a Go standard library item by name (e.g. fmt, fmt.Println, net/http)."""
    surface = _require_surface()
    item = surface.get_std_lib_item(name)
    if item is None:
        raise ToolError(f"Standard library item '{name}' not found")
    return _dumps(item.model_dump())


@mcp.tool(
    annotations=ToolAnnotations(
        title="Status",
        readOnlyHint=True,
        openWorldHint=False,
        idempotentHint=True,
    ),
)
async def status() -> str:
    """Show the served Go version, cache location, and archive state."""
    surface = _require_surface()
    info: dict = {
        "version": surface.version,
        "builtin_functions": len(surface.list_builtin_functions()),
        "archive": {
            "kind": surface.archive.kind,
            "bytes": len(surface.archive.data),
        },
    }
    if _store:
        try:
            marker = _store.read_marker(surface.version)
        except (OSError, ValidationError):
            marker = None
        info["cache"] = {
            "root": str(_store.root),
            "partition": str(_store.partition(surface.version)),
            "last_update_ms": marker.last_update if marker else None,
            "cached_versions": _store.cached_versions(),
        }
    return _dumps(info)


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------


@mcp.prompt()
def explain_builtin(function_name: str) -> str:
    """Generate a prompt explaining a Go builtin function."""
    return (
        f"Explain the Go builtin function '{function_name}'.\n\n"
        f"1. Use the get_builtin_function tool with function_name='{function_name}'.\n"
        "2. Summarize its signature and behavior, including nil and edge cases.\n"
        "3. Show a short idiomatic usage example."
    )


def init_docs(
    version: str,
    policy: UpdatePolicy,
    store: CacheStore,
) -> QuerySurface:
    """Acquire documentation and install the query surface used by the tools.

    Raises ``DocsError`` if builtin metadata cannot be acquired.
    """
    global _surface, _store

    key = normalize_version(version)
    functions, archive = asyncio.run(
        load_docs(store, key, policy, timeout=settings.http_timeout)
    )
    if archive.is_fallback:
        logger.warning(f"Go {key} sources unavailable, using synthetic fallback")

    _store = store
    _surface = QuerySurface(key, functions, archive)
    return _surface


def main(version: str | None = None, policy: UpdatePolicy | None = None) -> None:
    """Entry point for the MCP server."""
    init_docs(
        version or settings.go_version,
        policy or settings.update_policy,
        CacheStore(settings.get_cache_root()),
    )
    mcp.run()


if __name__ == "__main__":
    main()
