"""Go Docs MCP Server - Go builtin and standard library documentation for AI agents."""

from importlib.metadata import version

from go_docs_mcp.__main__ import _cli as main
from go_docs_mcp.server import mcp

__version__ = version("go-docs-mcp")
__all__ = ["mcp", "main", "__version__"]
