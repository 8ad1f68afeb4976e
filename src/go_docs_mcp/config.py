"""Configuration settings for Go Docs MCP Server."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings

from go_docs_mcp.models import UpdatePolicy


def _default_cache_dir() -> Path:
    """Get default cache directory ($XDG_CACHE_HOME/go-docs-mcp or ~/.cache/go-docs-mcp)."""
    xdg_cache = os.environ.get("XDG_CACHE_HOME")
    if xdg_cache:
        return Path(xdg_cache) / "go-docs-mcp"
    return Path.home() / ".cache" / "go-docs-mcp"


class Settings(BaseSettings):
    """Go Docs MCP Server configuration.

    Environment variables:
    - GO_VERSION: Go release to serve docs for (default: 1.21.0, "go1.21.0" also accepted)
    - UPDATE_POLICY: "manual" | "daily" | "startup" (default: manual)
    - CACHE_DIR: Cache root directory (default: ~/.cache/go-docs-mcp)
    - HTTP_TIMEOUT: Timeout in seconds for remote fetches (default: 30)
    - VIEW_PORT: Port for the `view` command (default: 8080)
    - LOG_LEVEL: Loguru level (default: INFO)
    """

    go_version: str = "1.21.0"
    update_policy: UpdatePolicy = UpdatePolicy.MANUAL

    # Cache
    cache_dir: str = ""  # Default: ~/.cache/go-docs-mcp

    # Remote fetches (seconds)
    http_timeout: float = 30.0

    # Viewer
    view_port: int = 8080

    # Logging
    log_level: str = "INFO"

    model_config = {"env_prefix": "", "case_sensitive": False}

    def get_cache_root(self) -> Path:
        """Get cache root directory.

        Uses CACHE_DIR if set, otherwise the per-user cache directory.
        """
        if self.cache_dir:
            return Path(self.cache_dir).expanduser()
        return _default_cache_dir()


settings = Settings()
