"""Go Docs MCP Server entry point."""

import asyncio
import sys
from dataclasses import dataclass

from go_docs_mcp.models import UpdatePolicy

_HELP = """Usage: go-docs-mcp [options] [command]

Commands:
  update                       Update documentation without starting the MCP server
  view                         Start local web server to view documentation

Options:
  --version <version>          Go version to use (default: 1.21.0)
                               Examples: 1.21.0, go1.22.5
  --update-policy <policy>     Update policy (default: manual)
                               Options: manual, daily, startup
  -h, --help                   Show this help message

Examples:
  go-docs-mcp                               # Start MCP server for the default version
  go-docs-mcp --version 1.22.0              # Start with a specific version
  go-docs-mcp --update-policy daily         # Refresh metadata at most once a day
  go-docs-mcp update --version 1.22.0       # Update docs for a specific version
  go-docs-mcp view                          # View documentation in the browser"""


@dataclass
class CLIOptions:
    version: str | None = None
    update_policy: UpdatePolicy | None = None
    command: str | None = None


def _parse_args(args: list[str]) -> CLIOptions:
    """Parse command line arguments. Exits on --help or an invalid policy."""
    options = CLIOptions()
    i = 0
    while i < len(args):
        arg = args[i]
        if arg in ("update", "view"):
            options.command = arg
        elif arg == "--version" and i + 1 < len(args):
            i += 1
            options.version = args[i]
        elif arg == "--update-policy" and i + 1 < len(args):
            i += 1
            try:
                options.update_policy = UpdatePolicy(args[i])
            except ValueError:
                print(
                    f"Invalid update policy: {args[i]}. "
                    "Must be one of: manual, daily, startup",
                    file=sys.stderr,
                )
                sys.exit(1)
        elif arg in ("--help", "-h"):
            print(_HELP)
            sys.exit(0)
        i += 1
    return options


def _update(version: str) -> None:
    """Force a metadata refresh for ``version`` and exit."""
    from go_docs_mcp.acquire import ensure_docs
    from go_docs_mcp.config import settings
    from go_docs_mcp.errors import DocsError
    from go_docs_mcp.store import CacheStore

    store = CacheStore(settings.get_cache_root())
    try:
        functions = asyncio.run(
            ensure_docs(
                store, version, UpdatePolicy.STARTUP, timeout=settings.http_timeout
            )
        )
    except DocsError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    print(
        f"Successfully updated documentation for Go version: {version} "
        f"({len(functions)} builtin functions)"
    )
    sys.exit(0)


def _configure_logging(level: str) -> None:
    from loguru import logger

    logger.remove()
    logger.add(sys.stderr, level=level)


def _cli() -> None:
    """CLI dispatcher: server (default), update, or view subcommand."""
    from loguru import logger

    from go_docs_mcp.config import settings

    _configure_logging(settings.log_level)

    options = _parse_args(sys.argv[1:])
    version = options.version or settings.go_version

    if options.command == "update":
        _update(version)
    elif options.command == "view":
        from go_docs_mcp.viewer import start_view_server

        start_view_server(version, settings.view_port)
    else:
        from go_docs_mcp.errors import DocsError
        from go_docs_mcp.server import main

        try:
            main(version, options.update_policy)
        except DocsError as e:
            logger.error(f"Error: {e}")
            sys.exit(1)


if __name__ == "__main__":
    _cli()
