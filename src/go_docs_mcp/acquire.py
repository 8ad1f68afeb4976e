"""Fetch-or-reuse pipelines for the two cached artifact kinds.

Metadata (builtin function descriptors) follows the configured update
policy and surfaces failures to the caller. The source archive is fetched
once per version from an ordered list of mirrors; when every mirror fails a
synthetic fallback document is stored instead, so ``get_archive`` always
returns usable bytes.
"""

import httpx
from loguru import logger
from pydantic import ValidationError

from go_docs_mcp.builtin_catalog import builtin_functions
from go_docs_mcp.errors import DocsError, DocsFetchError, VersionNotFoundError
from go_docs_mcp.freshness import now_ms, should_refresh
from go_docs_mcp.models import (
    ARCHIVE,
    SYNTHETIC_FALLBACK,
    BuiltinFunction,
    FallbackDocument,
    SourceArchive,
    UpdatePolicy,
)
from go_docs_mcp.store import CacheStore, normalize_version

# Builtin package documentation for a release; 404 means the release does not exist.
BUILTIN_DOCS_URL = "https://pkg.go.dev/builtin@go{version}"

# Source archive mirrors, tried in order. First success wins.
ARCHIVE_MIRRORS: tuple[str, ...] = (
    "https://go.dev/dl/go{version}.src.tar.gz",
    "https://dl.google.com/go/go{version}.src.tar.gz",
)

DEFAULT_TIMEOUT = 30.0


# ---------------------------------------------------------------------------
# Metadata pipeline
# ---------------------------------------------------------------------------


async def _fetch_builtin_functions(
    version: str, timeout: float
) -> list[BuiltinFunction]:
    """Confirm the release exists upstream and return its builtin descriptors."""
    url = BUILTIN_DOCS_URL.format(version=version)
    logger.debug(f"Fetching builtin docs from: {url}")
    try:
        async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
            resp = await client.get(url)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise DocsFetchError(f"Failed to download {url}: {e}") from e

    if resp.status_code == 404:
        raise VersionNotFoundError(version, url)
    if resp.status_code != 200:
        raise DocsFetchError(
            f"Failed to download {url}: HTTP {resp.status_code} {resp.reason_phrase}"
        )

    # The descriptor set is the same for every release; the request above
    # only validates the version.
    return builtin_functions()


async def ensure_docs(
    store: CacheStore,
    version: str,
    policy: UpdatePolicy = UpdatePolicy.MANUAL,
    *,
    timeout: float = DEFAULT_TIMEOUT,
) -> list[BuiltinFunction]:
    """Return builtin function descriptors for ``version``, refreshing per ``policy``.

    Serves the cached descriptor set when the policy does not demand a
    refresh. Otherwise acquires it, stores the descriptors, and writes the
    freshness marker last.

    Raises:
        VersionNotFoundError: The remote source has no docs for the version.
        DocsFetchError: Network or filesystem failure.
    """
    key = normalize_version(version)

    if not should_refresh(store, key, policy) and store.has_builtins(key):
        try:
            functions = store.read_builtins(key)
            logger.debug(f"Using cached builtin functions for Go {key}")
            return functions
        except (OSError, ValidationError) as e:
            logger.warning(
                f"Cached builtin functions for Go {key} unreadable, re-acquiring: {e}"
            )

    logger.info(f"Updating documentation for Go version: {key}")
    try:
        functions = await _fetch_builtin_functions(key, timeout)
    except VersionNotFoundError as e:
        logger.error(str(e))
        raise
    except DocsFetchError as e:
        logger.error(f"Error updating documentation for Go {key}: {e}")
        raise

    try:
        store.write_builtins(key, functions)
        store.write_marker(key, now_ms())
    except OSError as e:
        raise DocsFetchError(f"Failed to write docs cache for Go {key}: {e}") from e

    logger.info(
        f"Updated documentation for Go {key} ({len(functions)} builtin functions)"
    )
    return functions


# ---------------------------------------------------------------------------
# Archive pipeline
# ---------------------------------------------------------------------------


async def _download_from_mirrors(
    version: str, mirrors: tuple[str, ...], timeout: float
) -> bytes | None:
    """Return the body of the first mirror that answers 200, else None."""
    last_error: str | None = None
    async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
        for template in mirrors:
            url = template.format(version=version)
            logger.debug(f"Downloading sources from: {url}")
            try:
                resp = await client.get(url)
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                last_error = f"{url}: {e}"
                logger.debug(f"Mirror failed: {last_error}")
                continue
            if resp.status_code != 200:
                last_error = f"{url}: HTTP {resp.status_code}"
                logger.debug(f"Mirror failed: {last_error}")
                continue
            if not resp.content:
                last_error = f"{url}: empty body"
                logger.debug(f"Mirror failed: {last_error}")
                continue
            logger.info(f"Downloaded {len(resp.content)} bytes from {url}")
            return resp.content

    logger.warning(
        f"All {len(mirrors)} mirrors failed for Go {version} (last error: {last_error})"
    )
    return None


async def _synthesize_fallback(
    store: CacheStore, version: str, timeout: float
) -> SourceArchive:
    """Build a fallback document embedding the builtin descriptors."""
    try:
        functions = await ensure_docs(
            store, version, UpdatePolicy.MANUAL, timeout=timeout
        )
    except DocsError as e:
        logger.warning(f"Using bundled builtin catalog for Go {version} fallback: {e}")
        functions = builtin_functions()

    doc = FallbackDocument(
        version=version, generated_at=now_ms(), builtin_functions=functions
    )
    return SourceArchive(kind=SYNTHETIC_FALLBACK, data=doc.to_bytes())


async def get_archive(
    store: CacheStore,
    version: str,
    *,
    mirrors: tuple[str, ...] = ARCHIVE_MIRRORS,
    timeout: float = DEFAULT_TIMEOUT,
) -> SourceArchive:
    """Return the source archive for ``version``, downloading it once.

    A cached archive is always reused. When every mirror fails, a
    synthetic fallback is stored and returned; mirror failures never
    reach the caller.
    """
    key = normalize_version(version)

    try:
        cached = store.read_archive(key)
    except OSError as e:
        logger.warning(f"Cached sources for Go {key} unreadable: {e}")
        cached = None
    if cached:
        logger.debug(f"Using cached sources from {store.archive_path(key)}")
        return SourceArchive.from_bytes(cached)

    data = await _download_from_mirrors(key, mirrors, timeout)
    if data is not None:
        archive = SourceArchive(kind=ARCHIVE, data=data)
    else:
        archive = await _synthesize_fallback(store, key, timeout)
        logger.warning(f"Serving synthetic fallback sources for Go {key}")

    try:
        store.write_archive(key, archive.data)
    except OSError as e:
        logger.error(f"Failed to cache sources for Go {key}: {e}")
    return archive


async def load_docs(
    store: CacheStore,
    version: str,
    policy: UpdatePolicy = UpdatePolicy.MANUAL,
    *,
    timeout: float = DEFAULT_TIMEOUT,
) -> tuple[list[BuiltinFunction], SourceArchive]:
    """Acquire everything the server needs for ``version``.

    Metadata errors propagate; archive problems are absorbed.
    """
    functions = await ensure_docs(store, version, policy, timeout=timeout)
    archive = await get_archive(store, version, timeout=timeout)
    return functions, archive
