"""Per-version cache partitions on local disk.

Layout under the cache root::

    <root>/<version>/metadata.json            freshness marker
    <root>/<version>/builtin-functions.json   builtin function descriptors
    <root>/<version>/sources.tar.gz           source archive or synthetic fallback

Every write goes to a temp file in the partition directory and is renamed
into place, so a reader never sees a partially written file.
"""

import json
import os
import tempfile
from pathlib import Path

from loguru import logger
from pydantic import TypeAdapter

from go_docs_mcp.errors import InvalidVersionError
from go_docs_mcp.models import BuiltinFunction, FreshnessMarker

METADATA_FILE = "metadata.json"
BUILTINS_FILE = "builtin-functions.json"
ARCHIVE_FILE = "sources.tar.gz"

_BUILTINS_ADAPTER = TypeAdapter(list[BuiltinFunction])


def normalize_version(version: str) -> str:
    """Canonical cache key for a Go release: ``go1.21.0`` -> ``1.21.0``."""
    key = version.strip()
    if key.startswith("go"):
        key = key[2:]
    if (
        not key
        or not key.isprintable()
        or "/" in key
        or "\\" in key
        or key in (".", "..")
    ):
        raise InvalidVersionError(f"Invalid Go version: {version!r}")
    return key


def _atomic_write(path: Path, data: bytes) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file lives in the same directory as *path* so that
    ``os.replace`` is an atomic rename. On failure the temp file is removed.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: str | None = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="wb",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


class CacheStore:
    """Maps version identifiers to partition directories under ``root``."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def partition(self, version: str) -> Path:
        return self.root / normalize_version(version)

    def metadata_path(self, version: str) -> Path:
        return self.partition(version) / METADATA_FILE

    def builtins_path(self, version: str) -> Path:
        return self.partition(version) / BUILTINS_FILE

    def archive_path(self, version: str) -> Path:
        return self.partition(version) / ARCHIVE_FILE

    # --- Freshness marker ---

    def read_marker(self, version: str) -> FreshnessMarker | None:
        """Return the freshness marker, or None if it has never been written.

        Raises ``OSError`` or ``pydantic.ValidationError`` if the marker
        exists but cannot be read or parsed.
        """
        path = self.metadata_path(version)
        if not path.exists():
            return None
        return FreshnessMarker.model_validate_json(path.read_bytes())

    def write_marker(self, version: str, last_update_ms: float) -> None:
        marker = FreshnessMarker(
            last_update=last_update_ms, version=normalize_version(version)
        )
        _atomic_write(
            self.metadata_path(version),
            marker.model_dump_json(by_alias=True, indent=2).encode(),
        )
        logger.debug(f"Wrote freshness marker for {marker.version}")

    # --- Builtin function descriptors ---

    def has_builtins(self, version: str) -> bool:
        return self.builtins_path(version).exists()

    def read_builtins(self, version: str) -> list[BuiltinFunction]:
        """Load cached descriptors. Raises on a missing or corrupt file."""
        return _BUILTINS_ADAPTER.validate_json(self.builtins_path(version).read_bytes())

    def write_builtins(self, version: str, functions: list[BuiltinFunction]) -> None:
        payload = json.dumps(
            [fn.model_dump() for fn in functions], indent=2, ensure_ascii=False
        )
        _atomic_write(self.builtins_path(version), payload.encode())
        logger.debug(
            f"Wrote {len(functions)} builtin functions to {self.builtins_path(version)}"
        )

    # --- Source archive ---

    def read_archive(self, version: str) -> bytes | None:
        """Return cached archive bytes, or None if absent or empty."""
        path = self.archive_path(version)
        if not path.exists():
            return None
        data = path.read_bytes()
        return data or None

    def write_archive(self, version: str, data: bytes) -> None:
        _atomic_write(self.archive_path(version), data)
        logger.debug(f"Wrote {len(data)} bytes to {self.archive_path(version)}")

    def cached_versions(self) -> list[str]:
        """Versions that have a partition directory under the root."""
        if not self.root.is_dir():
            return []
        return sorted(p.name for p in self.root.iterdir() if p.is_dir())
