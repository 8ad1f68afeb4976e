"""Exceptions raised by the documentation cache.

Metadata acquisition failures are split in two so callers can tell a
mistyped version (``VersionNotFoundError``) apart from an environment
problem (``DocsFetchError``). The archive pipeline never raises either:
it degrades to a synthetic fallback instead.
"""


class DocsError(Exception):
    """Base class for documentation cache errors."""


class InvalidVersionError(DocsError, ValueError):
    """Version identifier is empty or otherwise unusable as a cache key."""


class VersionNotFoundError(DocsError):
    """The remote source has no documentation for the requested version."""

    def __init__(self, version: str, url: str):
        self.version = version
        self.url = url
        super().__init__(
            f"Go version '{version}' not found at {url}. "
            "Please check the version number."
        )


class DocsFetchError(DocsError):
    """Network, filesystem, or parse failure while acquiring documentation."""
