"""Data types shared by the cache, the acquisition pipelines, and the server."""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

# First two bytes of any gzip stream
_GZIP_MAGIC = b"\x1f\x8b"

ARCHIVE = "archive"
SYNTHETIC_FALLBACK = "synthetic-fallback"


class UpdatePolicy(str, Enum):
    """When cached builtin metadata should be refreshed."""

    MANUAL = "manual"
    DAILY = "daily"
    STARTUP = "startup"


class BuiltinFunction(BaseModel):
    """A Go builtin function and its documentation."""

    model_config = ConfigDict(frozen=True)

    name: str
    signature: str
    documentation: str


class StdLibItem(BaseModel):
    """A standard library package or package member."""

    model_config = ConfigDict(frozen=True)

    name: str
    kind: Literal["package", "function", "type"]
    package: str
    signature: str = ""
    description: str


class FreshnessMarker(BaseModel):
    """Contents of ``metadata.json`` in a version partition."""

    model_config = ConfigDict(populate_by_name=True)

    last_update: float = Field(alias="lastUpdate")  # epoch milliseconds
    version: str = ""


class FallbackDocument(BaseModel):
    """Stand-in for a source archive when no mirror could provide one."""

    model_config = ConfigDict(populate_by_name=True)

    kind: Literal["synthetic-fallback"] = SYNTHETIC_FALLBACK
    version: str
    generated_at: float = Field(alias="generatedAt")  # epoch milliseconds
    builtin_functions: list[BuiltinFunction] = Field(alias="builtinFunctions")

    def to_bytes(self) -> bytes:
        return self.model_dump_json(by_alias=True, indent=2).encode()


@dataclass(frozen=True)
class SourceArchive:
    """Source archive blob for one version, tagged with where it came from.

    ``kind`` is ``"archive"`` for a genuine download and
    ``"synthetic-fallback"`` for a generated stand-in.
    """

    kind: str
    data: bytes

    @property
    def is_fallback(self) -> bool:
        return self.kind == SYNTHETIC_FALLBACK

    @classmethod
    def from_bytes(cls, data: bytes) -> "SourceArchive":
        """Recover the tagged variant from stored bytes."""
        if data.startswith(_GZIP_MAGIC):
            return cls(kind=ARCHIVE, data=data)
        try:
            FallbackDocument.model_validate_json(data)
        except ValidationError:
            # Not ours; an uncompressed or unusual archive format
            return cls(kind=ARCHIVE, data=data)
        return cls(kind=SYNTHETIC_FALLBACK, data=data)

    def fallback_document(self) -> FallbackDocument | None:
        """Parsed fallback document, or None for a genuine archive."""
        if not self.is_fallback:
            return None
        return FallbackDocument.model_validate_json(self.data)
