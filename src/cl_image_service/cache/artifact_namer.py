"""Deterministic cache file names for derived images."""

import hashlib
import json
from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from ..common.schemas import ResolvedSource, ScaleMode
from ..utils.media_types import ImageFormat


class CacheKey(BaseModel):
    """Fingerprint of one derivation of one version of a source file.

    A changed source (new mtime or byte length) yields a new key, so stale
    derivatives are never looked up again.
    """

    source_path: str
    mtime_ns: int = Field(..., ge=0)
    source_size: int = Field(..., ge=0)
    target_size: int = Field(..., gt=0)
    mode: ScaleMode

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid", frozen=True)

    @classmethod
    def for_source(cls, source: ResolvedSource, target_size: int, mode: ScaleMode) -> "CacheKey":
        return cls(
            source_path=str(source.path),
            mtime_ns=source.mtime_ns,
            source_size=source.size,
            target_size=target_size,
            mode=mode,
        )

    def canonical(self) -> bytes:
        # JSON array: field order is fixed and strings are escaped
        fields = [
            self.source_path,
            self.mtime_ns,
            self.source_size,
            self.target_size,
            self.mode.value,
        ]
        return json.dumps(fields, separators=(",", ":")).encode("utf-8")

    @property
    def digest(self) -> str:
        return hashlib.sha256(self.canonical()).hexdigest()

    def filename(self, image_format: ImageFormat) -> str:
        return f"{self.digest}.{image_format.extension}"


def artifact_path(
    cache_dir: Path,
    source: ResolvedSource,
    target_size: int,
    mode: ScaleMode,
    image_format: ImageFormat,
) -> Path:
    """Final path of the derived artifact inside ``cache_dir``."""
    key = CacheKey.for_source(source, target_size, mode)
    return cache_dir / key.filename(image_format)
