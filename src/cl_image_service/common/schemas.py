"""Pydantic schemas for requests, resolved sources and responses."""

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import BinaryIO, ClassVar

from pydantic import BaseModel, ConfigDict, Field


class ScaleMode(StrEnum):
    """Scaling mode.

    MAX: the longer side becomes the target size.
    MIN: the shorter side becomes the target size (pre-crop scaling).
    """

    MAX = "max"
    MIN = "min"

    @classmethod
    def from_flag(cls, min_mode: bool) -> "ScaleMode":
        return ScaleMode.MIN if min_mode else ScaleMode.MAX


class ImageRequest(BaseModel):
    """A single request for an original or derived image."""

    request_path: str = Field(..., description="Request path, possibly percent-encoded")
    size: int = Field(default=0, ge=0, description="Target size; 0 returns the original")
    mode: ScaleMode = Field(default=ScaleMode.MAX, description="Scaling mode")

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid", frozen=True)

    @property
    def wants_resize(self) -> bool:
        return self.size > 0


class ResolvedSource(BaseModel):
    """An existing, readable file proven to be inside the document root.

    Only valid for the request that produced it.
    """

    path: Path
    mtime_ns: int = Field(..., ge=0)
    size: int = Field(..., ge=0)

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid", frozen=True)

    @classmethod
    def from_path(cls, path: Path) -> "ResolvedSource":
        st = path.stat()
        return cls(path=path, mtime_ns=st.st_mtime_ns, size=st.st_size)


@dataclass
class ImageResponse:
    """Response handed back to the front door.

    The caller owns ``body_stream`` and must close it.
    """

    status: int
    headers: dict[str, str]
    body_stream: BinaryIO = field(repr=False)

    def close(self) -> None:
        self.body_stream.close()
