"""Service configuration.

The configuration is an explicit value handed to ``ImageService`` at
construction; no core component looks anything up from the host environment.
``load_config()`` is the only place that reads environment variables.
"""

import json
import os
import re
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import InvalidConfiguration

DEFAULT_CACHE_DIRNAME = "cache"
ENV_PREFIX = "IMAGE_SERVICE_"


class ServiceConfiguration(BaseModel):
    """Configuration consumed by the image service.

    Attributes:
        document_root: Sandbox boundary; every resolved source lies inside it.
        cache_root: Absolute path, or path relative to ``document_root``.
        dir_mode: Mode applied to freshly created cache directories.
        file_mode: Mode applied to published artifacts (None = leave as created).
        owner: Optional owner applied to freshly created cache directories.
        group: Optional group applied to freshly created cache directories.
        uri_rewrites: Ordered (pattern, replacement) regex substitutions.
        uri_appends: Ordered strings appended to the request path.
        lock_timeout: Seconds to wait for a generation lock (None = block).
    """

    document_root: Path
    cache_root: Path = Field(default=Path(DEFAULT_CACHE_DIRNAME))
    dir_mode: int = Field(default=0o777, ge=0, le=0o7777)
    file_mode: int | None = Field(default=0o644, ge=0, le=0o7777)
    owner: str | None = None
    group: str | None = None
    uri_rewrites: list[tuple[str, str]] = Field(default_factory=list)
    uri_appends: list[str] = Field(default_factory=list)
    lock_timeout: float | None = Field(default=None, ge=0)

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid", validate_assignment=True)

    @field_validator("document_root")
    @classmethod
    def validate_document_root(cls, v: Path) -> Path:
        if str(v) == "" or not v.is_dir():
            raise InvalidConfiguration(f"Invalid document root: {v}")
        return v.resolve()

    @field_validator("uri_rewrites")
    @classmethod
    def validate_uri_rewrites(cls, v: list[tuple[str, str]]) -> list[tuple[str, str]]:
        for pattern, _ in v:
            try:
                _ = re.compile(pattern)
            except re.error as exc:
                raise InvalidConfiguration(f"Invalid URI rewrite pattern {pattern!r}: {exc}") from exc
        return v

    @property
    def cache_dir(self) -> Path:
        """Absolute cache root."""
        if self.cache_root.is_absolute():
            return self.cache_root
        return self.document_root / self.cache_root

    # ------------------------------------------------------------------
    # Setters
    # ------------------------------------------------------------------

    def set_cache_root(self, cache_root: str | Path) -> None:
        """Set cache root; accepts absolute or path relative to document root."""
        raw = str(cache_root)
        if raw == "":
            self.cache_root = Path(DEFAULT_CACHE_DIRNAME)
        elif Path(raw).is_absolute():
            self.cache_root = Path(raw)
        else:
            self.cache_root = Path(raw.lstrip("/"))

    def set_permissions(
        self,
        dir_mode: int | None = None,
        file_mode: int | None = None,
        owner: str | None = None,
        group: str | None = None,
    ) -> None:
        self.dir_mode = dir_mode if dir_mode is not None else self.dir_mode
        self.file_mode = file_mode if file_mode is not None else self.file_mode
        self.owner = owner
        self.group = group

    def set_uri_rewrites(self, rewrites: Mapping[str, str] | Sequence[tuple[str, str]]) -> None:
        if isinstance(rewrites, Mapping):
            self.uri_rewrites = list(rewrites.items())
        else:
            self.uri_rewrites = list(rewrites)

    def set_uri_appends(self, appends: Sequence[str]) -> None:
        self.uri_appends = list(appends)


def _octal(value: str | None) -> int | None:
    if value is None or value == "":
        return None
    return int(value, 8)


def load_config(environ: Mapping[str, str] | None = None) -> ServiceConfiguration:
    """Build a configuration from ``IMAGE_SERVICE_*`` environment variables."""
    env = os.environ if environ is None else environ

    def get(name: str) -> str | None:
        return env.get(ENV_PREFIX + name)

    config = ServiceConfiguration(document_root=Path(get("DOCUMENT_ROOT") or os.getcwd()))
    config.set_cache_root(get("CACHE_ROOT") or "")
    config.set_permissions(
        dir_mode=_octal(get("DIR_MODE")),
        file_mode=_octal(get("FILE_MODE")),
        owner=get("OWNER") or None,
        group=get("GROUP") or None,
    )

    rewrites = get("URI_REWRITES")
    if rewrites:
        config.set_uri_rewrites([(str(p), str(r)) for p, r in json.loads(rewrites)])

    appends = get("URI_APPENDS")
    if appends:
        config.set_uri_appends([str(a) for a in json.loads(appends)])

    lock_timeout = get("LOCK_TIMEOUT")
    if lock_timeout:
        config.lock_timeout = float(lock_timeout)

    return config
