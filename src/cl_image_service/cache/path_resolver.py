from __future__ import annotations

import os
import re
from collections.abc import Sequence
from pathlib import Path
from urllib.parse import unquote

from ..common.errors import PathTraversal


class PathResolver:
    """
    Turn request paths into filesystem paths inside a document root.

    The returned path is guaranteed to lie within the canonical document root.
    Existence of the target is the caller's concern.
    """

    def __init__(
        self,
        document_root: str | os.PathLike[str],
        uri_rewrites: Sequence[tuple[str, str]] = (),
        uri_appends: Sequence[str] = (),
    ):
        self._document_root: Path = Path(document_root).resolve()
        self._rewrites: list[tuple[re.Pattern[str], str]] = [
            (re.compile(pattern), replacement) for pattern, replacement in uri_rewrites
        ]
        self._appends: list[str] = list(uri_appends)

    @property
    def document_root(self) -> Path:
        return self._document_root

    # ------------------------------------------------------------------
    # Request path normalization
    # ------------------------------------------------------------------

    @staticmethod
    def strip_query(uri: str) -> str:
        return uri.split("?", 1)[0]

    def apply_uri_transformations(self, uri: str) -> str:
        for pattern, replacement in self._rewrites:
            uri = pattern.sub(replacement, uri)
        for suffix in self._appends:
            uri += suffix
        return uri

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self, request_path: str) -> Path:
        """
        Resolve a request path to an absolute path inside the document root.

        Raises:
            PathTraversal: If the resolved path escapes the document root.
        """
        uri = self.apply_uri_transformations(self.strip_query(request_path))

        clean = "/" + unquote(uri).lstrip("/")
        clean = clean.replace("\0", "")

        literal = f"{self._document_root}{clean}"
        try:
            candidate = Path(literal).resolve(strict=True)
        except (OSError, RuntimeError):
            # Target does not exist yet: normalize lexically instead
            candidate = Path(os.path.normpath(literal))

        if candidate != self._document_root and self._document_root not in candidate.parents:
            raise PathTraversal(request_path)

        return candidate

    def relative_dir(self, path: Path) -> Path:
        """Directory of ``path`` relative to the document root."""
        return path.parent.relative_to(self._document_root)
