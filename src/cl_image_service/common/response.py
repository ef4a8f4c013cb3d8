"""Cacheable response metadata for original and derived files."""

import hashlib
import os
from email.utils import formatdate
from pathlib import Path
from typing import Final

from ..utils.media_types import detect_mime
from .errors import SourceNotFound
from .schemas import ImageResponse

CACHE_CONTROL: Final[str] = "public, max-age=31536000, immutable"


def entity_tag(mtime: int, size: int) -> str:
    return '"' + hashlib.md5(f"{mtime}{size}".encode()).hexdigest() + '"'


def build_response_from_file(path: Path) -> ImageResponse:
    """
    Build a 200 response for an existing, readable file.

    Metadata is taken from the opened handle so headers and body agree.
    The returned stream is positioned at the start of the file; the caller
    owns closing it.

    Raises:
        SourceNotFound: If the file cannot be opened for reading.
    """
    mime = detect_mime(path)

    try:
        body = open(path, "rb")
    except OSError as exc:
        raise SourceNotFound(str(path)) from exc

    st = os.fstat(body.fileno())
    mtime = int(st.st_mtime)

    headers = {
        "Content-Type": mime,
        "Content-Length": str(st.st_size),
        "Last-Modified": formatdate(mtime, usegmt=True),
        "ETag": entity_tag(mtime, st.st_size),
        "Cache-Control": CACHE_CONTROL,
    }

    return ImageResponse(status=200, headers=headers, body_stream=body)
