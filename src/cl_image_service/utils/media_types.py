from enum import StrEnum
from pathlib import Path

import magic

DEFAULT_MIME = "application/octet-stream"


class MediaType(StrEnum):
    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    FILE = "file"

    @classmethod
    def from_mime(cls, file_type: str) -> "MediaType":
        if file_type.startswith("image"):
            return MediaType.IMAGE
        elif file_type.startswith("video"):
            return MediaType.VIDEO
        elif file_type.startswith("audio"):
            return MediaType.AUDIO
        elif file_type.startswith("text"):
            return MediaType.TEXT
        else:
            return MediaType.FILE


class ImageFormat(StrEnum):
    """The raster formats the service can derive.

    Each variant carries its own MIME type, file extension, Pillow codec name,
    canvas policy and encoder settings.
    """

    JPEG = "jpeg"
    PNG = "png"
    GIF = "gif"

    @classmethod
    def from_mime(cls, mime: str) -> "ImageFormat | None":
        return _BY_MIME.get(mime)

    @property
    def mime(self) -> str:
        return f"image/{self.value}"

    @property
    def extension(self) -> str:
        return "jpg" if self is ImageFormat.JPEG else self.value

    @property
    def pil_format(self) -> str:
        return self.value.upper()

    @property
    def supports_transparency(self) -> bool:
        return self is not ImageFormat.JPEG

    @property
    def canvas_mode(self) -> str:
        return "RGBA" if self.supports_transparency else "RGB"

    @property
    def background(self) -> tuple[int, ...]:
        # Fully transparent for alpha formats, opaque white otherwise
        return (0, 0, 0, 0) if self.supports_transparency else (255, 255, 255)

    def save_options(self) -> dict[str, object]:
        if self is ImageFormat.JPEG:
            return {"quality": 90, "progressive": True}
        if self is ImageFormat.PNG:
            return {"compress_level": 6}
        return {}


_BY_MIME: dict[str, ImageFormat] = {fmt.mime: fmt for fmt in ImageFormat}


def detect_mime(path: str | Path) -> str:
    """Detect a file's MIME type from its content, not its extension."""
    mime = magic.Magic(mime=True)
    file_type = mime.from_file(str(path))
    if not file_type:
        file_type = DEFAULT_MIME
    return file_type
