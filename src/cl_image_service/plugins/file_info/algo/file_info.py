"""Pure file metadata extraction (single file)."""

from pathlib import Path

from PIL import Image, UnidentifiedImageError

from ....utils.media_types import MediaType, detect_mime
from ..schema import FileInfo

# Bits per sample for the Pillow modes we are likely to meet
_MODE_BITS: dict[str, int] = {
    "1": 1,
    "L": 8,
    "LA": 8,
    "P": 8,
    "PA": 8,
    "RGB": 8,
    "RGBA": 8,
    "RGBX": 8,
    "CMYK": 8,
    "YCbCr": 8,
    "LAB": 8,
    "HSV": 8,
    "I;16": 16,
    "I;16B": 16,
    "I;16L": 16,
    "I": 32,
    "F": 32,
}


def get_file_info(path: str | Path) -> FileInfo:
    """
    Describe a single file.

    Args:
        path: Path to an existing file

    Returns:
        FileInfo with image fields filled in when Pillow can identify the file

    Raises:
        FileNotFoundError: If the file does not exist
    """
    path = Path(path)
    st = path.stat()
    mime = detect_mime(path)

    info = FileInfo(
        modified_time=int(st.st_mtime),
        size=st.st_size,
        extension=path.suffix.lstrip("."),
        mime=mime,
        media_type=MediaType.from_mime(mime).value,
    )

    try:
        with Image.open(path) as img:
            info.is_image = True
            info.image_width, info.image_height = img.size
            info.image_channels = len(img.getbands())
            info.image_bits = _MODE_BITS.get(img.mode)
            info.image_mime = img.get_format_mimetype()
    except (UnidentifiedImageError, Image.DecompressionBombError):
        pass

    return info
