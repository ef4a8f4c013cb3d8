"""Pure image resize computation logic (single file)."""

import math
from io import BytesIO
from pathlib import Path

from PIL import Image

from ....common.errors import DegenerateGeometry, TransformFailed
from ....common.schemas import ScaleMode
from ....utils.media_types import ImageFormat
from ....utils.profiling import timed


def _round(value: float) -> int:
    # Half away from zero; dimensions are never negative
    return int(math.floor(value + 0.5))


def compute_dimensions(width: int, height: int, size: int, mode: ScaleMode) -> tuple[int, int]:
    """
    Destination size for a ``width`` x ``height`` source.

    MAX: the longer side becomes ``size``.
    MIN: the shorter side becomes ``size``; both sides end up >= ``size``.

    Raises:
        DegenerateGeometry: If either computed side is <= 0.
    """
    if width <= 0 or height <= 0:
        raise DegenerateGeometry(width, height)

    if mode is ScaleMode.MAX:
        if width >= height:
            dst_w, dst_h = size, _round(size * (height / width))
        else:
            dst_w, dst_h = _round(size * (width / height)), size
    else:
        if width >= height:
            dst_w, dst_h = _round(size * (width / height)), size
        else:
            dst_w, dst_h = size, _round(size * (height / width))

    if dst_w <= 0 or dst_h <= 0:
        raise DegenerateGeometry(dst_w, dst_h)

    return dst_w, dst_h


def _to_rgba(img: Image.Image) -> Image.Image:
    # 16-bit greyscale decodes as I;16* (or I); a plain convert clips at 255
    if img.mode == "I" or img.mode.startswith("I;16"):
        img = img.convert("I").point(lambda v: v * (1 / 256)).convert("L")
    return img.convert("RGBA")


@timed
def image_resize(
    *,
    input_path: str | Path,
    image_format: ImageFormat,
    size: int,
    mode: ScaleMode = ScaleMode.MAX,
) -> bytes:
    """
    Resize a single image and return it encoded in its own format.

    Framework-agnostic, single-responsibility function. Nothing is written
    to disk.

    Args:
        input_path: Path to input image
        image_format: Detected format of the input; also the output format
        size: Target size in pixels
        mode: Scaling mode

    Returns:
        Encoded image bytes

    Raises:
        DegenerateGeometry: If the computed destination has a zero side
        TransformFailed: If Pillow fails to decode, resample or encode
    """
    input_path = Path(input_path)

    try:
        with Image.open(input_path, formats=[image_format.pil_format]) as img:
            img.load()
            src_w, src_h = img.size
            dst_w, dst_h = compute_dimensions(src_w, src_h, size, mode)

            resized = _to_rgba(img).resize(
                (dst_w, dst_h),
                Image.Resampling.LANCZOS,
                box=(0, 0, src_w, src_h),
            )

        canvas = Image.new(image_format.canvas_mode, (dst_w, dst_h), image_format.background)
        if image_format.supports_transparency:
            # Copy pixels as-is so source alpha is kept
            canvas.paste(resized, (0, 0))
        else:
            canvas.paste(resized, (0, 0), mask=resized)

        buffer = BytesIO()
        canvas.save(buffer, format=image_format.pil_format, **image_format.save_options())
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise TransformFailed(f"Unable to resize {input_path}: {exc}") from exc

    return buffer.getvalue()


class ImageTransformer:
    """Default transformer used by ``ImageService``."""

    def resize(
        self,
        source_path: Path,
        image_format: ImageFormat,
        target_size: int,
        mode: ScaleMode,
    ) -> bytes:
        return image_resize(
            input_path=source_path,
            image_format=image_format,
            size=target_size,
            mode=mode,
        )
