"""File metadata schema."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class FileInfo(BaseModel):
    """Properties of a file inside the document root.

    Image fields are only populated when the file is a decodable raster image.
    """

    modified_time: int = Field(..., description="Modification time (epoch seconds)")
    size: int = Field(..., ge=0, description="File size in bytes")
    extension: str = Field(default="", description="File name extension without the dot")
    mime: str = Field(..., description="MIME type detected from content")
    media_type: str = Field(..., description="Coarse media family (image, video, ...)")
    is_image: bool = False

    image_width: int | None = None
    image_height: int | None = None
    image_channels: int | None = Field(default=None, description="Number of bands")
    image_bits: int | None = Field(default=None, description="Bits per sample")
    image_mime: str | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")
