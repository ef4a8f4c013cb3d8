"""cl_image_service - On-demand image resizing with a concurrency-safe disk cache."""

from .cache.artifact_namer import CacheKey
from .common.config import ServiceConfiguration, load_config
from .common.errors import (
    DegenerateGeometry,
    DirectoryCreateFailed,
    ErrorKind,
    ImageServiceError,
    InvalidConfiguration,
    LockUnavailable,
    PathTraversal,
    PublishFailed,
    SourceNotFound,
    TransformFailed,
    UnsupportedType,
)
from .common.schemas import ImageRequest, ImageResponse, ResolvedSource, ScaleMode
from .image_service import ImageService
from .master import create_app, create_master_router
from .utils.media_types import ImageFormat

__version__ = "0.1.0"

__all__ = [
    "CacheKey",
    "DegenerateGeometry",
    "DirectoryCreateFailed",
    "ErrorKind",
    "ImageFormat",
    "ImageRequest",
    "ImageResponse",
    "ImageService",
    "ImageServiceError",
    "InvalidConfiguration",
    "LockUnavailable",
    "PathTraversal",
    "PublishFailed",
    "ResolvedSource",
    "ScaleMode",
    "ServiceConfiguration",
    "SourceNotFound",
    "TransformFailed",
    "UnsupportedType",
    "__version__",
    "create_app",
    "create_master_router",
    "load_config",
]
