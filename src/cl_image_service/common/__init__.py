"""Common module - configuration, errors, schemas and response building."""

from .config import ServiceConfiguration, load_config
from .errors import ErrorKind, ImageServiceError
from .response import build_response_from_file
from .schemas import ImageRequest, ImageResponse, ResolvedSource, ScaleMode

__all__ = [
    "ErrorKind",
    "ImageRequest",
    "ImageResponse",
    "ImageServiceError",
    "ResolvedSource",
    "ScaleMode",
    "ServiceConfiguration",
    "build_response_from_file",
    "load_config",
]
