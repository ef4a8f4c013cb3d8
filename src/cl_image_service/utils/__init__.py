"""Utility helpers - media type detection and profiling."""

from .media_types import ImageFormat, MediaType, detect_mime
from .profiling import timed

__all__ = ["ImageFormat", "MediaType", "detect_mime", "timed"]
