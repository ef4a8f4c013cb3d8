"""File metadata plugin."""

from .algo.file_info import get_file_info
from .schema import FileInfo

__all__ = ["FileInfo", "get_file_info"]
