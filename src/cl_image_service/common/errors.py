"""Error hierarchy for the image derivation core.

Every failure surfaces to the caller as a subclass of ``ImageServiceError``
carrying an ``ErrorKind``. Mapping kinds to HTTP status codes is left to the
front door.
"""

from enum import StrEnum


class ErrorKind(StrEnum):
    INVALID_CONFIGURATION = "InvalidConfiguration"
    PATH_TRAVERSAL = "PathTraversal"
    SOURCE_NOT_FOUND = "SourceNotFound"
    UNSUPPORTED_TYPE = "UnsupportedType"
    DEGENERATE_GEOMETRY = "DegenerateGeometry"
    TRANSFORM_FAILED = "TransformFailed"
    LOCK_UNAVAILABLE = "LockUnavailable"
    PUBLISH_FAILED = "PublishFailed"
    DIRECTORY_CREATE_FAILED = "DirectoryCreateFailed"


class ImageServiceError(Exception):
    """Base class for image service errors."""

    kind: ErrorKind

    def __init__(self, message: str):
        self.message: str = message
        super().__init__(message)


class InvalidConfiguration(ImageServiceError):
    kind = ErrorKind.INVALID_CONFIGURATION


class PathTraversal(ImageServiceError):
    kind = ErrorKind.PATH_TRAVERSAL

    def __init__(self, request_path: str):
        self.request_path: str = request_path
        super().__init__(f"Path traversal attempt or invalid path: {request_path!r}")


class SourceNotFound(ImageServiceError):
    kind = ErrorKind.SOURCE_NOT_FOUND

    def __init__(self, path: str):
        self.path: str = path
        super().__init__(f"Base image not found or unreadable: {path}")


class UnsupportedType(ImageServiceError):
    kind = ErrorKind.UNSUPPORTED_TYPE

    def __init__(self, mime: str):
        self.mime: str = mime
        super().__init__(f"Unsupported image type: {mime}")


class DegenerateGeometry(ImageServiceError):
    kind = ErrorKind.DEGENERATE_GEOMETRY

    def __init__(self, width: int, height: int):
        self.width: int = width
        self.height: int = height
        super().__init__(f"Computed zero-sized destination: {width}x{height}")


class TransformFailed(ImageServiceError):
    kind = ErrorKind.TRANSFORM_FAILED


class LockUnavailable(ImageServiceError):
    kind = ErrorKind.LOCK_UNAVAILABLE


class PublishFailed(ImageServiceError):
    kind = ErrorKind.PUBLISH_FAILED


class DirectoryCreateFailed(ImageServiceError):
    kind = ErrorKind.DIRECTORY_CREATE_FAILED

    def __init__(self, directory: str):
        self.directory: str = directory
        super().__init__(f"Unable to create cache directory: {directory}")
