"""File metadata route factory."""

from fastapi import APIRouter, HTTPException, Request
from loguru import logger

from ...common.errors import ImageServiceError
from ...common.http import raw_request_path
from ...image_service import ImageService
from .algo.file_info import get_file_info
from .schema import FileInfo

PREFIX = "/fileinfo"


def create_router(service: ImageService) -> APIRouter:
    router = APIRouter()

    @router.get(PREFIX + "/{request_path:path}", response_model=FileInfo)
    def get_fileinfo(request: Request, request_path: str) -> FileInfo:
        """Report size, mtime, MIME type and (for images) geometry of a file."""
        try:
            source = service.resolve_source(raw_request_path(request))
        except ImageServiceError as e:
            logger.warning(f"File info request failed for {request_path!r}: [{e.kind}] {e.message}")
            raise HTTPException(status_code=404, detail="Not Found") from e

        return get_file_info(source.path)

    _ = get_fileinfo
    return router
