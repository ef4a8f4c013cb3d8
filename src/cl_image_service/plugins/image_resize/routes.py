"""Image resize route factory."""

from collections.abc import Iterator
from typing import Annotated, BinaryIO

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import StreamingResponse
from loguru import logger

from ...common.errors import ImageServiceError
from ...common.http import raw_request_path
from ...common.schemas import ScaleMode
from ...image_service import ImageService

PREFIX = "/images"
_CHUNK_SIZE = 1024 * 1024  # 1 MB


def iter_stream(stream: BinaryIO) -> Iterator[bytes]:
    """Yield ``stream`` in chunks and close it when exhausted."""
    try:
        for chunk in iter(lambda: stream.read(_CHUNK_SIZE), b""):
            yield chunk
    finally:
        stream.close()


def create_router(service: ImageService) -> APIRouter:
    """Create router with injected service.

    Args:
        service: ImageService holding the configuration

    Returns:
        Configured APIRouter with the image endpoint
    """
    router = APIRouter()

    @router.get(PREFIX + "/{request_path:path}")
    def get_image(
        request: Request,
        request_path: str,
        s: Annotated[int, Query(ge=0, description="Target size; 0 returns the original")] = 0,
        m: Annotated[str | None, Query(description='"1" selects min mode')] = None,
    ) -> StreamingResponse:
        """Return the original image, or a cached derivative when ``s`` is given."""
        try:
            response = service.process_request(
                raw_request_path(request),
                size=s,
                mode=ScaleMode.from_flag(m == "1"),
            )
        except ImageServiceError as e:
            logger.warning(f"Image request failed for {request_path!r}: [{e.kind}] {e.message}")
            raise HTTPException(status_code=404, detail="Not Found") from e

        return StreamingResponse(
            iter_stream(response.body_stream),
            status_code=response.status,
            headers=response.headers,
            media_type=response.headers["Content-Type"],
        )

    _ = get_image
    return router
