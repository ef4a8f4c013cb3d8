"""Master module - dynamic route aggregator for FastAPI."""

from importlib.metadata import entry_points
from typing import Callable, cast

from fastapi import APIRouter, FastAPI

from .common.config import ServiceConfiguration, load_config
from .image_service import ImageService

ROUTES_GROUP = "cl_image_service.routes"

# Type alias for route factory functions loaded from entry points
RouteFactory = Callable[[ImageService], APIRouter]


def create_master_router(service: ImageService) -> APIRouter:
    """Dynamically aggregate all plugin routes from entry points.

    Discovers routes from [project.entry-points."cl_image_service.routes"]
    in pyproject.toml and creates a combined router.

    Args:
        service: ImageService shared by every plugin

    Returns:
        Combined APIRouter with all plugin routes

    Raises:
        RuntimeError: If a plugin fails to load (missing dependency, etc.)
    """
    master = APIRouter()

    for ep in entry_points(group=ROUTES_GROUP):
        try:
            create_router = cast(RouteFactory, ep.load())
            master.include_router(create_router(service))
        except Exception as e:
            # Plugin dependency missing = exception (fail fast)
            raise RuntimeError(f"Failed to load plugin '{ep.name}': {e}") from e

    return master


def get_available_plugins() -> list[str]:
    """Get list of available plugins.

    Returns:
        List of plugin names registered as entry points
    """
    return [ep.name for ep in entry_points(group=ROUTES_GROUP)]


def create_app(config: ServiceConfiguration | None = None) -> FastAPI:
    """Build a FastAPI app serving every registered plugin.

    Example:
        uvicorn --factory cl_image_service.master:create_app

    Args:
        config: Service configuration. Defaults to ``load_config()``.
    """
    service = ImageService(config if config is not None else load_config())
    app = FastAPI(title="cl_image_service")
    app.include_router(create_master_router(service))
    return app
