"""Test configuration and fixtures for cl_image_service.

This module provides:
- Pytest configuration (markers)
- Function-scoped fixtures (document root, cache root, synthetic images)
- Service fixtures (configuration, ImageService, counting transformer)
- Integration fixtures (FastAPI TestClient with the plugin routers)
"""

import threading
import time
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from PIL import Image, ImageDraw

from cl_image_service.common.config import ServiceConfiguration
from cl_image_service.common.schemas import ScaleMode
from cl_image_service.image_service import ImageService
from cl_image_service.plugins.image_resize.algo.image_resize import ImageTransformer
from cl_image_service.utils.media_types import ImageFormat

# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: full request tests through the FastAPI routes",
    )


# ============================================================================
# Filesystem Fixtures
# ============================================================================


@pytest.fixture
def document_root(tmp_path: Path) -> Path:
    """Provide an empty document root (the sandbox boundary)."""
    root = tmp_path / "www"
    root.mkdir()
    return root


@pytest.fixture
def cache_root(tmp_path: Path) -> Path:
    """Provide a cache root outside the document root (not created yet)."""
    return tmp_path / "cache"


@pytest.fixture
def landscape_jpeg(document_root: Path) -> Path:
    """Generate an 800x400 JPEG with a grid pattern."""
    output_path = document_root / "photos" / "landscape.jpg"
    output_path.parent.mkdir(parents=True, exist_ok=True)

    img = Image.new("RGB", (800, 400), color=(73, 109, 137))
    draw = ImageDraw.Draw(img)
    for i in range(0, 800, 50):
        draw.line([(i, 0), (i, 400)], fill=(255, 255, 255), width=2)
    for i in range(0, 400, 50):
        draw.line([(0, i), (800, i)], fill=(255, 255, 255), width=2)
    draw.ellipse([300, 100, 500, 300], fill=(200, 100, 100))

    img.save(output_path, "JPEG", quality=85)
    return output_path


@pytest.fixture
def portrait_png(document_root: Path) -> Path:
    """Generate a 300x600 RGBA PNG: left half transparent, right half opaque red."""
    output_path = document_root / "photos" / "portrait.png"
    output_path.parent.mkdir(parents=True, exist_ok=True)

    img = Image.new("RGBA", (300, 600), color=(0, 0, 0, 0))
    draw = ImageDraw.Draw(img)
    draw.rectangle([150, 0, 299, 599], fill=(255, 0, 0, 255))

    img.save(output_path, "PNG")
    return output_path


@pytest.fixture
def sample_gif(document_root: Path) -> Path:
    """Generate a 120x80 palette GIF."""
    output_path = document_root / "icons" / "badge.gif"
    output_path.parent.mkdir(parents=True, exist_ok=True)

    img = Image.new("RGB", (120, 80), color=(0, 128, 255))
    draw = ImageDraw.Draw(img)
    draw.rectangle([20, 20, 100, 60], fill=(255, 255, 0))

    img.convert("P", palette=Image.Palette.ADAPTIVE).save(output_path, "GIF")
    return output_path


@pytest.fixture
def text_file(document_root: Path) -> Path:
    """Provide a plain text file inside the document root."""
    output_path = document_root / "docs" / "readme.txt"
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text("This is not an image.\n" * 20, encoding="utf-8")
    return output_path


# ============================================================================
# Service Fixtures
# ============================================================================


class CountingTransformer:
    """Transformer that counts invocations and can be slowed down."""

    def __init__(self, delay: float = 0.0) -> None:
        self.delay: float = delay
        self.calls: int = 0
        self._lock: threading.Lock = threading.Lock()
        self._inner: ImageTransformer = ImageTransformer()

    def resize(
        self,
        source_path: Path,
        image_format: ImageFormat,
        target_size: int,
        mode: ScaleMode,
    ) -> bytes:
        with self._lock:
            self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        return self._inner.resize(source_path, image_format, target_size, mode)


@pytest.fixture
def config(document_root: Path, cache_root: Path) -> ServiceConfiguration:
    """Provide a configuration with the cache outside the document root."""
    return ServiceConfiguration(document_root=document_root, cache_root=cache_root)


@pytest.fixture
def counting_transformer() -> CountingTransformer:
    return CountingTransformer()


@pytest.fixture
def service(config: ServiceConfiguration, counting_transformer: CountingTransformer) -> ImageService:
    """Provide an ImageService wired to the counting transformer."""
    return ImageService(config, transformer=counting_transformer)


# ============================================================================
# Integration Fixtures
# ============================================================================


@pytest.fixture
def api_client(service: ImageService) -> TestClient:
    """Provide a TestClient over both plugin routers."""
    from cl_image_service.plugins.file_info.routes import create_router as create_file_info_router
    from cl_image_service.plugins.image_resize.routes import create_router as create_image_router

    app = FastAPI()
    app.include_router(create_image_router(service))
    app.include_router(create_file_info_router(service))
    return TestClient(app)
