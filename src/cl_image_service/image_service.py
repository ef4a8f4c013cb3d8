"""ImageService - resolves, derives, caches and describes images."""

import os
from pathlib import Path
from typing import Protocol

from .cache.artifact_namer import artifact_path
from .cache.concurrency_guard import ConcurrencyGuard, artifact_ready
from .cache.directories import ensure_directory_exists
from .cache.path_resolver import PathResolver
from .cache.publisher import AtomicPublisher
from .common.config import ServiceConfiguration
from .common.errors import PublishFailed, SourceNotFound, UnsupportedType
from .common.response import build_response_from_file
from .common.schemas import ImageRequest, ImageResponse, ResolvedSource, ScaleMode
from .plugins.image_resize.algo.image_resize import ImageTransformer
from .utils.media_types import ImageFormat, detect_mime


class Transformer(Protocol):
    def resize(
        self,
        source_path: Path,
        image_format: ImageFormat,
        target_size: int,
        mode: ScaleMode,
    ) -> bytes: ...


class ImageService:
    """Serve original images or cached, resized derivatives.

    Every failure is raised as an ``ImageServiceError``; nothing is retried
    and nothing is logged here.

    Example:
        config = ServiceConfiguration(document_root="/var/www/html")
        config.set_cache_root("/var/cache/images")
        service = ImageService(config)

        response = service.process_request("/files/foo.png", size=200)
        try:
            send(response.headers, response.body_stream)
        finally:
            response.close()
    """

    def __init__(
        self,
        config: ServiceConfiguration,
        transformer: Transformer | None = None,
    ):
        self.config: ServiceConfiguration = config
        self.transformer: Transformer = transformer if transformer is not None else ImageTransformer()
        self._resolver: tuple[tuple[object, ...], PathResolver] | None = None

    @property
    def resolver(self) -> PathResolver:
        """Resolver for the current configuration; rebuilt only after it changes."""
        settings = (
            self.config.document_root,
            tuple(self.config.uri_rewrites),
            tuple(self.config.uri_appends),
        )
        cached = self._resolver
        if cached is None or cached[0] != settings:
            cached = (
                settings,
                PathResolver(settings[0], uri_rewrites=settings[1], uri_appends=settings[2]),
            )
            self._resolver = cached
        return cached[1]

    def resolve_source(self, request_path: str) -> ResolvedSource:
        """Resolve ``request_path`` to an existing, readable file in the document root.

        Raises:
            PathTraversal: If the path escapes the document root.
            SourceNotFound: If the file is missing or unreadable.
        """
        path = self.resolver.resolve(request_path)
        if not path.is_file() or not os.access(path, os.R_OK):
            raise SourceNotFound(str(path))
        return ResolvedSource.from_path(path)

    def process_request(
        self,
        request_path: str,
        size: int = 0,
        mode: ScaleMode | bool = ScaleMode.MAX,
    ) -> ImageResponse:
        """Convenience wrapper; a boolean ``mode`` means "min mode" when True."""
        if isinstance(mode, bool):
            mode = ScaleMode.from_flag(mode)
        return self.process(ImageRequest(request_path=request_path, size=size, mode=mode))

    def process(self, request: ImageRequest) -> ImageResponse:
        source = self.resolve_source(request.request_path)

        if not request.wants_resize:
            return build_response_from_file(source.path)

        mime = detect_mime(source.path)
        image_format = ImageFormat.from_mime(mime)
        if image_format is None:
            raise UnsupportedType(mime)

        cache_dir = self.cache_dir_for(source)
        derived_path = artifact_path(cache_dir, source, request.size, request.mode, image_format)

        if artifact_ready(derived_path):
            return build_response_from_file(derived_path)

        ensure_directory_exists(
            cache_dir,
            mode=self.config.dir_mode,
            owner=self.config.owner,
            group=self.config.group,
        )
        self.generate(source, derived_path, image_format, request)

        if not artifact_ready(derived_path):
            raise PublishFailed(f"Derived image generation failed: {derived_path}")

        return build_response_from_file(derived_path)

    def cache_dir_for(self, source: ResolvedSource) -> Path:
        """Cache directory mirroring the source's directory under the document root."""
        return self.config.cache_dir / self.resolver.relative_dir(source.path)

    def generate(
        self,
        source: ResolvedSource,
        derived_path: Path,
        image_format: ImageFormat,
        request: ImageRequest,
    ) -> bool:
        """Derive and publish the artifact under its generation lock.

        Returns:
            True if this call produced the artifact.
        """
        guard = ConcurrencyGuard(timeout=self.config.lock_timeout)
        publisher = AtomicPublisher(file_mode=self.config.file_mode)

        def transform_and_publish() -> None:
            data = self.transformer.resize(source.path, image_format, request.size, request.mode)
            _ = publisher.publish(data, derived_path)

        return guard.with_exclusive_generation(derived_path, transform_and_publish)
