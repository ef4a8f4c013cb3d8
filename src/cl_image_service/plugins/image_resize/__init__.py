"""Image resize plugin."""

from .algo import ImageTransformer, compute_dimensions, image_resize

__all__ = ["ImageTransformer", "compute_dimensions", "image_resize"]
