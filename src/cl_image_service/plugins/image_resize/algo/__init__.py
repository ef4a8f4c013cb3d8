"""Image resize algorithm."""

from .image_resize import ImageTransformer, compute_dimensions, image_resize

__all__ = ["ImageTransformer", "compute_dimensions", "image_resize"]
