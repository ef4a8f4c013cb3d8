"""Timing helpers for the derivation algorithms."""

import time
from collections.abc import Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from loguru import logger

P = ParamSpec("P")
R = TypeVar("R")


def timed(func: Callable[P, R]) -> Callable[P, R]:
    """Log the wall time of each call to ``func`` at INFO level.

    The elapsed time is logged whether the call returns or raises.

    Usage:
        @timed
        def image_resize(...):
            ...
    """

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        start_time = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_time = time.perf_counter() - start_time
            logger.info(f"[PROFILE] {func.__qualname__} took {elapsed_time:.3f}s")

    return wrapper
