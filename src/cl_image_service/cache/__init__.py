"""Cache layer - path sandboxing, artifact naming, locking and publication."""

from .artifact_namer import CacheKey, artifact_path
from .concurrency_guard import ConcurrencyGuard, artifact_ready, exclusive_lock, lock_path_for
from .directories import ensure_directory_exists
from .path_resolver import PathResolver
from .publisher import AtomicPublisher

__all__ = [
    "AtomicPublisher",
    "CacheKey",
    "ConcurrencyGuard",
    "PathResolver",
    "artifact_path",
    "artifact_ready",
    "ensure_directory_exists",
    "exclusive_lock",
    "lock_path_for",
]
