"""Per-artifact exclusive generation lock.

A ``<artifact>.lock`` sentinel next to the artifact is locked with
``fcntl.flock``; the lock holds across threads and processes because every
caller opens its own file description.
"""

from __future__ import annotations

import contextlib
import fcntl
import os
import time
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Final

from ..common.errors import LockUnavailable

LOCK_SUFFIX: Final[str] = ".lock"
_POLL_INTERVAL: Final[float] = 0.05


def lock_path_for(artifact_path: Path) -> Path:
    return artifact_path.with_name(artifact_path.name + LOCK_SUFFIX)


def artifact_ready(path: Path) -> bool:
    """Existence plus readability is the only validity signal for an artifact."""
    return path.is_file() and os.access(path, os.R_OK)


def _flock(fd: int, lock_path: Path, deadline: float | None) -> None:
    if deadline is None:
        fcntl.flock(fd, fcntl.LOCK_EX)
        return
    while True:
        try:
            fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
            return
        except BlockingIOError:
            if time.monotonic() >= deadline:
                raise LockUnavailable(f"Timed out waiting for lock: {lock_path}") from None
            time.sleep(_POLL_INTERVAL)


def _is_current(fd: int, lock_path: Path) -> bool:
    # A previous holder may have unlinked the sentinel while we waited
    try:
        on_disk = os.stat(lock_path)
    except FileNotFoundError:
        return False
    held = os.fstat(fd)
    return (held.st_dev, held.st_ino) == (on_disk.st_dev, on_disk.st_ino)


@contextlib.contextmanager
def exclusive_lock(lock_path: Path, timeout: float | None = None) -> Iterator[None]:
    """Hold an exclusive advisory lock on ``lock_path`` for the context.

    The sentinel is removed before the lock is released.

    Raises:
        LockUnavailable: If the sentinel cannot be opened or locked in time.
    """
    deadline = None if timeout is None else time.monotonic() + timeout

    while True:
        try:
            fd = os.open(lock_path, os.O_RDWR | os.O_CREAT, 0o644)
        except OSError as exc:
            raise LockUnavailable(f"Unable to open lock file: {lock_path}") from exc
        try:
            _flock(fd, lock_path, deadline)
        except OSError as exc:
            os.close(fd)
            raise LockUnavailable(f"Unable to acquire lock: {lock_path}") from exc
        except LockUnavailable:
            os.close(fd)
            raise
        if _is_current(fd, lock_path):
            break
        os.close(fd)

    try:
        yield
    finally:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(lock_path)
        fcntl.flock(fd, fcntl.LOCK_UN)
        os.close(fd)


class ConcurrencyGuard:
    """Serializes generation of each derived artifact."""

    def __init__(self, timeout: float | None = None):
        self.timeout: float | None = timeout

    def with_exclusive_generation(self, artifact_path: Path, generate: Callable[[], None]) -> bool:
        """Run ``generate`` under the artifact's lock unless it already exists.

        Returns:
            True if ``generate`` ran, False if another holder had already
            published the artifact.
        """
        with exclusive_lock(lock_path_for(artifact_path), self.timeout):
            if artifact_ready(artifact_path):
                return False
            generate()
            return True
