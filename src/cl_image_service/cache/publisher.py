"""Atomic publication of derived artifacts (write temp file, then rename)."""

from __future__ import annotations

import contextlib
import os
import tempfile
from pathlib import Path

from ..common.errors import PublishFailed


class AtomicPublisher:
    """
    Publishes bytes at a final path via a sibling temp file and ``os.replace``.

    The final path is only ever created by a single successful rename, so a
    half-written file is never observable there.
    """

    def __init__(self, file_mode: int | None = 0o644):
        self.file_mode: int | None = file_mode

    def publish(self, data: bytes, final_path: Path) -> Path:
        """
        Raises:
            PublishFailed: If the temp write or the rename fails. The temp
                file is removed in both cases.
        """
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=final_path.parent,
                prefix=f"{final_path.name}.tmp-",
            )
        except OSError as exc:
            raise PublishFailed(f"Unable to create temp file for {final_path}") from exc

        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as f:
                _ = f.write(data)
                f.flush()
                os.fsync(f.fileno())
            if self.file_mode is not None:
                os.chmod(tmp_path, self.file_mode)
        except OSError as exc:
            _discard(tmp_path)
            raise PublishFailed(f"Failed to save derived image: {final_path}") from exc

        try:
            os.replace(tmp_path, final_path)
        except OSError as exc:
            _discard(tmp_path)
            raise PublishFailed(f"Failed to move derived image into place: {final_path}") from exc

        return final_path


def _discard(path: Path) -> None:
    with contextlib.suppress(FileNotFoundError):
        path.unlink()
