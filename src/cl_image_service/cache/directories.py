import contextlib
import os
import shutil
from pathlib import Path

from ..common.errors import DirectoryCreateFailed


def ensure_directory_exists(
    directory: Path,
    mode: int = 0o777,
    owner: str | None = None,
    group: str | None = None,
) -> None:
    """Create ``directory`` (and parents) if absent.

    Concurrent creation by another request is tolerated. Ownership and mode
    are applied best-effort, and only when this call created the directory.
    """
    if directory.is_dir():
        return

    try:
        directory.mkdir(mode=mode, parents=True)
    except OSError as exc:
        if directory.is_dir():
            # Another request created it first
            return
        raise DirectoryCreateFailed(str(directory)) from exc

    if owner or group:
        with contextlib.suppress(OSError, LookupError):
            shutil.chown(directory, user=owner, group=group)
    with contextlib.suppress(OSError):
        os.chmod(directory, mode)
