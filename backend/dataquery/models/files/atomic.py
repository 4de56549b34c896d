from __future__ import annotations
import os
import logging
import tempfile
from pathlib import Path

log = logging.getLogger("dataquery.files")

def atomic_write_bytes(path: str | Path, payload: bytes) -> None:
    """
    Write `payload` to `path` via a temp file in the same directory, fsync it,
    then os.replace() it into place. Readers see the old or the new file, never a
    partial one. OSError propagates when the file could not be put in place; the
    temp file is removed on failure. Once os.replace() succeeds the write counts
    as done, and a failed directory sync is only logged.
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent))
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, target)
    except BaseException:
        try:
            os.unlink(tmp)
        except FileNotFoundError:
            pass
        raise
    # the new file is already in place
    try:
        _fsync_dir(target.parent)
    except OSError as e:
        log.warning("⚠️ Directory sync failed for %s: %s", target.parent, e)

def _fsync_dir(directory: Path) -> None:
    # directory entries are only durable once the directory itself is synced (POSIX)
    if os.name != "posix":
        return
    fd = os.open(str(directory), os.O_RDONLY)
    try:
        os.fsync(fd)
    finally:
        os.close(fd)
