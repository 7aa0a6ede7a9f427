# ================================
# FILE: upload_store/services/file_mover.py
# ================================

import os
import stat
import shutil
import time
import logging
from typing import Optional

from upload_store.core.config import settings
from upload_store.core.exceptions import (
    NotFoundError,
    InvalidInputError,
    StorageIOError,
    CleanupWarning,
)
from upload_store.core.logging_config import log_performance

logger = logging.getLogger(__name__)


def _stat_source(src: str) -> os.stat_result:
    try:
        return os.lstat(src)
    except FileNotFoundError as exc:
        raise NotFoundError(f"Source file not found: {src}", details={"path": src}) from exc
    except ValueError as exc:
        raise InvalidInputError(f"Invalid source path {src!r}: {exc}", details={"path": src}) from exc
    except OSError as exc:
        raise StorageIOError(
            f"Cannot stat source file {src}: {exc.strerror or exc}",
            details={"path": src, "errno": exc.errno},
        ) from exc


def _stat_destination(dst: str) -> Optional[os.stat_result]:
    try:
        return os.lstat(dst)
    except FileNotFoundError:
        return None
    except ValueError as exc:
        raise InvalidInputError(f"Invalid destination path {dst!r}: {exc}", details={"path": dst}) from exc
    except OSError as exc:
        raise StorageIOError(
            f"Cannot stat destination file {dst}: {exc.strerror or exc}",
            details={"path": dst, "errno": exc.errno},
        ) from exc


def copy_file_contents(src: str, dst: str, chunk_size: Optional[int] = None) -> int:
    """
    Stream the contents of src into dst and sync dst to disk.

    dst is created if missing and truncated if present. Returns the number of
    bytes written. On failure dst may be left partially written.
    """
    chunk_size = chunk_size or settings.copy_chunk_size
    try:
        with open(src, "rb") as fin, open(dst, "wb") as fout:
            shutil.copyfileobj(fin, fout, chunk_size)
            fout.flush()
            os.fsync(fout.fileno())
            return fout.tell()
    except OSError as exc:
        raise StorageIOError(
            f"Failed to copy {src} to {dst}: {exc.strerror or exc}",
            details={"src": src, "dst": dst, "errno": exc.errno},
        ) from exc


def move_file(src: str, dst: str, chunk_size: Optional[int] = None) -> None:
    """
    Move src to dst by copying, syncing and then removing src.

    Works across devices. If src and dst are the same file nothing is done.

    Raises:
        NotFoundError: src does not exist
        InvalidInputError: src or dst exists but is not a regular file
        StorageIOError: any stat, open, copy or sync failure; src is untouched
        CleanupWarning: dst was written and synced but src could not be removed
    """
    src_stat = _stat_source(src)
    if not stat.S_ISREG(src_stat.st_mode):
        raise InvalidInputError(
            f"Non-regular source file {src} ({stat.filemode(src_stat.st_mode)})",
            details={"path": src},
        )

    dst_stat = _stat_destination(dst)
    if dst_stat is not None:
        if not stat.S_ISREG(dst_stat.st_mode):
            raise InvalidInputError(
                f"Non-regular destination file {dst} ({stat.filemode(dst_stat.st_mode)})",
                details={"path": dst},
            )
        if os.path.samestat(src_stat, dst_stat):
            logger.debug("Source and destination are the same file, nothing to move: %s", dst)
            return

    start_time = time.time()
    copied = copy_file_contents(src, dst, chunk_size)
    log_performance("move_file", time.time() - start_time, bytes_copied=copied)

    try:
        os.remove(src)
    except OSError as exc:
        logger.warning("Copied %s to %s but could not remove source: %s", src, dst, exc)
        raise CleanupWarning(
            f"File stored at {dst} but source {src} could not be removed",
            details={"src": src, "dst": dst, "error": str(exc)},
        ) from exc

    logger.info("Moved %s to %s (%d bytes)", src, dst, copied)
