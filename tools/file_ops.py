"""Filesystem primitives for moving items in and out of the trash.

Provides an atomic rename when source and destination share a device, a
cross-device copy with verification and delete, and an atomic text writer for
trash info records.

Moves never follow symlinks: a trashed symlink is stored as a symlink.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path

import structlog
from blake3 import blake3

from core.errors import MoveError

logger = structlog.get_logger(__name__)


def lexists(path: Path) -> bool:
    """Return True if ``path`` exists, counting dangling symlinks."""
    return os.path.lexists(path)


def _hash_file(path: Path) -> str:
    h = blake3()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(1024 * 1024), b""):
            h.update(chunk)
    return h.hexdigest()


def _same_volume(src: Path, dst: Path) -> bool:
    """Return True if ``src`` and the directory receiving ``dst`` share a device."""
    try:
        return os.lstat(src).st_dev == os.stat(Path(dst).parent).st_dev
    except OSError:
        # If either stat fails, assume cross-volume to be conservative
        return False


def _count_files(p: Path) -> int:
    c = 0
    for _root, _dirs, files in os.walk(p):
        c += len(files)
    return c


def copy_verify_delete(src: Path, dst: Path) -> None:
    """Copy ``src`` to ``dst`` across devices, verify, then delete ``src``.

    Files are verified by checksum, directories by file count. The source is
    only removed once verification passed.

    Raises:
        OSError: if copying or deleting fails.
        ValueError: if verification fails (the partial copy is removed).
    """
    if src.is_dir() and not src.is_symlink():
        shutil.copytree(src, dst, symlinks=True)
        if _count_files(src) != _count_files(dst):
            shutil.rmtree(dst, ignore_errors=True)
            raise ValueError("directory copy verification failed")
        shutil.rmtree(src)
        return
    shutil.copy2(src, dst, follow_symlinks=False)
    if not src.is_symlink() and _hash_file(src) != _hash_file(dst):
        os.unlink(dst)
        raise ValueError("file checksum mismatch")
    os.unlink(src)


def move(src: Path, dst: Path) -> None:
    """Move ``src`` to ``dst``; ``dst`` must not exist and its parent must.

    Uses ``os.rename`` on the same device and ``copy_verify_delete`` otherwise.

    Raises:
        MoveError: on any failure; ``src`` is left in place.
    """
    src = Path(src)
    dst = Path(dst)
    try:
        if _same_volume(src, dst):
            os.rename(src, dst)
            return
        logger.info("cross_device_move", src=str(src), dst=str(dst))
        copy_verify_delete(src, dst)
    except (OSError, ValueError) as e:
        raise MoveError(src, dst, str(e)) from e


def atomic_write_text(path: Path, data: str) -> None:
    """Write text to ``path`` atomically.

    Uses a sibling ``.tmp`` file and ``os.replace`` so the file either exists
    entirely or not at all.
    """
    path = Path(path)
    tmp = path.with_name(path.name + ".tmp")
    try:
        tmp.write_text(data, encoding="utf-8", errors="surrogateescape")
        os.replace(tmp, path)
    except OSError:
        if tmp.exists():
            tmp.unlink()
        raise


__all__ = [
    "lexists",
    "copy_verify_delete",
    "move",
    "atomic_write_text",
]
