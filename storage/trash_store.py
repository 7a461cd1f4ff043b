"""Directory-pair trash store.

Owns the on-disk layout under a base directory:

- ``files/<stored name>`` holds the trashed content
- ``info/<stored name>.trashinfo`` holds its record

Creation and existence checks are separate on purpose: putting creates the
layout on demand, listing and restoring require it to already be there.
"""

from __future__ import annotations

from pathlib import Path

from core.errors import RecordWriteError, StoreInitError, StoreNotFoundError
from schemas.trashinfo import INFO_SUFFIX, TrashInfo
from tools import file_ops

FILES_DIR_NAME = "files"
INFO_DIR_NAME = "info"


class TrashStore:
    """Trash store rooted at ``base_dir``.

    Args:
        base_dir: Trash base directory. Not touched on construction.
    """

    def __init__(self, base_dir: Path) -> None:
        self.base_dir = Path(base_dir)
        self.files_dir = self.base_dir / FILES_DIR_NAME
        self.info_dir = self.base_dir / INFO_DIR_NAME

    def _layout(self) -> tuple[Path, Path, Path]:
        return self.base_dir, self.files_dir, self.info_dir

    def ensure_initialized(self) -> "TrashStore":
        """Create the base, files and info directories if absent.

        Raises:
            StoreInitError: if a directory cannot be created.
        """
        for directory in self._layout():
            if directory.is_dir():
                continue
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise StoreInitError(directory, e.strerror or str(e)) from e
        return self

    def require_exists(self) -> "TrashStore":
        """Check the layout without creating anything.

        Raises:
            StoreNotFoundError: naming the first missing directory.
        """
        for directory in self._layout():
            if not directory.is_dir():
                raise StoreNotFoundError(directory)
        return self

    def file_path(self, stored_name: str) -> Path:
        return self.files_dir / stored_name

    def info_path(self, stored_name: str) -> Path:
        return self.info_dir / (stored_name + INFO_SUFFIX)

    def has_item(self, stored_name: str) -> bool:
        """Return True only when both the content and its record are present."""
        return self.info_path(stored_name).is_file() and file_ops.lexists(
            self.file_path(stored_name)
        )

    def info_records(self) -> list[Path]:
        """Return record files in ``info/`` sorted by file name."""
        records = [
            p
            for p in self.info_dir.iterdir()
            if p.name.endswith(INFO_SUFFIX) and p.is_file()
        ]
        return sorted(records, key=lambda p: p.name)

    def write_info(self, stored_name: str, info: TrashInfo) -> Path:
        path = self.info_path(stored_name)
        try:
            file_ops.atomic_write_text(path, info.to_text())
        except OSError as e:
            raise RecordWriteError(path, e.strerror or str(e)) from e
        return path

    def read_info_text(self, stored_name: str) -> str:
        return self.info_path(stored_name).read_text(encoding="utf-8", errors="surrogateescape")

    def remove_info(self, stored_name: str) -> None:
        self.info_path(stored_name).unlink()


def ensure_initialized(base_dir: Path) -> TrashStore:
    return TrashStore(base_dir).ensure_initialized()


def require_exists(base_dir: Path) -> TrashStore:
    return TrashStore(base_dir).require_exists()


__all__ = [
    "FILES_DIR_NAME",
    "INFO_DIR_NAME",
    "TrashStore",
    "ensure_initialized",
    "require_exists",
]
