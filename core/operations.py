"""Put, list and restore.

Each operation takes the trash base directory explicitly, composes the trash
store with the naming resolver, and raises a ``core.errors.TrashError`` on
failure. Nothing here prints; the CLI reports.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from core.errors import (
    DestinationDirError,
    DestinationExistsError,
    ItemNotFoundError,
    MissingOperandError,
    RestorePathMissingError,
    SourceNotFoundError,
    TrashError,
)
from schemas.trashinfo import (
    INFO_SUFFIX,
    MissingFieldError,
    TrashEntry,
    TrashInfo,
    parse_fields,
)
from storage.trash_store import TrashStore
from tools import file_ops
from tools.naming import (
    parse_stored_name,
    resolve_put_name,
    resolve_restore_name,
    split_suffix,
    validate_base_name,
)

logger = structlog.get_logger(__name__)


@dataclass
class PutResult:
    source: Path
    stored_name: str
    info: TrashInfo


@dataclass
class PutReport:
    trashed: list[PutResult] = field(default_factory=list)
    errors: list[TrashError] = field(default_factory=list)

    @property
    def last_error(self) -> TrashError | None:
        return self.errors[-1] if self.errors else None

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass
class RestoreResult:
    stored_name: str
    destination: Path
    record_removed: bool


def put(base_dir: Path, source: Path | str) -> PutResult:
    """Move ``source`` into the trash and write its record.

    The source is checked before anything on disk is touched, so a missing
    source never creates trash directories.

    Raises:
        SourceNotFoundError: ``source`` does not exist.
        InvalidNameError: the resolved path has no final segment (``/``).
        StoreInitError: the store layout cannot be created.
        MoveError: the item could not be moved into ``files/``.
        RecordWriteError: the record could not be written; the item stays
            in ``files/`` without a record.
    """
    raw = Path(source)
    if source == "" or not raw.exists():
        raise SourceNotFoundError(source)
    try:
        resolved = raw.resolve(strict=True)
    except OSError as e:
        raise SourceNotFoundError(source) from e
    base_name = validate_base_name(resolved.name, source=resolved)

    store = TrashStore(base_dir).ensure_initialized()
    stored_name = resolve_put_name(store.files_dir, base_name)
    # Record the original location before it goes away
    info = TrashInfo.now(resolved)

    file_ops.move(resolved, store.file_path(stored_name))
    store.write_info(stored_name, info)
    logger.debug("trash_put", source=str(resolved), stored_name=stored_name)
    return PutResult(source=resolved, stored_name=stored_name, info=info)


def put_many(base_dir: Path, sources: Iterable[Path | str]) -> PutReport:
    """Trash each source independently.

    A failure on one source is recorded and the rest are still processed;
    ``PutReport.last_error`` is the last failure seen.
    """
    report = PutReport()
    for source in sources:
        try:
            report.trashed.append(put(base_dir, source))
        except TrashError as e:
            logger.debug("trash_put_failed", source=str(source), error=e.message)
            report.errors.append(e)
    return report


def _entry_for(record: Path) -> TrashEntry:
    try:
        fields = parse_fields(record.read_text(encoding="utf-8", errors="surrogateescape"))
    except OSError as e:
        logger.warning("trash_record_unreadable", record=str(record), error=str(e))
        fields = {}
    stored_name = record.name[: -len(INFO_SUFFIX)]
    path = fields.get("Path", "")
    if path:
        number = parse_stored_name(record.name, os.path.basename(path))
    else:
        _head, n = split_suffix(stored_name)
        number = "" if n is None else str(n)
    return TrashEntry(
        stored_name=stored_name,
        deletion_date=fields.get("DeletionDate", ""),
        path=path,
        number=number,
    )


def list_items(base_dir: Path) -> Iterator[TrashEntry]:
    """Yield one entry per record in ``info/``, sorted by record file name.

    The store is checked eagerly, so ``StoreNotFoundError`` is raised by the
    call itself rather than on first iteration.
    """
    store = TrashStore(base_dir).require_exists()
    records = store.info_records()
    return (_entry_for(record) for record in records)


def restore(base_dir: Path, file_name: str, number: str | None = None) -> RestoreResult:
    """Move a trashed item back to where it came from.

    Nothing is mutated unless every check passes. The record is deleted only
    after the item is back; failing to delete it is logged and reported via
    ``RestoreResult.record_removed`` but does not fail the restore.

    Raises:
        StoreNotFoundError: the store layout is missing.
        MissingOperandError: ``file_name`` is empty.
        ItemNotFoundError: content or record missing, or the record points at
            a file with a different name.
        RestorePathMissingError: the record has no ``Path``.
        DestinationExistsError: something already occupies the original path.
        DestinationDirError: the original parent directory cannot be created.
        MoveError: the item could not be moved back.
    """
    store = TrashStore(base_dir).require_exists()
    if not file_name:
        raise MissingOperandError("file")
    stored_name = resolve_restore_name(file_name, number)
    if not store.has_item(stored_name):
        raise ItemNotFoundError(stored_name)

    try:
        info = TrashInfo.from_text(store.read_info_text(stored_name))
    except MissingFieldError as e:
        raise RestorePathMissingError(store.info_path(stored_name)) from e
    except OSError as e:
        raise ItemNotFoundError(stored_name) from e

    destination = info.path
    if destination.name != file_name:
        raise ItemNotFoundError(stored_name)
    if file_ops.lexists(destination):
        raise DestinationExistsError(destination)

    parent = destination.parent
    if not parent.is_dir():
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DestinationDirError(parent, e.strerror or str(e)) from e

    file_ops.move(store.file_path(stored_name), destination)

    record_removed = True
    try:
        store.remove_info(stored_name)
    except OSError as e:
        record_removed = False
        logger.warning(
            "trash_record_cleanup_failed",
            record=str(store.info_path(stored_name)),
            error=str(e),
        )
    logger.debug("trash_restore", stored_name=stored_name, destination=str(destination))
    return RestoreResult(
        stored_name=stored_name, destination=destination, record_removed=record_removed
    )


__all__ = [
    "PutResult",
    "PutReport",
    "RestoreResult",
    "put",
    "put_many",
    "list_items",
    "restore",
]
