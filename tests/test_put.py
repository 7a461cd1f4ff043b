from __future__ import annotations

from pathlib import Path

import pytest

from core import operations
from core.errors import (
    EXIT_NOT_FOUND,
    InvalidNameError,
    MoveError,
    RecordWriteError,
    SourceNotFoundError,
    StoreInitError,
)
from schemas.trashinfo import TrashInfo
from storage.trash_store import TrashStore
from tools import file_ops


def test_put_moves_file_and_writes_record(trash_dir: Path, work_dir: Path) -> None:
    src = work_dir / "report.txt"
    src.write_text("q3 numbers")

    result = operations.put(trash_dir, src)

    store = TrashStore(trash_dir)
    assert result.stored_name == "report.txt"
    assert not src.exists()
    assert store.file_path("report.txt").read_text() == "q3 numbers"
    info = TrashInfo.from_text(store.read_info_text("report.txt"))
    assert info.path == src
    assert info.deletion_date is not None


def test_put_relative_path_records_absolute_path(trash_dir: Path, chdir_tmp_path: Path) -> None:
    Path("notes.md").write_text("n")
    result = operations.put(trash_dir, "notes.md")
    assert result.source == (chdir_tmp_path / "notes.md").resolve()
    assert result.info.path.is_absolute()


def test_repeated_puts_number_in_order(trash_dir: Path, work_dir: Path) -> None:
    src = work_dir / "base"
    names = []
    for i in range(4):
        src.write_text(str(i))
        names.append(operations.put(trash_dir, src).stored_name)
    assert names == ["base", "base_1", "base_2", "base_3"]

    store = TrashStore(trash_dir)
    assert store.file_path("base_2").read_text() == "2"


def test_put_directory(trash_dir: Path, make_tree, work_dir: Path) -> None:
    make_tree({"proj/a.txt": "a", "proj/sub/b.txt": "b"}, root=work_dir)
    operations.put(trash_dir, work_dir / "proj")
    assert (trash_dir / "files" / "proj" / "sub" / "b.txt").read_text() == "b"
    assert not (work_dir / "proj").exists()


def test_missing_source_leaves_no_trash_dirs(trash_dir: Path, work_dir: Path) -> None:
    with pytest.raises(SourceNotFoundError) as ei:
        operations.put(trash_dir, work_dir / "ghost.txt")
    assert ei.value.exit_code == EXIT_NOT_FOUND
    assert not trash_dir.exists()


def test_empty_source_is_not_found(trash_dir: Path) -> None:
    with pytest.raises(SourceNotFoundError):
        operations.put(trash_dir, "")


def test_root_has_no_base_name(trash_dir: Path) -> None:
    with pytest.raises(InvalidNameError):
        operations.put(trash_dir, "/")
    assert not trash_dir.exists()


def test_store_init_failure(tmp_path: Path, work_dir: Path) -> None:
    blocker = tmp_path / "blocked"
    blocker.write_text("file where the trashbox should be")
    src = work_dir / "a.txt"
    src.write_text("a")
    with pytest.raises(StoreInitError):
        operations.put(blocker, src)
    assert src.exists()


def test_move_failure_writes_no_record(
    monkeypatch: pytest.MonkeyPatch, trash_dir: Path, work_dir: Path
) -> None:
    src = work_dir / "a.txt"
    src.write_text("a")

    def boom(s, d):
        raise MoveError(s, d, "Invalid cross-device link")

    monkeypatch.setattr(file_ops, "move", boom)
    with pytest.raises(MoveError):
        operations.put(trash_dir, src)
    assert src.exists()
    assert list((trash_dir / "info").iterdir()) == []


def test_record_write_failure_leaves_orphan(
    monkeypatch: pytest.MonkeyPatch, trash_dir: Path, work_dir: Path
) -> None:
    src = work_dir / "a.txt"
    src.write_text("a")

    def boom(path, data):
        raise OSError(28, "No space left on device")

    monkeypatch.setattr(file_ops, "atomic_write_text", boom)
    with pytest.raises(RecordWriteError):
        operations.put(trash_dir, src)
    store = TrashStore(trash_dir)
    assert store.file_path("a.txt").exists()
    assert not store.has_item("a.txt")


def test_put_many_continues_and_reports_last_failure(
    trash_dir: Path, work_dir: Path
) -> None:
    good1 = work_dir / "one"
    good2 = work_dir / "two"
    good1.write_text("1")
    good2.write_text("2")

    report = operations.put_many(
        trash_dir, [work_dir / "missing-a", good1, "/", good2]
    )

    assert [r.stored_name for r in report.trashed] == ["one", "two"]
    assert len(report.errors) == 2
    assert isinstance(report.last_error, InvalidNameError)
    assert not report.ok
