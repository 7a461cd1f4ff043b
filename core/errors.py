"""Error taxonomy for trash operations.

Every failure raised by the core carries a stable ``exit_code`` so the CLI can
map it to a process exit status without inspecting message text. The core
raises; only ``cli.main`` catches and reports.
"""

from __future__ import annotations

from pathlib import Path

EXIT_INVALID = 1
EXIT_USAGE = 2
EXIT_NOT_FOUND = 3
EXIT_STORE = 4
EXIT_DESTINATION_EXISTS = 5
EXIT_DESTINATION_DIR = 6
EXIT_MOVE = 7


class TrashError(Exception):
    """Base class for all trash failures."""

    exit_code: int = EXIT_INVALID

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UsageError(TrashError):
    exit_code = EXIT_USAGE


class MissingOperandError(UsageError):
    def __init__(self, what: str = "file") -> None:
        super().__init__(f"missing {what} operand")


class StoreNotFoundError(TrashError):
    exit_code = EXIT_NOT_FOUND

    def __init__(self, directory: Path) -> None:
        super().__init__(f"'{directory}': Trash directory not found")
        self.directory = Path(directory)


class StoreInitError(TrashError):
    exit_code = EXIT_STORE

    def __init__(self, directory: Path, reason: str) -> None:
        super().__init__(f"'{directory}': Can not create trash directory ({reason})")
        self.directory = Path(directory)


class RecordWriteError(TrashError):
    exit_code = EXIT_STORE

    def __init__(self, record: Path, reason: str) -> None:
        super().__init__(f"'{record}': Can not write trash info ({reason})")
        self.record = Path(record)


class SourceNotFoundError(TrashError):
    exit_code = EXIT_NOT_FOUND

    def __init__(self, source: Path | str) -> None:
        super().__init__(f"'{source}': File not found")
        self.source = source


class InvalidNameError(TrashError):
    exit_code = EXIT_INVALID

    def __init__(self, source: Path | str) -> None:
        super().__init__(f"'{source}': Can not trash file or directory")
        self.source = source


class ItemNotFoundError(TrashError):
    exit_code = EXIT_NOT_FOUND

    def __init__(self, stored_name: str) -> None:
        super().__init__(f"'{stored_name}': File not found")
        self.stored_name = stored_name


class RestorePathMissingError(TrashError):
    exit_code = EXIT_NOT_FOUND

    def __init__(self, record: Path) -> None:
        super().__init__(f"'{record}': Restore path not found")
        self.record = Path(record)


class DestinationExistsError(TrashError):
    exit_code = EXIT_DESTINATION_EXISTS

    def __init__(self, destination: Path) -> None:
        super().__init__(f"can not restore '{destination}': File already exists")
        self.destination = Path(destination)


class DestinationDirError(TrashError):
    exit_code = EXIT_DESTINATION_DIR

    def __init__(self, directory: Path, reason: str) -> None:
        super().__init__(f"'{directory}': Can not create directory ({reason})")
        self.directory = Path(directory)


class MoveError(TrashError):
    exit_code = EXIT_MOVE

    def __init__(self, src: Path, dst: Path, reason: str) -> None:
        super().__init__(f"can not move '{src}' to '{dst}': {reason}")
        self.src = Path(src)
        self.dst = Path(dst)


__all__ = [
    "EXIT_INVALID",
    "EXIT_USAGE",
    "EXIT_NOT_FOUND",
    "EXIT_STORE",
    "EXIT_DESTINATION_EXISTS",
    "EXIT_DESTINATION_DIR",
    "EXIT_MOVE",
    "TrashError",
    "UsageError",
    "MissingOperandError",
    "StoreNotFoundError",
    "StoreInitError",
    "RecordWriteError",
    "SourceNotFoundError",
    "InvalidNameError",
    "ItemNotFoundError",
    "RestorePathMissingError",
    "DestinationExistsError",
    "DestinationDirError",
    "MoveError",
]
