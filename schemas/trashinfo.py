"""Trash info record schemas and text helpers.

A record is a tiny key/value text block stored next to each trashed item:

    [Trash Info]
    Path=/abs/original/path
    DeletionDate=2024-01-31T12:34:56

``parse_fields`` is lenient and is what listing uses; ``TrashInfo.from_text``
is strict about required fields and is what restoring uses.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel

HEADER = "[Trash Info]"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"
INFO_SUFFIX = ".trashinfo"


class MissingFieldError(ValueError):
    """Raised when a record lacks a required field."""

    def __init__(self, field: str) -> None:
        super().__init__(f"trash info is missing required field {field!r}")
        self.field = field


def format_date(dt: datetime) -> str:
    return dt.strftime(DATE_FORMAT)


def parse_fields(text: str) -> dict[str, str]:
    """Collect ``key=value`` lines from record text.

    The key is everything before the first ``=`` and must be non-empty. Lines
    without ``=`` (including the header) are ignored; a repeated key keeps the
    last value.
    """
    fields: dict[str, str] = {}
    for line in text.splitlines():
        key, sep, value = line.partition("=")
        if not sep or not key:
            continue
        fields[key] = value
    return fields


class TrashInfo(BaseModel):
    path: Path
    deletion_date: datetime | None = None

    @classmethod
    def now(cls, path: Path) -> "TrashInfo":
        """Build a record for ``path`` stamped with the local time (seconds)."""
        return cls(path=path, deletion_date=datetime.now().replace(microsecond=0))

    def to_text(self) -> str:
        lines = [HEADER, f"Path={self.path}"]
        if self.deletion_date is not None:
            lines.append(f"DeletionDate={format_date(self.deletion_date)}")
        return "\n".join(lines) + "\n"

    @classmethod
    def from_text(cls, text: str) -> "TrashInfo":
        """Parse record text.

        Raises:
            MissingFieldError: if ``Path`` is absent or empty.
        """
        fields = parse_fields(text)
        raw_path = fields.get("Path", "")
        if not raw_path:
            raise MissingFieldError("Path")
        deletion_date: datetime | None = None
        raw_date = fields.get("DeletionDate", "")
        if raw_date:
            try:
                deletion_date = datetime.strptime(raw_date, DATE_FORMAT)
            except ValueError:
                deletion_date = None
        return cls(path=Path(raw_path), deletion_date=deletion_date)


class TrashEntry(BaseModel):
    """One row of the trash listing.

    Attributes:
        stored_name: Key of the item inside the store.
        deletion_date: Raw ``DeletionDate`` text, empty when absent.
        path: Raw ``Path`` text, empty when absent.
        number: Collision suffix; empty for the unsuffixed copy.
    """

    stored_name: str
    deletion_date: str = ""
    path: str = ""
    number: str = ""


__all__ = [
    "HEADER",
    "DATE_FORMAT",
    "INFO_SUFFIX",
    "MissingFieldError",
    "format_date",
    "parse_fields",
    "TrashInfo",
    "TrashEntry",
]
