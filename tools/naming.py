"""Stored-name resolution for trashed items.

Repeated trashing of the same base name is disambiguated with a numeric
suffix: ``report.txt``, ``report.txt_1``, ``report.txt_2``... The next number
is always one more than the highest suffix currently present, so numbers
freed by a restore are not reused while a higher one survives.

Matching is plain string comparison plus a digit check, so base names that
contain ``.``, ``*``, ``[`` or similar need no escaping.
"""

from __future__ import annotations

import os
from pathlib import Path

from core.errors import InvalidNameError
from schemas.trashinfo import INFO_SUFFIX
from tools.file_ops import lexists

SUFFIX_SEPARATOR = "_"


def _is_number(text: str) -> bool:
    # str.isdigit accepts non-ASCII digits such as superscripts
    return bool(text) and text.isascii() and text.isdigit()


def validate_base_name(name: str, *, source: Path | str | None = None) -> str:
    """Return ``name`` or raise ``InvalidNameError`` if it is empty."""
    if not name:
        raise InvalidNameError(source if source is not None else name)
    return name


def suffix_of(entry: str, base_name: str) -> int | None:
    """Return the collision number of ``entry`` relative to ``base_name``.

    ``base_name`` itself is 0, ``base_name_<digits>`` is the digits, anything
    else (including ``foobar_1`` for base ``foo``) is None.
    """
    if entry == base_name:
        return 0
    prefix = base_name + SUFFIX_SEPARATOR
    if not entry.startswith(prefix):
        return None
    tail = entry[len(prefix):]
    if not _is_number(tail):
        return None
    return int(tail)


def resolve_put_name(files_dir: Path, base_name: str) -> str:
    """Pick a collision-free stored name for a new item.

    Args:
        files_dir: The store's content directory.
        base_name: Final path segment of the item being trashed.

    Returns:
        ``base_name`` if free, else ``base_name_<max+1>``.
    """
    validate_base_name(base_name)
    if not lexists(Path(files_dir) / base_name):
        return base_name
    highest = 0
    for entry in os.listdir(files_dir):
        n = suffix_of(entry, base_name)
        if n is not None and n > highest:
            highest = n
    return f"{base_name}{SUFFIX_SEPARATOR}{highest + 1}"


def resolve_restore_name(base_name: str, number: str | None = None) -> str:
    if not number:
        return base_name
    return f"{base_name}{SUFFIX_SEPARATOR}{number}"


def parse_stored_name(stored_name: str, known_base_name: str) -> str:
    """Return the number portion of a stored (or record) name.

    Strips ``.trashinfo``, then ``known_base_name``, then one optional ``_``.
    An empty result means the unsuffixed copy. A name that does not start with
    ``known_base_name`` comes back unchanged apart from the record suffix.
    """
    name = stored_name
    if name.endswith(INFO_SUFFIX):
        name = name[: -len(INFO_SUFFIX)]
    if not name.startswith(known_base_name):
        return name
    rest = name[len(known_base_name):]
    if rest.startswith(SUFFIX_SEPARATOR):
        rest = rest[len(SUFFIX_SEPARATOR):]
    return rest


def split_suffix(stored_name: str) -> tuple[str, int | None]:
    """Split ``name_<digits>`` into ``("name", digits)``.

    Names without a trailing digit run come back as ``(name, None)``.
    """
    head, sep, tail = stored_name.rpartition(SUFFIX_SEPARATOR)
    if not sep or not head or not _is_number(tail):
        return stored_name, None
    return head, int(tail)


__all__ = [
    "SUFFIX_SEPARATOR",
    "validate_base_name",
    "suffix_of",
    "resolve_put_name",
    "resolve_restore_name",
    "parse_stored_name",
    "split_suffix",
]
