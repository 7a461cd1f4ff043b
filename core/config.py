"""Trash location configuration.

The base directory is resolved once at the edge (CLI) and then passed
explicitly into every operation as a ``TrashConfig``.

Precedence: ``-d/--directory`` > ``TRASH_DIRECTORY`` > ``~/.Trash``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel

from core.errors import MissingOperandError

ENV_VAR = "TRASH_DIRECTORY"
DEFAULT_DIR_NAME = ".Trash"


def default_trash_dir() -> Path:
    """Return the fallback trash base directory, ``~/.Trash``.

    Does not create it.
    """
    return Path.home() / DEFAULT_DIR_NAME


class TrashConfig(BaseModel):
    base_dir: Path


def resolve_trash_dir(
    directory: str | None = None, env: Mapping[str, str] | None = None
) -> Path:
    """Resolve the trash base directory.

    Args:
        directory: Value of ``-d/--directory``; None when not given.
        env: Environment mapping (defaults to ``os.environ``). An empty
            ``TRASH_DIRECTORY`` counts as unset.

    Returns:
        The chosen base directory (not created, not resolved).

    Raises:
        MissingOperandError: if ``directory`` was given but is empty.
    """
    if directory is not None:
        if not directory:
            raise MissingOperandError("directory")
        return Path(directory).expanduser()
    environ = os.environ if env is None else env
    from_env = environ.get(ENV_VAR, "")
    if from_env:
        return Path(from_env).expanduser()
    return default_trash_dir()


def load_config(
    directory: str | None = None, env: Mapping[str, str] | None = None
) -> TrashConfig:
    return TrashConfig(base_dir=resolve_trash_dir(directory, env))


__all__ = [
    "ENV_VAR",
    "DEFAULT_DIR_NAME",
    "default_trash_dir",
    "TrashConfig",
    "resolve_trash_dir",
    "load_config",
]
