"""Trashbox CLI entrypoint.

Commands:
- put: move files to the trashbox
- list: display items in the trashbox
- restore: move an item back to its original place
- help / version: print help or version text

The trashbox directory comes from ``-d/--directory``, then the
``TRASH_DIRECTORY`` environment variable, then ``~/.Trash``.
"""

from __future__ import annotations

import json
import sys
from typing import NoReturn

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from core import operations
from core.config import ENV_VAR, TrashConfig, load_config
from core.errors import TrashError
from core.log import configure_logging

PROG_NAME = "trashbox"
__version__ = "1.0.0"

app = typer.Typer(
    add_completion=False,
    help=(
        "Trashbox — put files in a trashbox, list them, and restore them.\n\n"
        f"Default trashbox directory is ~/.Trash; override it with {ENV_VAR} "
        "or -d/--directory."
    ),
)
console = Console()
err_console = Console(stderr=True)


def _directory_option():
    return typer.Option(None, "-d", "--directory", help="Trashbox directory", show_default=False)


def _display(value: object) -> str:
    """Render ``value`` so it can always be written to stdout/stderr.

    Undecodable filename bytes (kept as lone surrogates) come out as
    ``\\xNN`` escapes instead of raising ``UnicodeEncodeError``.
    """
    return str(value).encode("utf-8", "surrogateescape").decode("utf-8", "backslashreplace")


def _fail(err: TrashError) -> NoReturn:
    _report(err)
    raise typer.Exit(code=err.exit_code)


def _report(err: TrashError) -> None:
    err_console.print(f"{PROG_NAME}: {_display(err.message)}", markup=False, highlight=False, soft_wrap=True)
    err_console.print("Try --help option for more information", markup=False, highlight=False)


def _config(directory: str | None) -> TrashConfig:
    try:
        return load_config(directory)
    except TrashError as e:
        _fail(e)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{PROG_NAME} version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Display version information and exit",
    ),
) -> None:
    configure_logging(verbose)


@app.command()
def put(
    files: list[str] = typer.Argument(..., help="Files or directories to trash"),
    directory: str | None = _directory_option(),
) -> None:
    """Put FILE... to the trashbox."""
    cfg = _config(directory)
    report = operations.put_many(cfg.base_dir, files)
    for err in report.errors:
        _report(err)
    if report.last_error is not None:
        raise typer.Exit(code=report.last_error.exit_code)


@app.command("list")
def list_cmd(
    directory: str | None = _directory_option(),
    plain: bool = typer.Option(False, "--plain", help="One line per item: DATE PATH NUMBER"),
    as_json: bool = typer.Option(False, "--json", help="Print items as a JSON array"),
) -> None:
    """List items in the trashbox."""
    cfg = _config(directory)
    try:
        entries = list(operations.list_items(cfg.base_dir))
    except TrashError as e:
        _fail(e)

    if as_json:
        typer.echo(json.dumps([entry.model_dump(mode="json") for entry in entries], indent=2))
        return
    if plain:
        for entry in entries:
            typer.echo(
                " ".join(_display(v) for v in (entry.deletion_date, entry.path, entry.number))
            )
        return

    table = Table(title=f"Trashbox — {_display(cfg.base_dir)}")
    table.add_column("Deletion Date")
    table.add_column("Path", overflow="fold")
    table.add_column("Number", justify="right")
    for entry in entries:
        table.add_row(
            Text(_display(entry.deletion_date)),
            Text(_display(entry.path)),
            Text(_display(entry.number)),
        )
    table.caption = f"Total: {len(entries)} item(s)"
    console.print(table)


def _check_number(value: str | None) -> str | None:
    if value is not None and not (value.isascii() and value.isdigit()):
        raise typer.BadParameter(f"'{value}' is not a number")
    return value


@app.command()
def restore(
    file: str = typer.Argument(..., help="Base name of the trashed file"),
    number: str | None = typer.Argument(
        None, callback=_check_number, help="Number shown by `list` for repeated names"
    ),
    directory: str | None = _directory_option(),
) -> None:
    """Restore FILE from the trashbox to its original place."""
    cfg = _config(directory)
    try:
        result = operations.restore(cfg.base_dir, file, number)
    except TrashError as e:
        _fail(e)
    if not result.record_removed:
        err_console.print(
            f"{PROG_NAME}: restored '{_display(result.destination)}' "
            "but could not remove its trash info",
            markup=False,
            highlight=False,
            soft_wrap=True,
        )


@app.command("help")
def help_cmd(ctx: typer.Context) -> None:
    """Display this help and exit."""
    typer.echo(ctx.find_root().get_help())


@app.command("version")
def version_cmd() -> None:
    """Display version information and exit."""
    typer.echo(f"{PROG_NAME} version {__version__}")


def main() -> int:
    """Entry point for `python -m cli.main` and the `trashbox` script."""
    app(prog_name=PROG_NAME)
    return 0


if __name__ == "__main__":
    sys.exit(main())
