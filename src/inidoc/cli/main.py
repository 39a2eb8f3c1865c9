import logging
import pathlib
from typing import Annotated, Optional

import typer
from rich.markup import escape
from rich.table import Table

from .. import Document, IniError

from .console import console, err_console

LOG_LEVELS = [
    logging.CRITICAL,
    logging.ERROR,
    logging.WARNING,
    logging.INFO,
    logging.DEBUG,
]

app = typer.Typer(no_args_is_help=True)


def _load(file: pathlib.Path, encoding: str | None) -> Document:
    try:
        return Document.from_file(file, encoding=encoding)
    except IniError as e:
        err_console.print(f"[red]error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@app.callback()
def common(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, min=0, max=5, help="set logging level"
        ),
    ] = 0
):
    """Parse and inspect INI-style configuration files."""

    if verbose == 0:
        logging.disable()
    else:
        logging.disable(logging.NOTSET)
        logging.basicConfig(level=LOG_LEVELS[verbose - 1])


@app.command()
def show(
    file: Annotated[
        pathlib.Path, typer.Argument(exists=True, dir_okay=False, resolve_path=True)
    ],
    section: Annotated[Optional[str], typer.Argument()] = None,
    encoding: Annotated[
        Optional[str], typer.Option(help="file encoding (detected if not given)")
    ] = None,
):
    """Show the sections of a file as tables.
    If section is given, only that section is shown.
    """

    doc = _load(file, encoding)

    if section is not None and section not in doc:
        err_console.print(f"[red]error:[/red] no such section: {escape(section)}")
        raise typer.Exit(1)

    names = list(doc) if section is None else [section]

    for name in names:
        table = Table(title=escape(f"[{name}]"))
        table.add_column("Key")
        table.add_column("Value")

        for key, value in doc[name].items():
            table.add_row(escape(key), escape(value))

        console.print(table)


@app.command()
def get(
    file: Annotated[
        pathlib.Path, typer.Argument(exists=True, dir_okay=False, resolve_path=True)
    ],
    section: str,
    key: str,
    encoding: Annotated[
        Optional[str], typer.Option(help="file encoding (detected if not given)")
    ] = None,
):
    """Print the value of a key in a section."""

    doc = _load(file, encoding)

    try:
        value = doc[section][key]
    except KeyError:
        err_console.print(f"[red]error:[/red] {escape(section)}.{escape(key)} is not set")
        raise typer.Exit(1)

    typer.echo(value)


@app.command()
def check(
    files: Annotated[list[pathlib.Path], typer.Argument()],
    encoding: Annotated[
        Optional[str], typer.Option(help="file encoding (detected if not given)")
    ] = None,
):
    """Check that files parse without errors."""

    failed = 0

    for file in files:
        try:
            doc = Document.from_file(file, encoding=encoding)
        except IniError as e:
            failed += 1
            err_console.print(f"[red]FAIL[/red] {escape(str(file))}: {escape(str(e))}")
        else:
            console.print(
                f"[green]OK[/green] {escape(str(file))}: {len(doc)} section(s)"
            )

    if failed:
        raise typer.Exit(1)


@app.command("format")
def format_(
    file: Annotated[
        pathlib.Path, typer.Argument(exists=True, dir_okay=False, resolve_path=True)
    ],
    output: Annotated[
        Optional[pathlib.Path],
        typer.Option("--output", "-o", help="where to write to (defaults to stdout)"),
    ] = None,
    encoding: Annotated[
        Optional[str], typer.Option(help="file encoding (detected if not given)")
    ] = None,
):
    """Rewrite a file in canonical form: one header per section, then its properties."""

    doc = _load(file, encoding)

    if output is None:
        typer.echo(doc.dumps(), nl=False)
    else:
        with output.open("w", encoding="utf_8") as f:
            doc.dump(f)
