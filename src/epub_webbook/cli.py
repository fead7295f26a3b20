"""Main CLI application."""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from epub_webbook.commands.convert import execute_convert, print_error
from epub_webbook.core.errors import WebBookError

app = typer.Typer(
    name="epub3towebbook",
    help="Transform an EPUB3 package into an EPUB3-compatible WebBook.",
    add_completion=False,
)

console = Console()


def configure_logging(verbose: bool) -> None:
    """Route logging through rich. Warnings reach the user through the report."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.ERROR,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command()
def convert(
    source: Annotated[
        Path,
        typer.Argument(
            help="Path to the EPUB file, or to an already extracted package",
            exists=True,
            file_okay=True,
            dir_okay=True,
            resolve_path=True,
        ),
    ],
    workdir: Annotated[
        Path,
        typer.Option(
            "--workdir",
            "-w",
            help="Extraction directory, recreated on every run",
        ),
    ] = Path("extracted"),
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show details of every stage",
        ),
    ] = False,
) -> None:
    """Rewrite an EPUB3 package so it can be served as a website from index.xhtml.

    The navigation document is copied to index.xhtml at the package root,
    its links are adjusted to the new location and the package document is
    updated to point at it.
    """
    configure_logging(verbose)

    try:
        execute_convert(source=source, workdir=workdir, console=console)
    except WebBookError as e:
        print_error(console, str(e))
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
