"""Command-line interface for inkdrop-export."""

from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from inkdrop_export import __version__
from inkdrop_export.config import ExportOptions
from inkdrop_export.errors import ExportError
from inkdrop_export.exporter import run_export
from inkdrop_export.logging_config import configure_logging

app = typer.Typer(
    help="Convert an Inkdrop backup folder into Markdown files with YAML front matter.",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"inkdrop-export {__version__}")
        raise typer.Exit()


@app.command()
def main(
    input_dir: Annotated[
        Path,
        typer.Option("--input", "-i", help="The path to the Inkdrop backup folder."),
    ],
    output_dir: Annotated[
        Path,
        typer.Option("--output", "-o", help="The path to the folder for the converted files."),
    ],
    ignore_completed: Annotated[
        bool,
        typer.Option(
            "--ignoreCompleted",
            "--ignore-completed",
            help='Do not write out Notes that have a "Completed" status.',
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log more output for debugging purposes."),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit.",
        ),
    ] = None,
) -> None:
    """Convert a backup, e.g. --input=/path/to/backup --output=/path/to/output"""
    configure_logging(verbose=verbose)
    options = ExportOptions(
        input_dir=input_dir.expanduser().resolve(),
        output_dir=output_dir.expanduser().resolve(),
        ignore_completed=ignore_completed,
        verbose=verbose,
    )
    try:
        stats = run_export(options)
    except (ExportError, OSError) as exc:
        logger.error("{}", exc)
        raise typer.Exit(1) from exc

    logger.info(
        "Wrote {} books, {} files, {} notes ({} skipped)",
        stats.books_written,
        stats.files_written,
        stats.notes_written,
        stats.notes_skipped,
    )
