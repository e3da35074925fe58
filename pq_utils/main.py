import logging
import pathlib
import sys
from typing import Optional

import typer
from pydantic import ValidationError

from pq_utils import __version__
from pq_utils.constants import DEFAULT_HEAD_ROWS, Settings
from pq_utils.contracts import OutputFormat
from pq_utils.lib import output
from pq_utils.lib.errors import OutputEncodingError, PqUtilsError
from pq_utils.lib.storage import ParquetFile

logger = logging.getLogger(__name__)

# The CLI app; `pq-utils` and `python -m pq_utils` both run it
app = typer.Typer(
    add_completion=False,
    invoke_without_command=True,
    help="A utility tool for reading parquet files",
)


def display_parquet_data(
    file: pathlib.Path, fmt: OutputFormat, num_records: Optional[int], settings: Settings
) -> int:
    """Prints the rows of a file as CSV or JSON, nothing at all if any row fails."""
    with ParquetFile(file, batch_size=settings.batch_size) as pf:
        columns, rows = pf.read(limit=num_records)
        with output.buffered_stdout(settings.spool_max_bytes) as out:
            if fmt == OutputFormat.JSON:
                count = output.write_json(out, columns, rows)
            else:
                count = output.write_csv(out, columns, rows)
    logger.info("Printed %d rows of %s as %s", count, file, fmt.value)
    return count


def display_parquet_schema(file: pathlib.Path, settings: Settings):
    with ParquetFile(file, batch_size=settings.batch_size) as pf:
        columns = pf.schema()
    try:
        output.print_schema(columns)
    except (OSError, UnicodeEncodeError) as e:
        raise OutputEncodingError(f"Could not write to stdout: {e}") from e


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", "-V", is_eager=True, help="Print the version and exit."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr."),
):
    """A utility tool for reading parquet files."""
    if version:
        typer.echo(f"pq-utils {__version__}")
        raise typer.Exit()

    try:
        settings = Settings.from_env()
    except ValidationError as e:
        typer.echo(f"Invalid configuration: {e}", err=True)
        raise typer.Exit(code=2)

    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    ctx.obj = settings

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=2)


@app.command("cat")
def cat(
    ctx: typer.Context,
    file: pathlib.Path = typer.Argument(..., help="The name of the file to display"),
    fmt: OutputFormat = typer.Option(
        OutputFormat.CSV, "--format", "-f", help="Output format: csv or json"
    ),
):
    """Display the contents of a file"""
    try:
        display_parquet_data(file, fmt, None, ctx.obj)
    except PqUtilsError as e:
        typer.echo(f"Error displaying file: {e}", err=True)
        raise typer.Exit(code=e.exit_code)


@app.command("head")
def head(
    ctx: typer.Context,
    file: pathlib.Path = typer.Argument(..., help="The name of the file to display"),
    fmt: OutputFormat = typer.Option(
        OutputFormat.CSV, "--format", "-f", help="Output format: csv or json"
    ),
    n_rows: int = typer.Option(
        DEFAULT_HEAD_ROWS, "--n_rows", "-n", min=0, help="Number of rows to display"
    ),
):
    """Display the first n rows of a file"""
    try:
        display_parquet_data(file, fmt, n_rows, ctx.obj)
    except PqUtilsError as e:
        typer.echo(f"Error displaying file: {e}", err=True)
        raise typer.Exit(code=e.exit_code)


@app.command("schema")
def schema(
    ctx: typer.Context,
    file: pathlib.Path = typer.Argument(
        ..., help="The name of the file to display the schema for"
    ),
):
    """Display the schema of a file"""
    try:
        display_parquet_schema(file, ctx.obj)
    except PqUtilsError as e:
        typer.echo(f"Error displaying schema: {e}", err=True)
        raise typer.Exit(code=e.exit_code)
