import contextlib
import csv
import json
import logging
import shutil
import sys
import tempfile
from typing import IO, Iterable, Iterator, List, Optional, Sequence

from rich import box
from rich.cells import cell_len
from rich.console import Console
from rich.table import Table
from rich.text import Text

from pq_utils.contracts import ColumnDescriptor, FieldValue
from pq_utils.lib.errors import OutputEncodingError
from pq_utils.lib.projection import project_csv, project_json

logger = logging.getLogger(__name__)

SCHEMA_HEADER = ("Column name", "Physical type", "Logical type")


@contextlib.contextmanager
def buffered_stdout(max_bytes: int) -> Iterator[IO[str]]:
    """Yields a text buffer that is copied to stdout only if the block succeeds.

    The buffer stays in memory up to max_bytes and spills to a temp file after
    that, so a failed command never leaves half an output on stdout.
    """
    with tempfile.SpooledTemporaryFile(
        max_size=max_bytes, mode="w+", encoding="utf-8", newline=""
    ) as buf:
        yield buf
        buf.seek(0)
        try:
            shutil.copyfileobj(buf, sys.stdout)
            sys.stdout.flush()
        except (OSError, UnicodeEncodeError) as e:
            raise OutputEncodingError(f"Could not write to stdout: {e}") from e


def write_csv(out: IO[str], columns: Sequence[str], rows: Iterable[Sequence[FieldValue]]) -> int:
    """Writes a header and one record per row, returning the number of rows."""
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(columns)
    count = 0
    for row in rows:
        writer.writerow(project_csv(row))
        count += 1
    out.flush()
    logger.debug("Wrote %d CSV rows", count)
    return count


def write_json(out: IO[str], columns: Sequence[str], rows: Iterable[Sequence[FieldValue]]) -> int:
    """Streams the rows as a single JSON array of objects, one per row."""
    out.write("[")
    count = 0
    for row in rows:
        if count:
            out.write(",")
        out.write(
            json.dumps(
                project_json(row, columns),
                separators=(",", ":"),
                ensure_ascii=False,
                allow_nan=False,
            )
        )
        count += 1
    out.write("]\n")
    out.flush()
    logger.debug("Wrote %d JSON rows", count)
    return count


def _schema_cells(columns: List[ColumnDescriptor]) -> List[Sequence[str]]:
    return [(col.name, col.physical_type, col.logical_type or "") for col in columns]


def schema_table(columns: List[ColumnDescriptor]) -> Table:
    table = Table(box=box.ASCII)
    for heading in SCHEMA_HEADER:
        table.add_column(heading, no_wrap=True)
    # Text() keeps rich from reading brackets in column names as markup
    for cells in _schema_cells(columns):
        table.add_row(*(Text(cell) for cell in cells))
    return table


def schema_table_width(columns: List[ColumnDescriptor]) -> int:
    """Width the ASCII table needs so that no cell gets wrapped or cut short."""
    rows = [SCHEMA_HEADER] + _schema_cells(columns)
    widths = [max(cell_len(row[i]) for row in rows) for i in range(len(SCHEMA_HEADER))]
    # one space of padding each side of a cell, plus a border between and around cells
    return sum(w + 2 for w in widths) + len(widths) + 1


def print_schema(columns: List[ColumnDescriptor], console: Optional[Console] = None):
    if console is None:
        # rich assumes 80 columns when stdout is not a terminal
        console = Console(width=max(80, schema_table_width(columns)))
    console.print(schema_table(columns))
