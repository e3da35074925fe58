import logging
import os
import pathlib
from typing import Iterator, List, Optional, Tuple

import duckdb

from pq_utils.contracts import ColumnDescriptor, FieldType, FieldValue
from pq_utils.lib.errors import FileOpenError, ParseError, PqUtilsError

logger = logging.getLogger(__name__)

# DuckDB result column types that get a dedicated tag; the rest are OTHER
FIELD_TYPES = {
    "VARCHAR": FieldType.STRING,
    "INTEGER": FieldType.INT32,
    "BIGINT": FieldType.INT64,
    "FLOAT": FieldType.FLOAT32,
    "DOUBLE": FieldType.FLOAT64,
    "BOOLEAN": FieldType.BOOLEAN,
}

Row = List[FieldValue]


def _quote(path: pathlib.Path) -> str:
    return "'" + str(path).replace("'", "''") + "'"


def _rows(relation: duckdb.DuckDBPyRelation, tags: List[FieldType], batch_size: int, path) -> Iterator[Row]:
    """Lazily pulls batches off the relation and tags each value by its column type."""
    while True:
        try:
            batch = relation.fetchmany(batch_size)
        except duckdb.Error as e:
            raise ParseError(f"{path}: {e}") from e
        if not batch:
            return
        for record in batch:
            yield [
                FieldValue(FieldType.NULL if v is None else tag, v)
                for tag, v in zip(tags, record)
            ]


class ParquetFile:
    """A parquet file opened through an in-memory DuckDB connection.

    Use it as a context manager so the connection is closed once the command is
    done with the rows, whether or not they were all read.
    """

    def __init__(self, path: pathlib.Path, batch_size: int = 1024):
        self.path = pathlib.Path(path)
        self.batch_size = batch_size
        self.db = None

    def __enter__(self) -> "ParquetFile":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def open(self):
        if not self.path.exists():
            raise FileOpenError(f"{self.path}: No such file or directory")
        if not self.path.is_file():
            raise FileOpenError(f"{self.path}: Not a regular file")
        if not os.access(self.path, os.R_OK):
            raise FileOpenError(f"{self.path}: Permission denied")
        logger.debug("Opening %s", self.path)
        self.db = duckdb.connect(":memory:")
        self.db.load_extension("parquet")

    def close(self):
        if self.db is not None:
            self.db.close()
            self.db = None

    def _error(self, e: duckdb.Error) -> PqUtilsError:
        if isinstance(e, duckdb.IOException):
            return FileOpenError(f"{self.path}: {e}")
        return ParseError(f"{self.path}: {e}")

    def schema(self) -> List[ColumnDescriptor]:
        """Returns the leaf columns of the file in declared order."""
        # Group nodes (and the root) carry no physical type, so skip them
        try:
            ret = self.db.execute(
                f"""
                SELECT name, type, logical_type, converted_type
                FROM parquet_schema({_quote(self.path)})
                WHERE type IS NOT NULL
                """
            ).fetchall()
        except duckdb.Error as e:
            raise self._error(e) from e
        return [
            ColumnDescriptor(
                name=name, physical_type=physical, logical_type=logical or converted
            )
            for name, physical, logical, converted in ret
        ]

    def read(self, limit: Optional[int] = None) -> Tuple[List[str], Iterator[Row]]:
        """Returns the column names and a single-pass iterator over the rows.

        With a limit, DuckDB stops scanning once that many rows were produced.
        """
        try:
            relation = self.db.sql(f"SELECT * FROM read_parquet({_quote(self.path)})")
            if limit is not None:
                relation = relation.limit(limit)
            columns = list(relation.columns)
            tags = [FIELD_TYPES.get(str(t), FieldType.OTHER) for t in relation.types]
        except duckdb.Error as e:
            raise self._error(e) from e
        logger.debug("Reading %s: columns=%s limit=%s", self.path, columns, limit)
        return columns, _rows(relation, tags, self.batch_size, self.path)
