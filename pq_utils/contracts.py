from enum import Enum, IntEnum
from typing import Any, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict


class OutputFormat(str, Enum):
    """The serializations `cat` and `head` can produce."""

    CSV = "csv"
    JSON = "json"


class FieldType(IntEnum):
    """Tags for the values a row cell can hold."""

    STRING = 1
    INT32 = 2
    INT64 = 3
    FLOAT32 = 4
    FLOAT64 = 5
    BOOLEAN = 6
    NULL = 7
    # Dates, decimals, nested values and anything else we only know how to print
    OTHER = 8


class ColumnDescriptor(BaseModel):
    """Static metadata about one leaf column of a parquet file."""

    model_config = ConfigDict(frozen=True)

    # The column name as declared in the file schema.
    name: str

    # The parquet physical type, e.g. INT64 or BYTE_ARRAY.
    physical_type: str

    # The logical (or legacy converted) type annotation, if the file carries one.
    logical_type: Optional[str] = None


class FieldValue(NamedTuple):
    """One cell of a row: the tag decides how the value gets projected."""

    field_type: FieldType
    value: Any
