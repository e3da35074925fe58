import math
from typing import Any, Dict, List, Sequence

import numpy as np

from pq_utils.contracts import FieldType, FieldValue
from pq_utils.lib.errors import OutputEncodingError


def to_text(field: FieldValue) -> str:
    """The display form of a value: what a CSV cell or a fallback JSON string holds."""
    if field.field_type == FieldType.STRING:
        return field.value
    elif field.field_type == FieldType.NULL:
        return ""
    elif field.field_type == FieldType.BOOLEAN:
        return "true" if field.value else "false"
    elif field.field_type == FieldType.FLOAT32:
        # DuckDB widens FLOAT to a double; print the shortest float32 form instead
        return str(np.float32(field.value))
    else:
        return str(field.value)


def project_csv(row: Sequence[FieldValue]) -> List[str]:
    return [to_text(field) for field in row]


def to_json_value(field: FieldValue, column: str) -> Any:
    if field.field_type == FieldType.STRING:
        return field.value
    elif field.field_type in (FieldType.INT32, FieldType.INT64):
        return int(field.value)
    elif field.field_type in (FieldType.FLOAT32, FieldType.FLOAT64):
        value = float(field.value)
        if not math.isfinite(value):
            raise OutputEncodingError(
                f"Column {column!r} holds {value}, which has no JSON representation"
            )
        return value
    elif field.field_type == FieldType.BOOLEAN:
        return bool(field.value)
    elif field.field_type == FieldType.NULL:
        return None
    else:
        return to_text(field)


def project_json(row: Sequence[FieldValue], columns: Sequence[str]) -> Dict[str, Any]:
    """Maps a row onto its column names, keeping JSON-native types where they exist.

    Raises OutputEncodingError for NaN or infinite floats.
    """
    return {column: to_json_value(field, column) for column, field in zip(columns, row)}
