class PqUtilsError(Exception):
    """Base class for the failures a command reports before exiting non-zero."""

    exit_code = 1


class FileOpenError(PqUtilsError):
    """The path is missing, is not a regular file, or cannot be read."""

    exit_code = 3


class ParseError(PqUtilsError):
    """DuckDB could not read the file as parquet, either up front or mid-scan."""

    exit_code = 4


class OutputEncodingError(PqUtilsError):
    """A row could not be serialized, or stdout stopped accepting output."""

    exit_code = 5
