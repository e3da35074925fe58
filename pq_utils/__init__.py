"""A utility tool for reading parquet files."""

__version__ = "0.3.0"
