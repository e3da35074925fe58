import logging
import os

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Environment variables the CLI reads its settings from
LOG_LEVEL_ENV = "PQ_UTILS_LOG_LEVEL"
BATCH_SIZE_ENV = "PQ_UTILS_BATCH_SIZE"
SPOOL_MAX_BYTES_ENV = "PQ_UTILS_SPOOL_MAX_BYTES"

DEFAULT_HEAD_ROWS = 10


class Settings(BaseModel):
    """Runtime knobs, settable through the environment."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # Level name for the stderr log handler.
    log_level: str = Field("WARNING", alias=LOG_LEVEL_ENV)

    # How many rows we pull out of DuckDB at a time.
    batch_size: int = Field(1024, gt=0, alias=BATCH_SIZE_ENV)

    # How much rendered output we hold in memory before spilling to a temp file.
    spool_max_bytes: int = Field(8 * 1024 * 1024, gt=0, alias=SPOOL_MAX_BYTES_ENV)

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.upper()
        if not isinstance(logging.getLevelName(value), int):
            raise ValueError(f"unknown log level {value}")
        return value

    @classmethod
    def from_env(cls) -> "Settings":
        """Builds the settings from whichever PQ_UTILS_* variables are set.

        Raises a ValueError (pydantic's ValidationError) naming the offending
        variable when a value does not parse or is out of range.
        """
        names = (LOG_LEVEL_ENV, BATCH_SIZE_ENV, SPOOL_MAX_BYTES_ENV)
        values = {name: os.environ[name] for name in names if name in os.environ}
        return cls.model_validate(values)
