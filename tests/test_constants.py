import pytest

from pydantic import ValidationError

from pq_utils.constants import Settings


def test_defaults(monkeypatch):
    for name in ("PQ_UTILS_LOG_LEVEL", "PQ_UTILS_BATCH_SIZE", "PQ_UTILS_SPOOL_MAX_BYTES"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings.from_env()
    assert settings.log_level == "WARNING"
    assert settings.batch_size == 1024
    assert settings.spool_max_bytes == 8 * 1024 * 1024


def test_from_env(monkeypatch):
    monkeypatch.setenv("PQ_UTILS_LOG_LEVEL", "debug")
    monkeypatch.setenv("PQ_UTILS_BATCH_SIZE", "50")
    monkeypatch.setenv("PQ_UTILS_SPOOL_MAX_BYTES", "4096")
    settings = Settings.from_env()
    assert settings.log_level == "DEBUG"
    assert settings.batch_size == 50
    assert settings.spool_max_bytes == 4096


@pytest.mark.parametrize(
    "name,value",
    [
        ("PQ_UTILS_BATCH_SIZE", "0"),
        ("PQ_UTILS_BATCH_SIZE", "lots"),
        ("PQ_UTILS_SPOOL_MAX_BYTES", "-5"),
        ("PQ_UTILS_LOG_LEVEL", "chatty"),
    ],
)
def test_invalid_values(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError, match=name):
        Settings.from_env()


def test_settings_are_frozen():
    settings = Settings(batch_size=5)
    with pytest.raises(ValidationError):
        settings.batch_size = 10
