import pytest

import duckdb


def write_parquet(path, select: str):
    conn = duckdb.connect()
    conn.execute(f"COPY ({select}) TO '{path}' (FORMAT PARQUET)")
    conn.close()
    return path


@pytest.fixture
def people_file(tmp_path):
    return write_parquet(
        tmp_path / "people.parquet",
        """
        SELECT * FROM (VALUES (1::BIGINT, 'alice'), (2::BIGINT, 'bob'), (3::BIGINT, 'carol'))
        AS t(id, name)
        """,
    )


@pytest.fixture
def typed_file(tmp_path):
    return write_parquet(
        tmp_path / "typed.parquet",
        """
        SELECT 7::INTEGER AS i32
        , 9000000000::BIGINT AS i64
        , 1.5::FLOAT AS f32
        , 2.25::DOUBLE AS f64
        , true AS flag
        , 'say "hi", bob' AS label
        , DATE '2024-01-02' AS day
        , NULL::INTEGER AS missing
        """,
    )


@pytest.fixture
def nan_file(tmp_path):
    return write_parquet(
        tmp_path / "nan.parquet",
        """
        SELECT * FROM (VALUES (1::BIGINT, 0.5::DOUBLE), (2::BIGINT, 'nan'::DOUBLE))
        AS t(id, score)
        """,
    )


@pytest.fixture
def empty_file(tmp_path):
    return write_parquet(
        tmp_path / "empty.parquet",
        "SELECT 1::BIGINT AS id, 'x' AS name WHERE false",
    )


@pytest.fixture
def range_file(tmp_path):
    return write_parquet(
        tmp_path / "range.parquet",
        "SELECT range::BIGINT AS id FROM range(100)",
    )


@pytest.fixture
def garbage_file(tmp_path):
    path = tmp_path / "garbage.parquet"
    path.write_text("this is not a parquet file\n")
    return path


@pytest.fixture
def float32_file(tmp_path):
    return write_parquet(
        tmp_path / "float32.parquet",
        "SELECT * FROM (VALUES (0.1::FLOAT), (3.3::FLOAT), (7::FLOAT)) AS t(f32)",
    )


LONG_NAME = "a_rather_long_column_name_" * 4  # wider than an 80 column terminal


@pytest.fixture
def wide_file(tmp_path):
    return write_parquet(
        tmp_path / "wide.parquet",
        f'SELECT 1::BIGINT AS "{LONG_NAME}id", \'x\' AS "{LONG_NAME}name"',
    )
