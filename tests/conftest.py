"""Shared test fixtures."""

from pathlib import Path

import pytest

from dbseed import create_service

USERS_DDL = """
CREATE TABLE users (
    id          TEXT PRIMARY KEY,
    name        TEXT,
    password    TEXT,
    role        TEXT,
    created_at  TEXT,
    updated_at  TEXT
);
"""


@pytest.fixture
def db_service(tmp_path):
    """Provide a fresh SQLite DatabaseService for each test."""
    db_path = tmp_path / "test.db"
    service = create_service(f"sqlite:///{db_path}")
    service.connect()
    yield service
    service.close()


@pytest.fixture
def users_table(db_service):
    db_service.execute_ddl(USERS_DDL)
    return "users"


@pytest.fixture
def write_csv(tmp_path):
    """Write lines to a CSV file under tmp_path and return its path."""

    def _write(lines: list[str], name: str = "users.csv", encoding: str = "utf-8") -> Path:
        csv_file = tmp_path / name
        csv_file.write_text("\n".join(lines) + "\n", encoding=encoding)
        return csv_file

    return _write


@pytest.fixture
def row_count(db_service):
    def _count(table: str = "users") -> int:
        with db_service.transaction():
            rows = db_service.execute(f"SELECT COUNT(*) AS cnt FROM {table}")
        return rows[0]["cnt"]

    return _count
