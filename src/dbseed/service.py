"""Abstract DatabaseService interface."""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Iterator, Sequence

from dbseed.types import Params, ParamsList, Record


def quote_identifier(name: str) -> str:
    """Quote a table or column name, doubling embedded quotes.

    Dotted names are quoted per part: ``public.users`` -> ``"public"."users"``.
    """
    return ".".join('"' + part.replace('"', '""') + '"' for part in name.split("."))


class DatabaseService(ABC):
    """Database-agnostic interface for all DB operations.

    Design principles:
    - Stateless: no mutable state beyond the connection pool
    - Thread-safe: each transaction() acquires its own connection
    - DB-agnostic: callers program against this ABC, never a concrete backend
    """

    @abstractmethod
    def connect(self) -> None:
        """Initialize the connection pool."""

    @abstractmethod
    def close(self) -> None:
        """Close all connections and release resources."""

    @abstractmethod
    def execute(self, sql: str, params: Params | None = None) -> list[dict[str, Any]]:
        """Execute a single SQL statement and return rows as dicts."""

    @abstractmethod
    def execute_many(self, sql: str, params_list: ParamsList) -> None:
        """Execute a SQL statement for each parameter set."""

    @abstractmethod
    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Context manager: acquires a connection, commits on success, rolls back on error."""

    @abstractmethod
    def execute_ddl(self, sql: str) -> None:
        """Execute DDL statements (CREATE TABLE, CREATE INDEX, etc.)."""

    @abstractmethod
    def batch_insert(self, table: str, columns: list[str], rows: list[tuple]) -> None:
        """Insert multiple rows into a table."""

    @abstractmethod
    def table_exists(self, table: str) -> bool:
        """Return True if the table is present in the database catalog."""

    @abstractmethod
    def truncate(self, table: str) -> None:
        """Delete every row of a table in its own transaction."""

    def insert_records(self, table: str, records: Sequence[Record]) -> None:
        """Insert column-name -> value records with a single batch_insert.

        Columns are taken in first-seen order across all records; a record
        lacking a column contributes NULL for it. Must run inside transaction().
        """
        if not records:
            return
        columns: list[str] = []
        for record in records:
            for column in record:
                if column not in columns:
                    columns.append(column)
        rows = [tuple(record.get(column) for column in columns) for record in records]
        self.batch_insert(table, columns, rows)
