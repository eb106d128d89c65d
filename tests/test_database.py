"""Tests for DatabaseService (SQLite backend)."""

import threading

import pytest

from dbseed import create_service
from dbseed.service import quote_identifier
from dbseed.sqlite_service import SQLiteDatabaseService


class TestCreateService:
    def test_sqlite_url(self, tmp_path):
        service = create_service(f"sqlite:///{tmp_path / 'x.db'}")
        assert isinstance(service, SQLiteDatabaseService)

    def test_sqlite_memory_uses_single_connection(self):
        service = create_service("sqlite:///:memory:")
        service.connect()
        try:
            service.execute_ddl("CREATE TABLE t (id INTEGER)")
            assert service.table_exists("t")
        finally:
            service.close()

    def test_unsupported_scheme(self):
        with pytest.raises(ValueError, match="Unsupported database URL scheme"):
            create_service("mysql://localhost/db")


class TestQuoteIdentifier:
    def test_plain(self):
        assert quote_identifier("users") == '"users"'

    def test_embedded_quote(self):
        assert quote_identifier('we"ird') == '"we""ird"'

    def test_schema_qualified(self):
        assert quote_identifier("public.users") == '"public"."users"'


class TestDatabaseService:
    def test_execute_ddl_and_insert(self, db_service):
        db_service.execute_ddl("CREATE TABLE t (id INTEGER PRIMARY KEY, name TEXT)")
        with db_service.transaction():
            db_service.execute("INSERT INTO t (id, name) VALUES (?, ?)", (1, "alice"))
            rows = db_service.execute("SELECT * FROM t")
        assert rows == [{"id": 1, "name": "alice"}]

    def test_execute_many(self, db_service):
        db_service.execute_ddl("CREATE TABLE t (id INTEGER PRIMARY KEY, val TEXT)")
        with db_service.transaction():
            db_service.execute_many(
                "INSERT INTO t (id, val) VALUES (?, ?)",
                [(1, "a"), (2, "b"), (3, "c")],
            )
            rows = db_service.execute("SELECT * FROM t ORDER BY id")
        assert len(rows) == 3
        assert rows[0]["val"] == "a"

    def test_batch_insert(self, db_service):
        db_service.execute_ddl("CREATE TABLE t (id INTEGER PRIMARY KEY, val TEXT)")
        with db_service.transaction():
            db_service.batch_insert("t", ["id", "val"], [(1, "x"), (2, "y")])
            rows = db_service.execute("SELECT * FROM t ORDER BY id")
        assert len(rows) == 2

    def test_batch_insert_quotes_column_names(self, db_service):
        db_service.execute_ddl('CREATE TABLE t ("first name" TEXT, "order" INTEGER)')
        with db_service.transaction():
            db_service.batch_insert("t", ["first name", "order"], [("Ann", 1)])
            rows = db_service.execute("SELECT * FROM t")
        assert rows == [{"first name": "Ann", "order": 1}]

    def test_insert_records_fills_missing_columns(self, db_service):
        db_service.execute_ddl("CREATE TABLE t (id INTEGER, a TEXT, b TEXT)")
        with db_service.transaction():
            db_service.insert_records("t", [{"id": 1, "a": "x"}, {"id": 2, "b": "y"}])
            rows = db_service.execute("SELECT * FROM t ORDER BY id")
        assert rows == [{"id": 1, "a": "x", "b": None}, {"id": 2, "a": None, "b": "y"}]

    def test_insert_records_empty(self, db_service):
        db_service.execute_ddl("CREATE TABLE t (id INTEGER)")
        with db_service.transaction():
            db_service.insert_records("t", [])
            rows = db_service.execute("SELECT * FROM t")
        assert rows == []

    def test_table_exists(self, db_service):
        db_service.execute_ddl("CREATE TABLE t (id INTEGER)")
        assert db_service.table_exists("t")
        assert not db_service.table_exists("missing")

    def test_truncate(self, db_service):
        db_service.execute_ddl("CREATE TABLE t (id INTEGER)")
        with db_service.transaction():
            db_service.batch_insert("t", ["id"], [(1,), (2,)])
        db_service.truncate("t")
        with db_service.transaction():
            rows = db_service.execute("SELECT * FROM t")
        assert rows == []

    def test_transaction_rollback_on_error(self, db_service):
        db_service.execute_ddl("CREATE TABLE t (id INTEGER PRIMARY KEY, val TEXT)")
        with pytest.raises(ValueError):
            with db_service.transaction():
                db_service.execute("INSERT INTO t (id, val) VALUES (?, ?)", (1, "x"))
                raise ValueError("simulated failure")

        with db_service.transaction():
            rows = db_service.execute("SELECT * FROM t")
        assert rows == []

    def test_requires_transaction(self, db_service):
        db_service.execute_ddl("CREATE TABLE t (id INTEGER PRIMARY KEY)")
        with pytest.raises(RuntimeError, match="No active transaction"):
            db_service.execute("SELECT 1")

    def test_concurrent_transactions(self, db_service):
        db_service.execute_ddl("CREATE TABLE t (id INTEGER PRIMARY KEY, val INTEGER)")
        errors = []

        def worker(n):
            try:
                with db_service.transaction():
                    db_service.execute("INSERT INTO t (id, val) VALUES (?, ?)", (n, n * 10))
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert not errors
        with db_service.transaction():
            rows = db_service.execute("SELECT * FROM t ORDER BY id")
        assert len(rows) == 4
