import sqlite3

import pytest

from preflight_scripts.connection_providers import DBAPIConnectionProvider


class FakeCursor:
    """DB-API cursor answering queries from a sql -> rows mapping."""

    def __init__(self, data_source):
        self.data_source = data_source
        self.rows = []
        self.closed = False

    def execute(self, sql):
        self.data_source.executed.append(sql)
        if self.data_source.fail_on_execute is not None:
            raise self.data_source.fail_on_execute
        self.rows = list(self.data_source.results.get(sql, []))

    def fetchone(self):
        return self.rows.pop(0) if self.rows else None

    def fetchall(self):
        rows, self.rows = self.rows, []
        return rows

    def close(self):
        self.closed = True
        self.data_source.cursors_closed += 1


class FakeConnection:
    def __init__(self, data_source):
        self.data_source = data_source

    def cursor(self):
        return FakeCursor(self.data_source)


class FakeDataSource:
    """
    Connection provider recording every acquire/release and executed SQL.

    Args:
        results: Rows returned per SQL text
        fail_on_acquire: Exception raised by acquire()
        fail_on_execute: Exception raised by cursor.execute()
    """

    def __init__(self, results=None, fail_on_acquire=None, fail_on_execute=None, name='fake'):
        self.results = results or {}
        self.fail_on_acquire = fail_on_acquire
        self.fail_on_execute = fail_on_execute
        self.name = name
        self.acquire_attempts = 0
        self.acquired = 0
        self.released = 0
        self.cursors_closed = 0
        self.executed = []

    def acquire(self):
        self.acquire_attempts += 1
        if self.fail_on_acquire is not None:
            raise self.fail_on_acquire
        self.acquired += 1
        return FakeConnection(self)

    def release(self, connection):
        self.released += 1

    @property
    def open_connections(self):
        return self.acquired - self.released

    def __repr__(self):
        return f"FakeDataSource({self.name!r})"


@pytest.fixture
def fake_data_source():
    """Factory for FakeDataSource instances."""
    return FakeDataSource


@pytest.fixture
def sqlite_data_source(tmp_path):
    """
    SQLite provider whose connections see an attached schema named 's'.

    Returns (provider, run_sql) where run_sql executes and commits setup SQL.
    """
    main_path = tmp_path / 'main.db'
    schema_path = tmp_path / 's.db'

    def connect():
        connection = sqlite3.connect(str(main_path))
        connection.execute(f"ATTACH DATABASE '{schema_path}' AS s")
        return connection

    def run_sql(*statements):
        connection = connect()
        try:
            for statement in statements:
                connection.execute(statement)
            connection.commit()
        finally:
            connection.close()

    return DBAPIConnectionProvider(connect, name='sqlite'), run_sql
