"""Fake resource implementations for testing without mocks

Closeables that record the order they were closed in, and a driver that
hands out in-memory connections.
"""

from typing import List, Optional

from dagster_resutil.drivers import Driver


class RecordingCloseable:
    """Closeable that appends its name to a shared log when closed."""

    def __init__(self, name: str, log: List[str], error: Optional[Exception] = None):
        self.name = name
        self.log = log
        self.error = error
        self.closed = False

    def close(self) -> None:
        """Record the close attempt, then fail if configured to."""
        self.log.append(self.name)
        if self.error is not None:
            raise self.error
        self.closed = True

    def __repr__(self) -> str:
        return f"RecordingCloseable({self.name!r})"


class FakeCursor:
    """Fake DB-API cursor."""

    def __init__(self, connection: "FakeConnection"):
        self.connection = connection
        self.closed = False
        self._rows = []

    def execute(self, query: str, params=None):
        self.connection.queries.append(query)
        self._rows = [(1,)] if query.strip().upper() == "SELECT 1" else []
        return self

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def close(self) -> None:
        self.closed = True


class FakeConnection:
    """Fake DB-API connection. Starts in auto-commit mode like most drivers."""

    def __init__(self, url: str, user: str, password: str):
        self.url = url
        self.user = user
        self.password = password
        self.autocommit = True
        self.closed = False
        self.queries = []
        self.commits = 0
        self.rollbacks = 0

    def cursor(self) -> FakeCursor:
        return FakeCursor(self)

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1

    def close(self) -> None:
        self.closed = True


class FakeDriver(Driver):
    """Fake driver for testing."""

    name = "fake"

    def __init__(self, connect_error: Optional[Exception] = None,
                 manual_commit_error: Optional[Exception] = None):
        self.connect_error = connect_error
        self.manual_commit_error = manual_commit_error
        self.connections: List[FakeConnection] = []

    def connect(self, url, user, password) -> FakeConnection:
        """Create a new fake connection, or fail if configured to."""
        if self.connect_error is not None:
            raise self.connect_error
        conn = FakeConnection(url, user, password)
        self.connections.append(conn)
        return conn

    def set_manual_commit(self, connection) -> None:
        if self.manual_commit_error is not None:
            raise self.manual_commit_error
        connection.autocommit = False
