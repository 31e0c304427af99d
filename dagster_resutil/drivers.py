"""Driver registry

Maps the scheme of a connection URL to the DB-API module that can open it,
the way a JDBC driver manager picks a driver for ``jdbc:<scheme>:...`` URLs.
"""

import re
import sqlite3
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

import duckdb
import psycopg2

from dagster import get_dagster_logger

from dagster_resutil.errors import NoSuitableDriver

logger = get_dagster_logger("resutil.drivers")

JDBC_PREFIX = "jdbc:"
MEMORY_DATABASE = ":memory:"
PASSWORD_PARAM = re.compile(r"(?i)([?&;](?:password|pass|pwd)=)[^&;#]*")


def split_url(url: str) -> Tuple[str, str, str]:
    """Split a connection URL into ``(scheme, url_without_jdbc, remainder)``.

    ``jdbc:postgresql://h/db`` gives ``('postgresql', 'postgresql://h/db', '//h/db')``.

    Raises:
        NoSuitableDriver: If the URL has no scheme
    """
    if not isinstance(url, str):
        raise NoSuitableDriver(repr(url))

    stripped = url[len(JDBC_PREFIX):] if url.lower().startswith(JDBC_PREFIX) else url
    scheme, sep, remainder = stripped.partition(":")
    if not sep or not scheme:
        raise NoSuitableDriver(redact_url(url))
    return scheme.lower(), stripped, remainder


def redact_url(url: str) -> str:
    """Hide passwords in the URL's userinfo part and in its parameters.

    ``postgresql://bob:p@ss@h/db?password=x`` gives
    ``postgresql://bob:****@h/db?password=****``.
    """
    if not isinstance(url, str):
        return url

    head, sep, tail = url.partition("://")
    if sep:
        # userinfo ends at the last '@' before the query string
        query_start = tail.find("?")
        authority = tail if query_start < 0 else tail[:query_start]
        at = authority.rfind("@")
        if at >= 0 and ":" in authority[:at]:
            user = authority[:at].split(":", 1)[0]
            tail = f"{user}:****{tail[at:]}"
        url = f"{head}://{tail}"

    return PASSWORD_PARAM.sub(r"\1****", url)


class Driver(ABC):
    """Abstract base class for database drivers."""

    name = "driver"

    @abstractmethod
    def connect(self, url: str, user: Optional[str], password: Optional[str]) -> Any:
        """Create and return a database connection."""
        pass

    @abstractmethod
    def set_manual_commit(self, connection: Any) -> None:
        """Switch the connection off auto-commit."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class PostgreSQLDriver(Driver):
    """PostgreSQL driver backed by psycopg2."""

    name = "postgresql"

    def connect(self, url: str, user: Optional[str], password: Optional[str]) -> psycopg2.extensions.connection:
        """
        Create and return a PostgreSQL connection.

        The URL (without ``jdbc:``) is passed as a libpq connection URI;
        credentials are passed separately so they never need to be embedded.
        """
        _, dsn, _ = split_url(url)
        return psycopg2.connect(dsn, user=user, password=password)

    def set_manual_commit(self, connection) -> None:
        connection.autocommit = False


class DuckDBDriver(Driver):
    """DuckDB driver. ``duckdb:<path>`` or ``duckdb::memory:``; credentials are ignored.

    DuckDB has no auto-commit switch: set_manual_commit opens an explicit
    transaction. After the caller commits or rolls back, the connection is
    back in auto-commit until ``begin()`` is called again.
    """

    name = "duckdb"

    def connect(self, url: str, user: Optional[str], password: Optional[str]) -> duckdb.DuckDBPyConnection:
        _, _, database = split_url(url)
        return duckdb.connect(database=database or MEMORY_DATABASE)

    def set_manual_commit(self, connection) -> None:
        connection.begin()


class SQLiteDriver(Driver):
    """SQLite driver. ``sqlite:<path>`` or ``sqlite::memory:``; credentials are ignored."""

    name = "sqlite"

    def connect(self, url: str, user: Optional[str], password: Optional[str]) -> sqlite3.Connection:
        _, _, database = split_url(url)
        return sqlite3.connect(database or MEMORY_DATABASE)

    def set_manual_commit(self, connection) -> None:
        connection.isolation_level = "DEFERRED"


class DriverManager:
    """Registry of drivers keyed by URL scheme."""

    def __init__(self, drivers: Optional[Dict[str, Driver]] = None):
        self._drivers: Dict[str, Driver] = {}
        for scheme, driver in (drivers or {}).items():
            self.register(scheme, driver)

    def register(self, scheme: str, driver: Driver) -> None:
        """Register ``driver`` for URLs starting with ``scheme:``; replaces any previous one."""
        self._drivers[scheme.lower()] = driver

    def deregister(self, scheme: str) -> None:
        self._drivers.pop(scheme.lower(), None)

    @property
    def schemes(self) -> list:
        return sorted(self._drivers)

    def get_driver(self, url: str) -> Driver:
        """Return the driver registered for the URL's scheme.

        Raises:
            NoSuitableDriver: If the URL is malformed or no driver accepts it
        """
        scheme, _, _ = split_url(url)
        driver = self._drivers.get(scheme)
        if driver is None:
            raise NoSuitableDriver(redact_url(url), scheme=scheme)
        return driver

    def get_connection(self, url: str, user: Optional[str], password: Optional[str]) -> Any:
        """Open a new connection; driver exceptions propagate unchanged."""
        driver = self.get_driver(url)
        logger.debug(f"Connecting to {redact_url(url)} with {driver!r}")
        return driver.connect(url, user, password)

    def set_manual_commit(self, url: str, connection: Any) -> None:
        """Switch a connection opened for ``url`` off auto-commit using its driver."""
        self.get_driver(url).set_manual_commit(connection)

    def __repr__(self) -> str:
        return f"DriverManager(schemes={self.schemes})"


def default_driver_manager() -> DriverManager:
    """Build a manager with the built-in PostgreSQL, DuckDB and SQLite drivers."""
    postgresql = PostgreSQLDriver()
    return DriverManager({
        "postgresql": postgresql,
        "postgres": postgresql,
        "duckdb": DuckDBDriver(),
        "sqlite": SQLiteDriver(),
    })


# Shared registry used when callers do not pass their own
driver_manager = default_driver_manager()
