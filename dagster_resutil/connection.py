"""Connection opener

Turns a validated configuration into a live DB-API connection in
manual-commit mode.
"""

from collections.abc import Mapping
from contextlib import contextmanager
from typing import Any, Generator, Optional

from dagster import get_dagster_logger

from dagster_resutil import drivers
from dagster_resutil.configuration import load_configuration, validate_configuration
from dagster_resutil.drivers import DriverManager, redact_url
from dagster_resutil.errors import DatabaseConnectionError
from dagster_resutil.release import release

logger = get_dagster_logger("resutil.connection")


def open_connection(
    config: Optional[Mapping] = None,
    *,
    driver_manager: Optional[DriverManager] = None,
    **load_kwargs,
) -> Any:
    """Open a new database connection with auto-commit disabled.

    Args:
        config: Mapping with DB_URL, DB_USER and DB_PASS. Loaded from the
            properties file when omitted.
        driver_manager: Registry to resolve the URL with, defaults to the
            built-in drivers
        **load_kwargs: Passed to load_configuration() when config is omitted

    Returns:
        A new connection owned by the caller

    Raises:
        ConfigNotFound: If config is omitted and no properties file is found
        InvalidConfig: If required keys are missing
        DatabaseConnectionError: If the driver cannot open the connection
    """
    if config is None:
        config = load_configuration(**load_kwargs)
    config = validate_configuration(config, source=getattr(config, 'source', None))

    manager = driver_manager or drivers.driver_manager
    safe_url = redact_url(config.url)
    logger.info(f"Opening connection to {safe_url}")

    try:
        conn = manager.get_connection(config.url, config.user, config.password)
    except Exception as e:
        logger.error(f"Connection to {safe_url} failed: {e}")
        raise DatabaseConnectionError(safe_url, e) from e

    try:
        manager.set_manual_commit(config.url, conn)
    except Exception as e:
        logger.error(f"Could not disable auto-commit on {safe_url}: {e}")
        try:
            release(conn)
        except Exception as close_error:
            logger.warning(f"Could not close half-open connection: {close_error}")
        raise DatabaseConnectionError(safe_url, e) from e

    logger.info(f"Connection to {safe_url} established (auto-commit disabled)")
    return conn


@contextmanager
def connection_scope(
    config: Optional[Mapping] = None,
    *,
    driver_manager: Optional[DriverManager] = None,
    **load_kwargs,
) -> Generator:
    """Open a connection and release it on exit.

    Commits are left to the caller; uncommitted work is discarded by the
    driver when the connection closes.

    Example:
        with connection_scope() as conn:
            cur = conn.cursor()
            cur.execute("UPDATE accounts SET active = TRUE")
            conn.commit()
            release(cur)
    """
    conn = open_connection(config, driver_manager=driver_manager, **load_kwargs)
    try:
        yield conn
    finally:
        release(conn)
