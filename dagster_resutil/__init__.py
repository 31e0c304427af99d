"""dagster_resutil

Open database connections from application.properties and release
closeable resources in reverse order.
"""

from dagster_resutil.configuration import (
    Configuration,
    load_configuration,
    locate_properties,
    validate_configuration,
)
from dagster_resutil.connection import connection_scope, open_connection
from dagster_resutil.drivers import Driver, DriverManager, default_driver_manager
from dagster_resutil.errors import (
    ConfigNotFound,
    DatabaseConnectionError,
    InvalidConfig,
    NoResourcesProvided,
    NoSuitableDriver,
    ResourceReleaseError,
    ResUtilError,
)
from dagster_resutil.release import close, release

__all__ = [
    "Configuration",
    "load_configuration",
    "locate_properties",
    "validate_configuration",
    "open_connection",
    "connection_scope",
    "release",
    "close",
    "Driver",
    "DriverManager",
    "default_driver_manager",
    "ResUtilError",
    "ConfigNotFound",
    "InvalidConfig",
    "NoSuitableDriver",
    "DatabaseConnectionError",
    "NoResourcesProvided",
    "ResourceReleaseError",
]
