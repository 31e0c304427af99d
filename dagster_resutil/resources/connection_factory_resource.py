"""Connection factory resource for Dagster

Hands out database connections configured from application.properties.
"""

from contextlib import contextmanager
from typing import Any, Generator, List, Optional

from dagster import ConfigurableResource
from pydantic import Field

from config import PROPERTIES_FILE_NAME
from dagster_resutil.configuration import Configuration, load_configuration
from dagster_resutil.connection import open_connection
from dagster_resutil.release import release


class ConnectionFactoryResource(ConfigurableResource):
    """Resource that opens manual-commit connections from a properties file."""

    properties_name: str = Field(
        default=PROPERTIES_FILE_NAME,
        description="Name of the properties file looked up in search_dirs"
    )
    properties_path: Optional[str] = Field(
        default=None,
        description="Explicit path to the properties file; when set, search_dirs is not used"
    )
    search_dirs: Optional[List[str]] = Field(
        default=None,
        description="Directories searched for the properties file (defaults to cwd, then config/)"
    )

    def load_configuration(self) -> Configuration:
        """Load and validate the properties file.

        Returns:
            Configuration: Validated connection settings
        """
        return load_configuration(
            name=self.properties_name,
            search_path=self.search_dirs,
            path=self.properties_path,
        )

    def open(self) -> Any:
        """Open a new connection with auto-commit disabled. The caller must release it."""
        return open_connection(self.load_configuration())

    def release(self, *resources: Any) -> None:
        """Close resources in reverse order, see dagster_resutil.release.release."""
        release(*resources)

    @contextmanager
    def get_connection(self) -> Generator:
        """Get a database connection that is released on exit.
        
        Yields:
            DB-API connection with auto-commit disabled
            
        Example:
            with database.get_connection() as conn:
                cur = conn.cursor()
                cur.execute("SELECT * FROM my_table")
                results = cur.fetchall()
                database.release(cur)
        """
        conn = self.open()
        try:
            yield conn
        finally:
            release(conn)
