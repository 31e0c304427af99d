"""Configuration module for dagster_resutil

Contains settings, constants, and lookup locations for the properties file.
"""

from pathlib import Path

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent.absolute()

# Configuration paths
CONFIG_DIR = PROJECT_ROOT / "config"

# Properties file holding the database credentials
PROPERTIES_FILE_NAME = "application.properties"
PROPERTIES_PATH_ENV = "RESUTIL_PROPERTIES_PATH"
PROPERTIES_NAME_ENV = "RESUTIL_PROPERTIES_NAME"
PROPERTIES_ENCODING = "iso-8859-1"

# Required keys, in the order they are reported when missing
DB_URL = "DB_URL"
DB_USER = "DB_USER"
DB_PASS = "DB_PASS"
REQUIRED_KEYS = (DB_URL, DB_USER, DB_PASS)


def default_search_path() -> list:
    """Directories searched for the properties file, in order."""
    return [Path.cwd(), CONFIG_DIR]
