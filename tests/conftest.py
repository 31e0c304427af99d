"""Pytest configuration for dagster_resutil tests"""

import sys
from pathlib import Path
from typing import Callable

import pytest

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config import PROPERTIES_FILE_NAME, PROPERTIES_NAME_ENV, PROPERTIES_PATH_ENV
from dagster_resutil.drivers import DriverManager
from tests.fake_resources import FakeDriver


# ============================================================================
# Properties File Fixtures
# ============================================================================

@pytest.fixture
def write_properties(tmp_path) -> Callable:
    """Write an application.properties file into tmp_path and return its path."""
    def _write(content: str, name: str = PROPERTIES_FILE_NAME) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding='iso-8859-1')
        return path
    return _write


@pytest.fixture
def sqlite_properties(write_properties, tmp_path) -> Path:
    """Properties pointing at a SQLite database file in tmp_path."""
    db_path = tmp_path / "app.db"
    return write_properties(
        f"DB_URL=jdbc:sqlite:{db_path.as_posix()}\n"
        "DB_USER=test_user\n"
        "DB_PASS=test_password\n"
    )


@pytest.fixture
def fake_properties(write_properties) -> Path:
    """Properties pointing at the fake driver."""
    return write_properties(
        "# test credentials\n"
        "DB_URL=jdbc:fake://localhost:5433/test_db\n"
        "DB_USER=test_user\n"
        "DB_PASS=test_password\n"
    )


# ============================================================================
# Driver Fixtures
# ============================================================================

@pytest.fixture
def fake_driver() -> FakeDriver:
    """Driver that hands out in-memory fake connections."""
    return FakeDriver()


@pytest.fixture
def fake_driver_manager(fake_driver) -> DriverManager:
    """Driver manager that only knows the fake:// scheme."""
    return DriverManager({"fake": fake_driver})


@pytest.fixture
def valid_config() -> dict:
    """A mapping that passes validation."""
    return {
        'DB_URL': 'jdbc:fake://localhost:5433/test_db',
        'DB_USER': 'test_user',
        'DB_PASS': 'test_password',
    }


# ============================================================================
# Environment Setup
# ============================================================================

@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch, tmp_path):
    """Keep the properties lookup away from the developer's own files."""
    monkeypatch.delenv(PROPERTIES_PATH_ENV, raising=False)
    monkeypatch.delenv(PROPERTIES_NAME_ENV, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
