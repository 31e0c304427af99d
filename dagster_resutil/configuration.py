"""Configuration loader

Locates the ``application.properties`` file, parses it and validates that
the database credentials it must carry are all present.
"""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from dagster import get_dagster_logger
from jproperties import Properties, PropertyError

from config import (
    DB_PASS,
    DB_URL,
    DB_USER,
    PROPERTIES_ENCODING,
    PROPERTIES_FILE_NAME,
    PROPERTIES_PATH_ENV,
    REQUIRED_KEYS,
    default_search_path,
)
from dagster_resutil.errors import ConfigNotFound, InvalidConfig

logger = get_dagster_logger("resutil.configuration")

PathLike = Union[str, Path]


class Configuration(Mapping):
    """Read-only view over the key/value pairs of a properties file."""

    def __init__(self, values: Mapping, source: Optional[str] = None):
        self._values = dict(values)
        self.source = source

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    @property
    def url(self) -> str:
        return self._values[DB_URL]

    @property
    def user(self) -> str:
        return self._values[DB_USER]

    @property
    def password(self) -> str:
        return self._values[DB_PASS]

    def __repr__(self) -> str:
        shown = {k: ('****' if k == DB_PASS else v) for k, v in self._values.items()}
        return f"Configuration({shown}, source={self.source!r})"


def locate_properties(
    name: str = PROPERTIES_FILE_NAME,
    search_path: Optional[Iterable[PathLike]] = None,
    path: Optional[PathLike] = None,
) -> Path:
    """Find the properties file.

    An explicit ``path``, or else the file named by the environment variable,
    is authoritative: when it does not exist the search path is not tried.

    Args:
        name: File name looked up inside each search directory
        search_path: Directories to search, defaults to cwd then ``config/``
        path: Explicit file path

    Returns:
        Path of the first candidate that exists

    Raises:
        ConfigNotFound: If no candidate exists
    """
    env_path = os.environ.get(PROPERTIES_PATH_ENV)
    if path is not None:
        candidates = [Path(path)]
        name = candidates[0].name
    elif env_path:
        candidates = [Path(env_path)]
        name = candidates[0].name
    else:
        dirs = default_search_path() if search_path is None else search_path
        candidates = [Path(d) / name for d in dirs]

    for candidate in candidates:
        if candidate.is_file():
            logger.debug(f"Using properties file {candidate}")
            return candidate

    raise ConfigNotFound(name, [str(c) for c in candidates])


def parse_properties(path: PathLike, encoding: str = PROPERTIES_ENCODING) -> dict:
    """Parse a ``.properties`` file into a plain dict.

    Raises:
        ConfigNotFound: If the file disappeared before it could be opened
        InvalidConfig: If the file cannot be read or parsed
    """
    props = Properties()
    try:
        with open(path, 'rb') as properties_file:
            props.load(properties_file, encoding)
    except FileNotFoundError as e:
        raise ConfigNotFound(Path(path).name, [str(path)]) from e
    except OSError as e:
        raise InvalidConfig(f"Unreadable properties file {path}: {e}", source=str(path)) from e
    except (PropertyError, ValueError) as e:
        raise InvalidConfig(f"Malformed properties file {path}: {e}", source=str(path)) from e

    return {key: value.data for key, value in props.items()}


def validate_configuration(values: Mapping, source: Optional[str] = None) -> Configuration:
    """Check that every required key is present.

    Only presence is checked; an empty value is passed through to the driver.

    Returns:
        The values wrapped in a Configuration

    Raises:
        InvalidConfig: Naming every missing key, in DB_URL, DB_USER, DB_PASS order
    """
    if values is None:
        values = {}

    missing = tuple(key for key in REQUIRED_KEYS if key not in values)
    if missing:
        where = f" in {source}" if source else ""
        prefix = f"Configuration{where} is empty. " if not values else ""
        raise InvalidConfig(
            f"{prefix}Missing required key(s){where}: {', '.join(missing)}",
            missing_keys=missing,
            source=source,
        )

    if isinstance(values, Configuration):
        return values
    return Configuration(values, source=source)


def load_configuration(
    name: str = PROPERTIES_FILE_NAME,
    search_path: Optional[Iterable[PathLike]] = None,
    path: Optional[PathLike] = None,
    encoding: str = PROPERTIES_ENCODING,
) -> Configuration:
    """Locate, parse and validate the properties file.

    Nothing is cached: each call reads the file again.

    Raises:
        ConfigNotFound: If the file cannot be located
        InvalidConfig: If the file is empty, malformed or missing required keys
    """
    properties_path = locate_properties(name, search_path=search_path, path=path)
    values = parse_properties(properties_path, encoding=encoding)
    configuration = validate_configuration(values, source=str(properties_path))
    logger.debug(f"Loaded {len(configuration)} key(s) from {properties_path}")
    return configuration
