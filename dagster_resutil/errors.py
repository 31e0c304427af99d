"""Exception hierarchy for dagster_resutil

Every failure of the loader, the opener and the releaser is raised as one of
these types so callers can catch by kind instead of matching message text.
"""

from typing import Optional, Dict, Any, Tuple, List


class ResUtilError(Exception):
    """Base exception for all dagster_resutil errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        """
        Initialize base exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            context: Additional error context
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            'error_type': self.__class__.__name__,
            'error_code': self.error_code,
            'message': self.message,
            'context': self.context
        }


# Configuration errors
class ConfigNotFound(ResUtilError):
    """The properties file could not be located on the lookup path."""

    def __init__(self, name: str, searched: List[str]):
        message = f"{name} not found. Searched: {', '.join(searched) or '(nothing)'}"
        super().__init__(message, context={'name': name, 'searched': list(searched)})
        self.name = name
        self.searched = list(searched)


class InvalidConfig(ResUtilError):
    """The properties file is empty, unparseable or missing required keys."""

    def __init__(self, message: str, missing_keys: Tuple[str, ...] = (), source: Optional[str] = None):
        super().__init__(message, context={'missing_keys': list(missing_keys), 'source': source})
        self.missing_keys = tuple(missing_keys)
        self.source = source


# Connection errors
class NoSuitableDriver(ResUtilError):
    """No registered driver accepts the connection URL."""

    def __init__(self, url: str, scheme: Optional[str] = None):
        message = f"No suitable driver found for {url}"
        super().__init__(message, context={'url': url, 'scheme': scheme})
        self.url = url
        self.scheme = scheme


class DatabaseConnectionError(ResUtilError):
    """The driver layer rejected the connection attempt.

    The driver's own exception is available as ``__cause__``.
    """

    def __init__(self, url: str, original_error: Exception):
        message = f"An error occurred while establishing the connection to {url}: {original_error}"
        context = {
            'url': url,
            'original_error': str(original_error)
        }
        super().__init__(message, context=context)
        self.url = url
        self.original_error = original_error


# Release errors
class NoResourcesProvided(ResUtilError):
    """release() was called without any resource."""

    def __init__(self):
        super().__init__("At least one closeable resource must be provided.")


class ResourceReleaseError(ResUtilError):
    """A resource could not be closed.

    ``index`` is the position of the failing resource in the argument list.
    ``failures`` holds every ``(index, resource, exception)`` seen during the
    release pass; it has a single entry when the pass stopped at the first
    failure.
    """

    def __init__(self, index: int, resource: Any, original_error: Exception,
                 failures: Optional[List[Tuple[int, Any, Exception]]] = None):
        message = f"Error occurred while attempting to release resource #{index} ({resource!r}): {original_error}"
        self.failures = failures or [(index, resource, original_error)]
        context = {
            'index': index,
            'resource': repr(resource),
            'original_error': str(original_error),
            'failed_indexes': [i for i, _, _ in self.failures]
        }
        super().__init__(message, context=context)
        self.index = index
        self.resource = resource
        self.original_error = original_error
