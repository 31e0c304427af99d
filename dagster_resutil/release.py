"""Resource releaser

Closes any number of closeable handles (connections, cursors, files, ...)
in reverse order of how they were passed.
"""

from typing import Any, List, Tuple

from dagster import get_dagster_logger

from dagster_resutil.errors import NoResourcesProvided, ResourceReleaseError

logger = get_dagster_logger("resutil.release")


def release(*resources: Any, fail_fast: bool = True) -> None:
    """Close the given resources, last one first.

    Pass resources in acquisition order (connection, statement, result) so the
    dependents are closed before what they depend on. ``None`` entries are
    skipped.

    Args:
        *resources: Objects exposing ``close()``, or None
        fail_fast: Stop at the first failure (default). When False every
            resource is attempted and the first failure is raised afterwards
            with all of them in ``failures``.

    Raises:
        NoResourcesProvided: If called without any argument
        ResourceReleaseError: If a resource could not be closed
    """
    if not resources:
        raise NoResourcesProvided()

    failures: List[Tuple[int, Any, Exception]] = []

    for index in range(len(resources) - 1, -1, -1):
        resource = resources[index]
        if resource is None:
            continue

        try:
            resource.close()
        except Exception as e:
            logger.warning(f"Could not release resource #{index} ({resource!r}): {e}")
            if fail_fast:
                raise ResourceReleaseError(index, resource, e) from e
            failures.append((index, resource, e))

    if failures:
        index, resource, error = failures[0]
        raise ResourceReleaseError(index, resource, error, failures=failures) from error


# Alias for callers that use the close(...) name
close = release
