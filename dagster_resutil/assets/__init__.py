"""Assets package

This package imports and registers Dagster assets that exercise the
configured database connection.
"""

from .connectivity import (
    database_connectivity,
    check_connectivity_round_trip,
)

__all__ = [
    "database_connectivity",
    "check_connectivity_round_trip",
]
