"""Connectivity Assets

This module contains assets responsible for:
- Opening a connection from application.properties
- Running a trivial round-trip query
- Releasing the cursor and connection in reverse order
"""

import dagster as dg
from dagster import AssetExecutionContext, Output, AssetCheckResult, AssetCheckSeverity, asset_check
from dagster_resutil.drivers import redact_url
from dagster_resutil.errors import ResUtilError
from dagster_resutil.resources.connection_factory_resource import ConnectionFactoryResource

from typing import Dict


@dg.asset(
    kinds={"sql"},
    description="Opens a connection from application.properties and runs SELECT 1"
)
def database_connectivity(
    context: AssetExecutionContext,
    database: ConnectionFactoryResource
) -> Output[Dict]:
    """
    Verifies the configured database is reachable.
    Loads the properties file, opens a manual-commit connection, runs SELECT 1
    and releases the cursor and the connection.
    """

    try:
        configuration = database.load_configuration()
        url = redact_url(configuration.url)
        context.log.info(f"Using properties file: {configuration.source}")
        context.log.info(f"Connecting to {url}...")

        conn = database.open()
        cursor = None
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT 1")
            row = cursor.fetchone()
            conn.rollback()
        finally:
            database.release(conn, cursor)
    except ResUtilError as e:
        context.log.error(f"Database connectivity failed: {e.to_dict()}")
        raise

    result = {
        "url": url,
        "source": configuration.source,
        "round_trip": row[0] if row else None,
    }
    context.log.info(f"  ✓ Round trip returned {result['round_trip']}")

    return Output(
        value=result,
        metadata={
            "url": url,
            "source": str(configuration.source),
            "round_trip": result["round_trip"],
        }
    )


@asset_check(asset=database_connectivity, description="Validates that SELECT 1 returned 1")
def check_connectivity_round_trip(database_connectivity: Dict) -> AssetCheckResult:
    """Check that the round-trip query returned the expected value."""
    if database_connectivity.get("round_trip") != 1:
        return AssetCheckResult(
            passed=False,
            description=f"Unexpected round trip result: {database_connectivity.get('round_trip')!r}",
            severity=AssetCheckSeverity.ERROR
        )

    return AssetCheckResult(
        passed=True,
        description=f"Round trip to {database_connectivity['url']} succeeded",
        metadata={"url": database_connectivity["url"]}
    )
