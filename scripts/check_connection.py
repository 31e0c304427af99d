#!/usr/bin/env python3
"""
Script to verify the database configuration of a deployment.
Run this to check that application.properties is found, valid and usable.
"""

import sys
import os

# Add the project root to Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)


def check_imports():
    """Check that the database drivers can be imported."""
    print("Checking imports...")

    try:
        print("  ✓ Importing dagster_resutil...")
        import dagster_resutil

        print("  ✓ Importing drivers...")
        from dagster_resutil.drivers import driver_manager
        print(f"    - schemes: {', '.join(driver_manager.schemes)}")

        print("\n✅ All imports successful!\n")
        return True
    except ImportError as e:
        print(f"\n❌ Import failed: {e}\n")
        print("Make sure to install dependencies:")
        print("  pip install -e .\n")
        return False


def check_properties():
    """Check that application.properties is found and carries every required key."""
    print("Checking application.properties...")

    from dagster_resutil.configuration import load_configuration
    from dagster_resutil.drivers import redact_url
    from dagster_resutil.errors import ConfigNotFound, InvalidConfig

    try:
        configuration = load_configuration()
    except ConfigNotFound as e:
        print(f"  ✗ [{e.error_code}] {e.message}")
        print("     Copy config/application.properties.example to config/application.properties")
        print()
        return False
    except InvalidConfig as e:
        print(f"  ✗ [{e.error_code}] {e.message}")
        print()
        return False

    print(f"  ✓ Found: {configuration.source}")
    print(f"  ✓ DB_URL: {redact_url(configuration.url)}")
    print(f"  ✓ DB_USER: {configuration.user}")
    print()
    return True


def check_connection():
    """Check that a connection can be opened and released."""
    print("Checking database connection...")

    from dagster_resutil.connection import open_connection
    from dagster_resutil.release import release
    from dagster_resutil.errors import ResUtilError

    try:
        conn = open_connection()
        release(conn)
    except ResUtilError as e:
        print(f"  ✗ [{e.error_code}] {e.message}")
        print()
        return False

    print("  ✓ Connection opened (auto-commit disabled) and released")
    print()
    return True


def main():
    """Run all checks."""
    print("="*60)
    print("  Database Connection - Setup Verification")
    print("="*60)
    print()

    checks = [
        check_imports,
        check_properties,
        check_connection,
    ]

    results = []
    for check in checks:
        try:
            result = check()
            results.append(result)
        except Exception as e:
            print(f"❌ Check failed with exception: {e}\n")
            results.append(False)
        if not results[-1]:
            break

    print("="*60)
    if results and all(results) and len(results) == len(checks):
        print("✅ All checks passed! The database is ready to use.")
        print("\nNext steps:")
        print("  1. Run: dagster dev -m dagster_resutil.definitions")
        print("  2. Open: http://localhost:3000")
        print("  3. Materialize the database_connectivity asset")
        print("="*60)
        return 0
    else:
        print("❌ Some checks failed. Please fix the issues above.")
        print("="*60)
        return 1


if __name__ == "__main__":
    sys.exit(main())
