"""Setup configuration for dagster_resutil package"""

from setuptools import setup, find_packages

setup(
    name="dagster-resutil",
    version="1.4.0",
    description="Open database connections from application.properties and release resources in reverse order",
    author="Juan Wills",
    packages=find_packages(include=["dagster_resutil", "dagster_resutil.*", "config", "scripts"]),
    python_requires=">=3.11",
    install_requires=[
        "dagster>=1.11.14",
        "duckdb>=1.4.1",
        "jproperties>=2.1.2",
        "psycopg2-binary>=2.9.10",
        "pydantic>=2.0",
    ],
    extras_require={
        "dev": [
            "black>=25.9.0",
            "pytest>=8.4.2",
        ],
    },
    entry_points={
        "console_scripts": [
            "dagster-resutil-check=scripts.check_connection:main",
        ],
    },
)
