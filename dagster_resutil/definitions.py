"""Top-level Dagster definitions loader

Assembles assets, asset checks and resources into the Definitions object
Dagster discovers.
"""

import os
from dagster_resutil.assets import connectivity
from dagster_resutil.resources import ConnectionFactoryResource
from config import PROPERTIES_FILE_NAME, PROPERTIES_NAME_ENV
from dagster import Definitions, load_assets_from_modules, load_asset_checks_from_modules


all_assets = load_assets_from_modules([connectivity])
all_asset_checks = load_asset_checks_from_modules([connectivity])

defs = Definitions(
    assets=all_assets,
    asset_checks=all_asset_checks,
    resources={
        "database": ConnectionFactoryResource(
            properties_name=os.getenv(PROPERTIES_NAME_ENV, PROPERTIES_FILE_NAME),
        ),
    },
)
