"""
Default source registrations.
"""
from typing import Any, List, Optional

from config.settings import Settings
from config.settings import settings as default_settings
from src.property_etl.models.source import (
    DataSourceName,
    PropertyDataSource,
    RateLimit,
    UpdateFrequency,
)
from src.property_etl.pipelines.manager import ETLPipelineManager

SUNBELT_STATES = ["AZ", "TX", "FL", "GA", "NV"]
CORE_STATES = ["AZ", "TX", "FL"]
ASSESSOR_COUNTIES = [
    "LA", "ORANGE", "SAN_DIEGO", "MIAMI_DADE", "HARRIS",
    "MARICOPA", "CLARK", "KING", "COOK", "PHILADELPHIA",
]


def default_sources(config: Optional[Settings] = None) -> List[PropertyDataSource]:
    """
    The standard set of sources, credentials read from settings.

    Providers without a configured key still register; they run on mock
    data with a degradation notice.
    """
    config = config or default_settings
    return [
        PropertyDataSource(
            name=DataSourceName.MOCK,
            priority=1,
            coverage=["all"],
        ),
        PropertyDataSource(
            name=DataSourceName.ATTOM,
            priority=2,
            coverage=SUNBELT_STATES,
            api_key=config.attom_api_key,
            base_url=config.attom_base_url,
            rate_limit=RateLimit(requests_per_minute=60, requests_per_hour=1000),
        ),
        PropertyDataSource(
            name=DataSourceName.CORELOGIC,
            priority=3,
            coverage=CORE_STATES,
            api_key=config.corelogic_api_key,
            base_url=config.corelogic_base_url,
            rate_limit=RateLimit(requests_per_minute=40, requests_per_hour=500),
        ),
        PropertyDataSource(
            name=DataSourceName.RENTSPREE,
            priority=4,
            coverage=CORE_STATES,
            api_key=config.rentspree_api_key,
            base_url=config.rentspree_base_url,
            rate_limit=RateLimit(requests_per_minute=60, requests_per_hour=1000),
        ),
        PropertyDataSource(
            name=DataSourceName.REALTYMOLE,
            priority=5,
            coverage=SUNBELT_STATES,
            api_key=config.realtymole_api_key,
            base_url=config.realtymole_base_url,
            rate_limit=RateLimit(requests_per_minute=50, requests_per_hour=800),
        ),
        PropertyDataSource(
            name=DataSourceName.MLSGRID,
            priority=6,
            coverage=SUNBELT_STATES,
            api_key=config.mlsgrid_api_key,
            base_url=config.mlsgrid_base_url,
            rate_limit=RateLimit(requests_per_minute=100, requests_per_hour=2000),
        ),
        PropertyDataSource(
            name=DataSourceName.COUNTY_ASSESSOR,
            priority=7,
            update_frequency=UpdateFrequency.WEEKLY,
            coverage=ASSESSOR_COUNTIES,
            api_key=config.county_assessor_api_key,
            base_url=config.county_assessor_base_url,
            rate_limit=RateLimit(requests_per_minute=30, requests_per_hour=500),
        ),
    ]


def build_default_manager(config: Optional[Settings] = None, **manager_kwargs: Any) -> ETLPipelineManager:
    """
    Create a manager with every default source registered.

    Args:
        config: Settings to read credentials from (defaults to the singleton)
        **manager_kwargs: Passed through to ETLPipelineManager
    """
    manager = ETLPipelineManager(**manager_kwargs)
    for source in default_sources(config):
        manager.register_pipeline(source)
    return manager
