"""
Extractor selection.

Decides, once per registered source, which extractor will serve it.
"""
from typing import Callable, Dict

from src.property_etl.extractors.attom import AttomExtractor
from src.property_etl.extractors.base import DataExtractor
from src.property_etl.extractors.corelogic import CoreLogicExtractor
from src.property_etl.extractors.county_assessor import CountyAssessorExtractor
from src.property_etl.extractors.mlsgrid import MLSGridExtractor
from src.property_etl.extractors.mock_extractor import MockDataExtractor
from src.property_etl.extractors.realtymole import RealtyMoleExtractor
from src.property_etl.extractors.rentspree import RentSpreeExtractor
from src.property_etl.models.source import DataSourceName, PropertyDataSource
from src.property_etl.utils.logger import get_logger

logger = get_logger(__name__)

ExtractorFactory = Callable[[PropertyDataSource], DataExtractor]

EXTRACTORS: Dict[DataSourceName, Callable[[PropertyDataSource], DataExtractor]] = {
    DataSourceName.ATTOM: AttomExtractor,
    DataSourceName.CORELOGIC: CoreLogicExtractor,
    DataSourceName.RENTSPREE: RentSpreeExtractor,
    DataSourceName.REALTYMOLE: RealtyMoleExtractor,
    DataSourceName.MLSGRID: MLSGridExtractor,
    DataSourceName.COUNTY_ASSESSOR: CountyAssessorExtractor,
}


def build_extractor(source: PropertyDataSource) -> DataExtractor:
    """
    Pick the extractor for a source.

    - Known provider with a credential: that provider's adapter.
    - Known provider without a credential: the mock extractor, carrying a
      degradation notice that ends up in the run summary.
    - "mock" or a name with no adapter (mls, retsly, rentdata): the mock
      extractor.

    Args:
        source: Registered source descriptor

    Returns:
        Extractor instance
    """
    extractor_cls = EXTRACTORS.get(source.name)

    if extractor_cls is None:
        if source.name != DataSourceName.MOCK:
            logger.info("no_extractor_for_source", source=source.name.value, using="mock")
        return MockDataExtractor()

    if not source.has_credential():
        notice = f"{source.name.value} API key not configured; using mock data"
        logger.warning("extractor_degraded_to_mock", source=source.name.value, reason="missing_api_key")
        return MockDataExtractor(degradation_notice=notice)

    return extractor_cls(source)
