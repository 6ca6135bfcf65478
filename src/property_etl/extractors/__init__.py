"""
Extractors

Provider adapters that pull raw property records, plus the mock fallback.
"""
from src.property_etl.extractors.attom import AttomExtractor
from src.property_etl.extractors.base import (
    DEFAULT_SEARCH_AREAS,
    DataExtractor,
    SearchArea,
    resolve_search_area,
    sweep_areas,
)
from src.property_etl.extractors.corelogic import CoreLogicExtractor
from src.property_etl.extractors.county_assessor import COUNTY_ENDPOINTS, CountyAssessorExtractor
from src.property_etl.extractors.factory import EXTRACTORS, ExtractorFactory, build_extractor
from src.property_etl.extractors.mlsgrid import MLSGridExtractor
from src.property_etl.extractors.mock_extractor import MockDataExtractor
from src.property_etl.extractors.rate_limiter import RateLimiter
from src.property_etl.extractors.realtymole import RealtyMoleExtractor
from src.property_etl.extractors.rentspree import RentSpreeExtractor

__all__ = [
    "AttomExtractor",
    "COUNTY_ENDPOINTS",
    "CoreLogicExtractor",
    "CountyAssessorExtractor",
    "DEFAULT_SEARCH_AREAS",
    "DataExtractor",
    "EXTRACTORS",
    "ExtractorFactory",
    "MLSGridExtractor",
    "MockDataExtractor",
    "RateLimiter",
    "RealtyMoleExtractor",
    "RentSpreeExtractor",
    "SearchArea",
    "build_extractor",
    "resolve_search_area",
    "sweep_areas",
]
