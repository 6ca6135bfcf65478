"""
Mock Property Extractor

Deterministic sample data used for the "mock" source and as the stand-in
when a provider has no credential configured.
"""
from typing import Any, Dict, List, Optional

from src.property_etl.models.property import RawPropertyData, encode_raw_payload
from src.property_etl.models.source import PropertyDataSource
from src.property_etl.utils.logger import get_logger

logger = get_logger(__name__)

SAMPLE_PROPERTIES: List[Dict[str, Any]] = [
    {
        "address": "1234 Main Street",
        "city": "Philadelphia",
        "state": "PA",
        "zip": "19102",
        "latitude": 39.9526,
        "longitude": -75.1652,
        "owner_name": "John Smith",
        "owner_type": "Individual",
        "property_type": "Single Family",
        "bedrooms": 3,
        "bathrooms": 2,
        "square_feet": 1800,
        "lot_size": 5000,
        "year_built": 1985,
        "assessed_value": 250000,
        "estimated_value": 275000,
        "equity_percent": 65,
        "mortgage_status": "Active",
        "lien_status": "Clear",
        "tags": ["pre-foreclosure", "tax-delinquent"],
        "status": "active",
    },
    {
        "address": "5678 Oak Avenue",
        "city": "New York",
        "state": "NY",
        "zip": "10001",
        "latitude": 40.7505,
        "longitude": -73.9934,
        "owner_name": "Sarah Johnson",
        "owner_type": "Individual",
        "property_type": "Condo",
        "bedrooms": 2,
        "bathrooms": 1,
        "square_feet": 1200,
        "lot_size": 0,
        "year_built": 1995,
        "assessed_value": 450000,
        "estimated_value": 485000,
        "equity_percent": 45,
        "mortgage_status": "Active",
        "lien_status": "Clear",
        "tags": ["investment", "cash-flow-positive"],
        "status": "active",
    },
    {
        "address": "9012 Pine Street",
        "city": "Los Angeles",
        "state": "CA",
        "zip": "90210",
        "latitude": 34.0901,
        "longitude": -118.4065,
        "owner_name": "Michael Davis",
        "owner_type": "LLC",
        "property_type": "Multi-Family",
        "bedrooms": 8,
        "bathrooms": 4,
        "square_feet": 3200,
        "lot_size": 8000,
        "year_built": 1975,
        "assessed_value": 850000,
        "estimated_value": 920000,
        "equity_percent": 30,
        "mortgage_status": "Active",
        "lien_status": "Clear",
        "tags": ["multi-unit", "cash-flow-positive"],
        "status": "active",
    },
]


class MockDataExtractor:
    """
    Returns the same three sample properties on every call.

    Coverage on the descriptor is ignored.
    """

    name = "mock"

    def __init__(self, degradation_notice: Optional[str] = None):
        """
        Args:
            degradation_notice: Reason this mock is standing in for a real
                provider (None when the mock source is used on purpose)
        """
        self.degradation_notice = degradation_notice

    async def extract(self, source: PropertyDataSource) -> List[RawPropertyData]:
        records = [
            RawPropertyData(
                **sample,
                source="mock",
                raw_data=encode_raw_payload(sample),
            )
            for sample in SAMPLE_PROPERTIES
        ]
        logger.info(
            "mock_properties_generated",
            source=source.name.value,
            count=len(records),
            degraded=self.degradation_notice is not None
        )
        return records
