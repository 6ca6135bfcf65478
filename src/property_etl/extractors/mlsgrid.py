"""
MLS Grid Data Extractor

Searches MLS Grid listings by coverage region.
"""
from typing import Any, Dict, List, Optional

import requests

from config.settings import settings
from src.property_etl.extractors.base import map_records, request_json, sweep_areas, to_float
from src.property_etl.extractors.rate_limiter import RateLimiter
from src.property_etl.models.property import OwnerType, RawPropertyData, encode_raw_payload
from src.property_etl.models.source import PropertyDataSource
from src.property_etl.utils.logger import get_logger

logger = get_logger(__name__)


class MLSGridExtractor:
    """
    Extractor for the MLS Grid search API.

    Regions are sent to the API as-is (state codes), so no metro lookup
    is needed.
    """

    name = "mlsgrid"
    degradation_notice = None

    REQUEST_INTERVAL_SECONDS = 1.0
    MAX_RECORDS = 100
    DEFAULT_COVERAGE = ["CA", "TX", "FL"]

    OWNER_TYPES = {
        "individual": OwnerType.INDIVIDUAL,
        "llc": OwnerType.LLC,
        "corporation": OwnerType.CORPORATION,
        "trust": OwnerType.TRUST,
        "partnership": OwnerType.PARTNERSHIP,
    }

    def __init__(
        self,
        source: PropertyDataSource,
        session: Optional[requests.Session] = None,
        rate_limiter: Optional[RateLimiter] = None,
    ):
        if not source.has_credential():
            raise ValueError("MLS Grid extractor requires an API key")

        self.base_url = (source.base_url or settings.mlsgrid_base_url).rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {source.credential()}",
            "Content-Type": "application/json",
            "User-Agent": settings.etl_user_agent,
        })
        self.rate_limiter = rate_limiter or RateLimiter.for_source(source, self.REQUEST_INTERVAL_SECONDS)
        self.timeout = settings.http_timeout_seconds
        logger.info("mlsgrid_extractor_initialized", base_url=self.base_url)

    async def extract(self, source: PropertyDataSource) -> List[RawPropertyData]:
        regions = source.coverage or self.DEFAULT_COVERAGE
        return await sweep_areas(self.name, regions, self._search_area, self.rate_limiter)

    def _search_area(self, region: str) -> List[RawPropertyData]:
        body = {"location": region, "propertyType": "residential", "limit": self.MAX_RECORDS}
        data = request_json(
            self.session, "POST", f"{self.base_url}/properties/search",
            provider=self.name, area=region, timeout=self.timeout, json=body,
        )

        records = (data.get("properties") if isinstance(data, dict) else None) or []
        return map_records(self.name, records, lambda record: self._map_record(record, region))

    def _map_record(self, record: Dict[str, Any], region: str) -> RawPropertyData:
        owner_type = str(record.get("ownerType") or "").lower()

        return RawPropertyData(
            address=record.get("address") or "Unknown Address",
            city=record.get("city") or region,
            state=record.get("state") or region,
            zip=record.get("postalCode") or "",
            latitude=to_float(record.get("latitude")),
            longitude=to_float(record.get("longitude")),
            owner_name=record.get("ownerName") or "Unknown Owner",
            owner_type=self.OWNER_TYPES.get(owner_type, OwnerType.INDIVIDUAL).value,
            property_type=record.get("propertyType") or "residential",
            bedrooms=record.get("bedrooms"),
            bathrooms=record.get("bathrooms"),
            square_feet=record.get("squareFootage"),
            lot_size=record.get("lotSize"),
            year_built=record.get("yearBuilt"),
            assessed_value=record.get("assessedValue"),
            estimated_value=record.get("estimatedValue"),
            equity_percent=record.get("equityPercent"),
            mortgage_status=record.get("mortgageStatus") or "unknown",
            lien_status=record.get("lienStatus") or "none",
            tags=record.get("tags") or [],
            status=record.get("status") or "active",
            source=self.name,
            raw_data=encode_raw_payload(record),
        )
