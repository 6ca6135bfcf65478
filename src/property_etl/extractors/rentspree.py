"""
RentSpree Data Extractor

Searches RentSpree listings by "City, ST" location string.
"""
from typing import Any, Dict, List, Optional

import requests

from config.settings import settings
from src.property_etl.extractors.base import (
    SearchArea,
    map_records,
    request_json,
    resolve_search_area,
    sweep_areas,
    to_float,
)
from src.property_etl.extractors.rate_limiter import RateLimiter
from src.property_etl.models.property import OwnerType, RawPropertyData, encode_raw_payload
from src.property_etl.models.source import PropertyDataSource
from src.property_etl.utils.logger import get_logger

logger = get_logger(__name__)


class RentSpreeExtractor:
    """Extractor for the RentSpree property search API."""

    name = "rentspree"
    degradation_notice = None

    REQUEST_INTERVAL_SECONDS = 1.0
    MAX_RECORDS = 50
    DEFAULT_COVERAGE = ["AZ", "TX", "FL"]

    # Keys are lower-cased before lookup
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
            raise ValueError("RentSpree extractor requires an API key")

        self.base_url = (source.base_url or settings.rentspree_base_url).rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {source.credential()}",
            "Content-Type": "application/json",
            "User-Agent": settings.etl_user_agent,
        })
        self.rate_limiter = rate_limiter or RateLimiter.for_source(source, self.REQUEST_INTERVAL_SECONDS)
        self.timeout = settings.http_timeout_seconds
        logger.info("rentspree_extractor_initialized", base_url=self.base_url)

    async def extract(self, source: PropertyDataSource) -> List[RawPropertyData]:
        regions = source.coverage or self.DEFAULT_COVERAGE
        return await sweep_areas(self.name, regions, self._search_area, self.rate_limiter)

    def _search_area(self, region: str) -> List[RawPropertyData]:
        area = resolve_search_area(region)
        body = {
            "location": area.label,
            "property_type": "single_family",
            "limit": self.MAX_RECORDS,
        }
        data = request_json(
            self.session, "POST", f"{self.base_url}/properties/search",
            provider=self.name, area=area.label, timeout=self.timeout, json=body,
        )

        records = (data.get("properties") if isinstance(data, dict) else None) or []
        return map_records(self.name, records, lambda record: self._map_record(record, area))

    def _map_record(self, record: Dict[str, Any], area: SearchArea) -> RawPropertyData:
        owner_type = str(record.get("owner_type") or "").lower()

        return RawPropertyData(
            address=record.get("address") or "Unknown Address",
            city=record.get("city") or area.city,
            state=record.get("state") or area.state,
            zip=record.get("zip_code"),
            latitude=to_float(record.get("latitude")),
            longitude=to_float(record.get("longitude")),
            owner_name=record.get("owner_name"),
            owner_type=self.OWNER_TYPES.get(owner_type, OwnerType.UNKNOWN).value,
            property_type=record.get("property_type") or "residential",
            bedrooms=record.get("bedrooms"),
            bathrooms=record.get("bathrooms"),
            square_feet=record.get("square_feet"),
            lot_size=record.get("lot_size"),
            year_built=record.get("year_built"),
            assessed_value=record.get("assessed_value"),
            estimated_value=record.get("estimated_value"),
            equity_percent=record.get("equity_percent"),
            mortgage_status=record.get("mortgage_status") or "unknown",
            lien_status=record.get("lien_status") or "none",
            tags=record.get("tags") or [],
            status=record.get("status") or "active",
            source=self.name,
            raw_data=encode_raw_payload(record),
        )
