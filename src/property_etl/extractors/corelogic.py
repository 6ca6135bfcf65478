"""
CoreLogic Data Extractor

Queries the CoreLogic property search API by metro postal code.
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


class CoreLogicExtractor:
    """Extractor for the CoreLogic property API (bearer token auth)."""

    name = "corelogic"
    degradation_notice = None

    REQUEST_INTERVAL_SECONDS = 1.5
    MAX_RECORDS = 50
    DEFAULT_COVERAGE = ["AZ", "TX", "FL"]

    OWNER_TYPES = {
        "Individual": OwnerType.INDIVIDUAL,
        "LLC": OwnerType.LLC,
        "Corporation": OwnerType.CORPORATION,
        "Trust": OwnerType.TRUST,
        "Partnership": OwnerType.PARTNERSHIP,
    }

    def __init__(
        self,
        source: PropertyDataSource,
        session: Optional[requests.Session] = None,
        rate_limiter: Optional[RateLimiter] = None,
    ):
        if not source.has_credential():
            raise ValueError("CoreLogic extractor requires an API key")

        self.base_url = (source.base_url or settings.corelogic_base_url).rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {source.credential()}",
            "Accept": "application/json",
            "User-Agent": settings.etl_user_agent,
        })
        self.rate_limiter = rate_limiter or RateLimiter.for_source(source, self.REQUEST_INTERVAL_SECONDS)
        self.timeout = settings.http_timeout_seconds
        logger.info("corelogic_extractor_initialized", base_url=self.base_url)

    async def extract(self, source: PropertyDataSource) -> List[RawPropertyData]:
        regions = source.coverage or self.DEFAULT_COVERAGE
        return await sweep_areas(self.name, regions, self._search_area, self.rate_limiter)

    def _search_area(self, region: str) -> List[RawPropertyData]:
        area = resolve_search_area(region)
        params = {"zipCode": area.zip, "propertyType": "SFR", "limit": self.MAX_RECORDS}
        data = request_json(
            self.session, "GET", f"{self.base_url}/properties/search",
            provider=self.name, area=area.label, timeout=self.timeout, params=params,
        )

        records = data.get("properties") if isinstance(data, dict) else None
        if not isinstance(records, list):
            logger.warning("no_properties_in_response", provider=self.name, area=area.label)
            return []

        return map_records(self.name, records, lambda record: self._map_record(record, area))

    def _map_record(self, record: Dict[str, Any], area: SearchArea) -> RawPropertyData:
        address = record.get("address") or {}
        location = record.get("location") or {}
        owner = record.get("owner") or {}
        details = record.get("propertyDetails") or {}
        valuation = record.get("valuation") or {}
        financial = record.get("financial") or {}

        return RawPropertyData(
            address=address.get("streetAddress") or "",
            city=address.get("city") or area.city,
            state=address.get("state") or area.state,
            zip=address.get("zipCode") or area.zip,
            latitude=to_float(location.get("latitude")),
            longitude=to_float(location.get("longitude")),
            owner_name=owner.get("name") or "",
            owner_type=self.OWNER_TYPES.get(owner.get("type"), OwnerType.INDIVIDUAL).value,
            property_type="residential",
            bedrooms=details.get("bedrooms"),
            bathrooms=details.get("bathrooms"),
            square_feet=details.get("squareFootage"),
            lot_size=details.get("lotSize"),
            year_built=details.get("yearBuilt"),
            assessed_value=valuation.get("assessedValue"),
            estimated_value=valuation.get("estimatedValue"),
            equity_percent=financial.get("equityPercentage"),
            mortgage_status=financial.get("mortgageStatus") or "unknown",
            lien_status=financial.get("lienStatus") or "none",
            status="active",
            source=self.name,
            raw_data=encode_raw_payload(record),
        )
