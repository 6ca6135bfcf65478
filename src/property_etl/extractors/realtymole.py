"""
Realty Mole Data Extractor

Reads property records from the Realty Mole API on RapidAPI.
"""
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

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


class RealtyMoleExtractor:
    """
    Extractor for the Realty Mole property records endpoint.

    The response body is a bare JSON array of records.
    """

    name = "realtymole"
    degradation_notice = None

    REQUEST_INTERVAL_SECONDS = 1.2
    MAX_RECORDS = 50
    DEFAULT_COVERAGE = ["AZ", "TX", "FL", "GA", "NV"]

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
            raise ValueError("Realty Mole extractor requires an API key")

        self.base_url = (source.base_url or settings.realtymole_base_url).rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update({
            "X-RapidAPI-Key": source.credential(),
            "X-RapidAPI-Host": urlparse(self.base_url).netloc,
            "User-Agent": settings.etl_user_agent,
        })
        self.rate_limiter = rate_limiter or RateLimiter.for_source(source, self.REQUEST_INTERVAL_SECONDS)
        self.timeout = settings.http_timeout_seconds
        logger.info("realtymole_extractor_initialized", base_url=self.base_url)

    async def extract(self, source: PropertyDataSource) -> List[RawPropertyData]:
        regions = source.coverage or self.DEFAULT_COVERAGE
        return await sweep_areas(self.name, regions, self._search_area, self.rate_limiter)

    def _search_area(self, region: str) -> List[RawPropertyData]:
        area = resolve_search_area(region)
        params = {"city": area.city, "state": area.state, "limit": self.MAX_RECORDS}
        data = request_json(
            self.session, "GET", f"{self.base_url}/properties",
            provider=self.name, area=area.label, timeout=self.timeout, params=params,
        )

        if not isinstance(data, list):
            logger.warning("no_properties_in_response", provider=self.name, area=area.label)
            return []

        return map_records(self.name, data, lambda record: self._map_record(record, area))

    def _map_record(self, record: Dict[str, Any], area: SearchArea) -> RawPropertyData:
        owner_type = str(record.get("ownerType") or "").lower()

        return RawPropertyData(
            address=record.get("formattedAddress") or record.get("addressLine1") or "Unknown Address",
            city=record.get("city") or area.city,
            state=record.get("state") or area.state,
            zip=record.get("zipCode"),
            latitude=to_float(record.get("latitude")),
            longitude=to_float(record.get("longitude")),
            owner_name=record.get("ownerName"),
            owner_type=self.OWNER_TYPES.get(owner_type, OwnerType.UNKNOWN).value,
            property_type=record.get("propertyType") or "residential",
            bedrooms=record.get("bedrooms"),
            bathrooms=record.get("bathrooms"),
            square_feet=record.get("squareFootage"),
            lot_size=record.get("lotSize"),
            year_built=record.get("yearBuilt"),
            assessed_value=record.get("assessedValue"),
            estimated_value=record.get("price"),
            equity_percent=record.get("equityPercent"),
            mortgage_status=record.get("mortgageStatus") or "unknown",
            lien_status=record.get("lienStatus") or "none",
            tags=record.get("tags") or [],
            status=record.get("status") or "active",
            source=self.name,
            raw_data=encode_raw_payload(record),
        )
