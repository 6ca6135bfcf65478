"""
County Assessor Data Extractor

Queries individual county assessor APIs. Coverage entries are county keys
(e.g. "LA", "MIAMI_DADE") rather than state codes.
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

COUNTY_ENDPOINTS: Dict[str, str] = {
    "LA": "https://assessor.lacounty.gov/api",
    "ORANGE": "https://assessor.ocgov.com/api",
    "SAN_DIEGO": "https://arcc.co.san-diego.ca.us/api",
    "MIAMI_DADE": "https://www.miamidade.gov/pa/api",
    "HARRIS": "https://www.hcad.org/api",
    "MARICOPA": "https://assessor.maricopa.gov/api",
    "CLARK": "https://assessor.lacounty.gov/api",
    "KING": "https://info.kingcounty.gov/assessor/api",
    "COOK": "https://www.cookcountyassessor.com/api",
    "PHILADELPHIA": "https://www.phila.gov/api",
}


class CountyAssessorExtractor:
    """Extractor for county assessor record APIs."""

    name = "county_assessor"
    degradation_notice = None

    REQUEST_INTERVAL_SECONDS = 2.0
    MAX_RECORDS = 100
    DEFAULT_COVERAGE = ["LA", "ORANGE", "SAN_DIEGO"]
    DEFAULT_STATE = "CA"

    OWNER_TYPES = {
        "individual": OwnerType.INDIVIDUAL,
        "llc": OwnerType.LLC,
        "corporation": OwnerType.CORPORATION,
        "trust": OwnerType.TRUST,
        "partnership": OwnerType.PARTNERSHIP,
        "absentee": OwnerType.ABSENTEE,
    }

    def __init__(
        self,
        source: PropertyDataSource,
        session: Optional[requests.Session] = None,
        rate_limiter: Optional[RateLimiter] = None,
        endpoints: Optional[Dict[str, str]] = None,
    ):
        """
        Args:
            source: Descriptor carrying the API key
            session: Override the HTTP session (for testing)
            rate_limiter: Override the request limiter (for testing)
            endpoints: Override the county key to assessor URL table
        """
        if not source.has_credential():
            raise ValueError("County assessor extractor requires an API key")

        self.endpoints = dict(endpoints or COUNTY_ENDPOINTS)
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {source.credential()}",
            "Content-Type": "application/json",
            "User-Agent": settings.etl_user_agent,
        })
        self.rate_limiter = rate_limiter or RateLimiter.for_source(source, self.REQUEST_INTERVAL_SECONDS)
        self.timeout = settings.http_timeout_seconds
        logger.info("county_assessor_extractor_initialized", counties=len(self.endpoints))

    async def extract(self, source: PropertyDataSource) -> List[RawPropertyData]:
        counties = source.coverage or self.DEFAULT_COVERAGE
        return await sweep_areas(self.name, counties, self._search_area, self.rate_limiter)

    def _search_area(self, county: str) -> List[RawPropertyData]:
        endpoint = self.endpoints.get(county.upper())
        if endpoint is None:
            raise ValueError(f"No endpoint configured for county: {county}")

        body = {
            "county": county,
            "propertyType": "residential",
            "limit": self.MAX_RECORDS,
            "includeAssessorData": True,
        }
        data = request_json(
            self.session, "POST", f"{endpoint.rstrip('/')}/properties/search",
            provider=self.name, area=county, timeout=self.timeout,
            json=body, headers={"X-County": county},
        )

        records = (data.get("properties") if isinstance(data, dict) else None) or []
        return map_records(self.name, records, lambda record: self._map_record(record, county))

    def _map_record(self, record: Dict[str, Any], county: str) -> RawPropertyData:
        owner_type = str(record.get("ownerType") or "").lower()
        audit = {**record, "county": county, "assessorData": record.get("assessorData") or {}}

        return RawPropertyData(
            address=record.get("address") or "Unknown Address",
            city=record.get("city") or county,
            state=record.get("state") or self.DEFAULT_STATE,
            zip=record.get("zipCode") or "",
            latitude=to_float(record.get("latitude")),
            longitude=to_float(record.get("longitude")),
            owner_name=record.get("ownerName") or "Unknown Owner",
            owner_type=self.OWNER_TYPES.get(owner_type, OwnerType.UNKNOWN).value,
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
            raw_data=encode_raw_payload(audit),
        )
