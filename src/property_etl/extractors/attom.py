"""
ATTOM Data Extractor

Queries the ATTOM property search API for single-family homes in each
covered state's search metro.
"""
from typing import Any, Dict, List, Optional

import requests

from config.settings import settings
from src.property_etl.extractors.base import (
    SearchArea,
    first_present,
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


class AttomExtractor:
    """
    Extractor for the ATTOM property API.

    Sends one GET per covered state, keyed by the metro's postal code.
    """

    name = "attom"
    degradation_notice = None

    REQUEST_INTERVAL_SECONDS = 1.0
    MAX_RECORDS = 50
    DEFAULT_COVERAGE = ["AZ", "TX", "FL", "GA", "NV"]

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
        """
        Args:
            source: Descriptor carrying the API key and optional endpoint
            session: Override the HTTP session (for testing)
            rate_limiter: Override the request limiter (for testing)

        Raises:
            ValueError: Descriptor has no API key
        """
        if not source.has_credential():
            raise ValueError("ATTOM extractor requires an API key")

        self.base_url = (source.base_url or settings.attom_base_url).rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update({
            "Accept": "application/json",
            "User-Agent": settings.etl_user_agent,
            "apikey": source.credential(),
        })
        self.rate_limiter = rate_limiter or RateLimiter.for_source(source, self.REQUEST_INTERVAL_SECONDS)
        self.timeout = settings.http_timeout_seconds
        logger.info("attom_extractor_initialized", base_url=self.base_url)

    async def extract(self, source: PropertyDataSource) -> List[RawPropertyData]:
        regions = source.coverage or self.DEFAULT_COVERAGE
        return await sweep_areas(self.name, regions, self._search_area, self.rate_limiter)

    def _search_area(self, region: str) -> List[RawPropertyData]:
        area = resolve_search_area(region)
        params = {
            "postalcode": area.zip,
            "propertytype": "SFR",
            "orderby": "assessedvalue",
            "pagesize": self.MAX_RECORDS,
        }
        data = request_json(
            self.session, "GET", f"{self.base_url}/property/search",
            provider=self.name, area=area.label, timeout=self.timeout, params=params,
        )

        records = data.get("property") if isinstance(data, dict) else None
        if not isinstance(records, list):
            logger.warning("no_properties_in_response", provider=self.name, area=area.label)
            return []

        return map_records(self.name, records, lambda record: self._map_record(record, area))

    def _map_record(self, record: Dict[str, Any], area: SearchArea) -> RawPropertyData:
        # oneLine reads "123 MAIN ST, PHOENIX, AZ 85001"
        one_line = (record.get("address") or {}).get("oneLine") or ""
        parts = [part.strip() for part in one_line.split(",")]
        state_zip = parts[2].split() if len(parts) > 2 else []

        location = record.get("location") or {}
        building = record.get("building") or {}
        rooms = building.get("rooms") or {}
        assessment = record.get("assessment") or {}
        financial = record.get("financial") or {}
        owner = record.get("owner") or {}

        return RawPropertyData(
            address=parts[0] or one_line,
            city=first_present(parts[1] if len(parts) > 1 else None, area.city),
            state=state_zip[0] if state_zip else area.state,
            zip=state_zip[1] if len(state_zip) > 1 else area.zip,
            latitude=to_float(first_present(location.get("latitude"), record.get("latitude"))),
            longitude=to_float(first_present(location.get("longitude"), record.get("longitude"))),
            owner_name=owner.get("name") or "",
            owner_type=self.OWNER_TYPES.get(owner.get("type"), OwnerType.INDIVIDUAL).value,
            property_type="residential",
            bedrooms=rooms.get("beds"),
            bathrooms=rooms.get("baths"),
            square_feet=(building.get("size") or {}).get("livingsize"),
            lot_size=(record.get("lot") or {}).get("lotsize"),
            year_built=(building.get("construction") or {}).get("yearbuilt"),
            assessed_value=(assessment.get("assessed") or {}).get("assdttlvalue"),
            estimated_value=(assessment.get("market") or {}).get("tav"),
            mortgage_status=(financial.get("loan") or {}).get("type") or "unknown",
            lien_status=(financial.get("lien") or {}).get("type") or "none",
            status="active",
            source=self.name,
            raw_data=encode_raw_payload(record),
        )
