"""
Extractor Interface and Shared Helpers

Extractors turn one data source descriptor into provider-shaped raw records.
Provider adapters share the area sweep and the HTTP/JSON request helper here,
but each owns its own request shape and record mapping.
"""
import asyncio
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Protocol, runtime_checkable

import requests
from pydantic import ValidationError

from src.property_etl.exceptions import ProviderRequestError
from src.property_etl.extractors.rate_limiter import RateLimiter
from src.property_etl.models.property import RawPropertyData
from src.property_etl.models.source import PropertyDataSource
from src.property_etl.utils.logger import get_logger

logger = get_logger(__name__)


@runtime_checkable
class DataExtractor(Protocol):
    """
    Anything that can pull raw property records for a source.

    Attributes:
        name: Extractor tag used in logs
        degradation_notice: Set when the extractor is standing in for an
            unavailable provider; surfaced in the run summary
    """

    name: str
    degradation_notice: Optional[str]

    async def extract(self, source: PropertyDataSource) -> List[RawPropertyData]:
        ...


@dataclass(frozen=True)
class SearchArea:
    """Metro used to query a provider for one covered state."""

    city: str
    state: str
    zip: str

    @property
    def label(self) -> str:
        return f"{self.city}, {self.state}"


DEFAULT_SEARCH_AREAS: Dict[str, SearchArea] = {
    "AZ": SearchArea("Phoenix", "AZ", "85001"),
    "TX": SearchArea("Dallas", "TX", "75201"),
    "FL": SearchArea("Miami", "FL", "33101"),
    "GA": SearchArea("Atlanta", "GA", "30301"),
    "NV": SearchArea("Las Vegas", "NV", "89101"),
    "PA": SearchArea("Philadelphia", "PA", "19102"),
    "NY": SearchArea("New York", "NY", "10001"),
    "CA": SearchArea("Los Angeles", "CA", "90001"),
}


def resolve_search_area(region: str) -> SearchArea:
    """
    Look up the search metro for a coverage region code.

    Raises:
        ValueError: Region has no configured search metro
    """
    area = DEFAULT_SEARCH_AREAS.get(region.strip().upper())
    if area is None:
        raise ValueError(f"No search area configured for region: {region}")
    return area


def request_json(
    session: requests.Session,
    method: str,
    url: str,
    provider: str,
    area: str,
    timeout: float,
    **kwargs: Any,
) -> Any:
    """
    Issue one provider request and decode its JSON body.

    Raises:
        ProviderRequestError: Network failure, non-2xx status, or a body
            that is not JSON
    """
    try:
        response = session.request(method, url, timeout=timeout, **kwargs)
        response.raise_for_status()
    except requests.RequestException as e:
        raise ProviderRequestError(provider, area, str(e)) from e

    try:
        payload = response.json()
    except ValueError as e:
        raise ProviderRequestError(provider, area, f"invalid JSON response: {e}") from e

    logger.debug(
        "api_request_successful",
        provider=provider,
        area=area,
        status_code=response.status_code
    )
    return payload


def map_records(
    provider: str,
    records: Iterable[Dict[str, Any]],
    mapper: Callable[[Dict[str, Any]], RawPropertyData],
) -> List[RawPropertyData]:
    """
    Apply a provider mapping to each record, dropping records that fail.

    Args:
        provider: Provider tag for logs
        records: Provider-shaped dicts
        mapper: Record to RawPropertyData mapping

    Returns:
        Successfully mapped records
    """
    mapped = []
    failures = 0

    for idx, record in enumerate(records):
        try:
            mapped.append(mapper(record))
        except (ValidationError, AttributeError, TypeError, ValueError) as e:
            failures += 1
            logger.warning(
                "record_mapping_failed",
                provider=provider,
                record_index=idx,
                error=str(e)
            )

    if failures:
        logger.warning(
            "mapping_errors_occurred",
            provider=provider,
            total_errors=failures,
            success_count=len(mapped)
        )

    return mapped


async def sweep_areas(
    provider: str,
    regions: List[str],
    search: Callable[[str], List[RawPropertyData]],
    rate_limiter: RateLimiter,
) -> List[RawPropertyData]:
    """
    Query each coverage region in turn and collect the results.

    Each request waits for a rate-limit slot, then runs in a worker thread.
    A failing region is logged and skipped; the sweep continues.

    Args:
        provider: Provider tag for logs
        regions: Coverage region codes, queried in order
        search: Blocking per-region request function
        rate_limiter: Limiter consulted before every request

    Returns:
        Records from every region that succeeded
    """
    records: List[RawPropertyData] = []
    failed = 0

    for region in regions:
        await rate_limiter.acquire()
        try:
            area_records = await asyncio.to_thread(search, region)
        except Exception as e:
            failed += 1
            logger.error(
                "area_extraction_failed",
                provider=provider,
                area=region,
                error=str(e),
                error_type=type(e).__name__
            )
            continue

        records.extend(area_records)
        logger.info("area_extracted", provider=provider, area=region, count=len(area_records))

    logger.info(
        "extraction_complete",
        provider=provider,
        areas=len(regions),
        failed_areas=failed,
        total_records=len(records)
    )
    return records


def first_present(*values: Any) -> Any:
    """Return the first truthy value, or None."""
    for value in values:
        if value:
            return value
    return None


def to_float(value: Any) -> Optional[float]:
    """Parse a provider number; blanks and zero come back as None."""
    if value in (None, ""):
        return None
    number = float(value)
    return number or None
