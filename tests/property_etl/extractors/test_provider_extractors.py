"""
Unit tests for provider extractors, the area sweep and extractor selection
"""
import asyncio
from unittest.mock import MagicMock, Mock

import pytest
import requests

from config.settings import settings
from src.property_etl.extractors.attom import AttomExtractor
from src.property_etl.extractors.base import resolve_search_area, sweep_areas
from src.property_etl.extractors.corelogic import CoreLogicExtractor
from src.property_etl.extractors.county_assessor import CountyAssessorExtractor
from src.property_etl.extractors.factory import build_extractor
from src.property_etl.extractors.mlsgrid import MLSGridExtractor
from src.property_etl.extractors.mock_extractor import MockDataExtractor
from src.property_etl.extractors.rate_limiter import RateLimiter
from src.property_etl.extractors.realtymole import RealtyMoleExtractor
from src.property_etl.extractors.rentspree import RentSpreeExtractor
from src.property_etl.models.property import decode_raw_payload
from src.property_etl.models.source import DataSourceName

ATTOM_RECORD = {
    "address": {"oneLine": "4529 Winona Ct, Phoenix, AZ 85004"},
    "location": {"latitude": "33.4484", "longitude": "-112.0740"},
    "owner": {"name": "Desert Holdings", "type": "LLC"},
    "building": {
        "rooms": {"beds": 3, "baths": 2},
        "size": {"livingsize": 1600},
        "construction": {"yearbuilt": 1962},
    },
    "lot": {"lotsize": 6000},
    "assessment": {"assessed": {"assdttlvalue": 210000}, "market": {"tav": 260000}},
}


def json_response(payload):
    response = Mock()
    response.status_code = 200
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


def mock_session(*responses):
    session = MagicMock()
    session.request.side_effect = list(responses)
    return session


def run_extract(extractor, source):
    return asyncio.run(extractor.extract(source))


@pytest.fixture
def attom_source(make_source):
    return make_source(DataSourceName.ATTOM, api_key="attom-key", coverage=["AZ"])


class TestAttomExtractor:
    """Tests for AttomExtractor"""

    def test_requires_credential(self, make_source):
        with pytest.raises(ValueError):
            AttomExtractor(make_source(DataSourceName.ATTOM))

    def test_initialization(self, attom_source):
        extractor = AttomExtractor(attom_source)
        assert extractor.base_url == settings.attom_base_url
        assert extractor.session.headers["apikey"] == "attom-key"

    def test_maps_records(self, attom_source):
        session = mock_session(json_response({"property": [ATTOM_RECORD]}))
        extractor = AttomExtractor(attom_source, session=session, rate_limiter=RateLimiter())

        records = run_extract(extractor, attom_source)

        assert len(records) == 1
        record = records[0]
        assert record.address == "4529 Winona Ct"
        assert record.city == "Phoenix"
        assert record.state == "AZ"
        assert record.zip == "85004"
        assert record.latitude == pytest.approx(33.4484)
        assert record.owner_type == "llc"
        assert record.year_built == 1962
        assert record.estimated_value == 260000
        assert record.mortgage_status == "unknown"
        assert record.lien_status == "none"
        assert record.source == "attom"
        assert decode_raw_payload(record.raw_data) == ATTOM_RECORD

    def test_non_finite_value_drops_only_that_record(self, attom_source):
        bad = {**ATTOM_RECORD, "assessment": {"market": {"tav": "NaN"}}}
        session = mock_session(json_response({"property": [ATTOM_RECORD, bad]}))
        extractor = AttomExtractor(attom_source, session=session, rate_limiter=RateLimiter())

        records = run_extract(extractor, attom_source)

        assert len(records) == 1
        assert records[0].estimated_value == 260000

    def test_request_shape(self, attom_source):
        session = mock_session(json_response({"property": []}))
        extractor = AttomExtractor(attom_source, session=session, rate_limiter=RateLimiter())

        run_extract(extractor, attom_source)

        args, kwargs = session.request.call_args
        assert args == ("GET", f"{settings.attom_base_url}/property/search")
        assert kwargs["params"]["postalcode"] == "85001"
        assert kwargs["timeout"] == settings.http_timeout_seconds

    @pytest.mark.parametrize("owner_type,expected", [
        ("Partnership", "partnership"), ("Trust", "trust"), (None, "individual"), ("Other", "individual"),
    ])
    def test_owner_type_mapping(self, attom_source, owner_type, expected):
        record = {**ATTOM_RECORD, "owner": {"name": "X", "type": owner_type}}
        session = mock_session(json_response({"property": [record]}))
        extractor = AttomExtractor(attom_source, session=session, rate_limiter=RateLimiter())

        assert run_extract(extractor, attom_source)[0].owner_type == expected

    def test_failed_area_is_skipped(self, make_source):
        source = make_source(DataSourceName.ATTOM, api_key="k", coverage=["AZ", "TX", "FL"])
        failing = Mock()
        failing.raise_for_status.side_effect = requests.HTTPError("500 Server Error")
        session = mock_session(
            requests.ConnectionError("connection reset"),
            failing,
            json_response({"property": [ATTOM_RECORD]}),
        )
        extractor = AttomExtractor(source, session=session, rate_limiter=RateLimiter())

        records = run_extract(extractor, source)

        assert len(records) == 1
        assert session.request.call_count == 3

    def test_unknown_region_is_skipped(self, make_source):
        source = make_source(DataSourceName.ATTOM, api_key="k", coverage=["ZZ", "AZ"])
        session = mock_session(json_response({"property": [ATTOM_RECORD]}))
        extractor = AttomExtractor(source, session=session, rate_limiter=RateLimiter())

        assert len(run_extract(extractor, source)) == 1
        assert session.request.call_count == 1

    def test_invalid_json_is_skipped(self, attom_source):
        response = json_response(None)
        response.json.side_effect = ValueError("Expecting value")
        extractor = AttomExtractor(attom_source, session=mock_session(response), rate_limiter=RateLimiter())

        assert run_extract(extractor, attom_source) == []


class TestCoreLogicExtractor:
    """Tests for CoreLogicExtractor"""

    def test_maps_records(self, make_source):
        source = make_source(DataSourceName.CORELOGIC, api_key="token", coverage=["TX"])
        payload = {"properties": [{
            "address": {"streetAddress": "200 Elm St", "zipCode": "75202"},
            "location": {"latitude": 32.78, "longitude": -96.80},
            "owner": {"name": "Acme Corp", "type": "Corporation"},
            "propertyDetails": {"bedrooms": 4, "squareFootage": 2100, "yearBuilt": 2001},
            "valuation": {"assessedValue": 300000},
            "financial": {"equityPercentage": 55, "mortgageStatus": "current"},
        }]}
        session = mock_session(json_response(payload))
        extractor = CoreLogicExtractor(source, session=session, rate_limiter=RateLimiter())

        record = run_extract(extractor, source)[0]

        assert record.city == "Dallas"
        assert record.state == "TX"
        assert record.zip == "75202"
        assert record.owner_type == "corporation"
        assert record.equity_percent == 55
        assert record.mortgage_status == "current"
        assert session.headers.update.call_args[0][0]["Authorization"] == "Bearer token"


class TestRentSpreeExtractor:
    """Tests for RentSpreeExtractor"""

    def test_posts_location_and_maps_unknown_owner(self, make_source):
        source = make_source(DataSourceName.RENTSPREE, api_key="k", coverage=["FL"])
        payload = {"properties": [{"address": "10 Ocean Dr", "owner_type": "Estate", "tags": ["investment"]}]}
        session = mock_session(json_response(payload))
        extractor = RentSpreeExtractor(source, session=session, rate_limiter=RateLimiter())

        record = run_extract(extractor, source)[0]

        assert session.request.call_args.kwargs["json"]["location"] == "Miami, FL"
        assert record.city == "Miami"
        assert record.owner_type == "unknown"
        assert record.tags == ["investment"]

    def test_missing_properties_key(self, make_source):
        source = make_source(DataSourceName.RENTSPREE, api_key="k", coverage=["FL"])
        extractor = RentSpreeExtractor(source, session=mock_session(json_response({})), rate_limiter=RateLimiter())
        assert run_extract(extractor, source) == []


class TestRealtyMoleExtractor:
    """Tests for RealtyMoleExtractor"""

    def test_bare_list_response(self, make_source):
        source = make_source(DataSourceName.REALTYMOLE, api_key="rapid", coverage=["GA"])
        payload = [{"formattedAddress": "5 Peachtree St", "price": 410000, "ownerType": "LLC"}]
        session = mock_session(json_response(payload))
        extractor = RealtyMoleExtractor(source, session=session, rate_limiter=RateLimiter())

        record = run_extract(extractor, source)[0]

        assert record.address == "5 Peachtree St"
        assert record.city == "Atlanta"
        assert record.estimated_value == 410000
        assert record.owner_type == "llc"
        assert session.request.call_args.kwargs["params"]["state"] == "GA"

    def test_rapidapi_headers(self, make_source):
        source = make_source(DataSourceName.REALTYMOLE, api_key="rapid")
        extractor = RealtyMoleExtractor(source)
        assert extractor.session.headers["X-RapidAPI-Key"] == "rapid"
        assert extractor.session.headers["X-RapidAPI-Host"] == "realty-mole-property-api.p.rapidapi.com"


class TestMLSGridExtractor:
    """Tests for MLSGridExtractor"""

    def test_region_sent_as_is(self, make_source):
        source = make_source(DataSourceName.MLSGRID, api_key="k", coverage=["NV"])
        payload = {"properties": [{"address": "1 Strip Ave"}]}
        session = mock_session(json_response(payload))
        extractor = MLSGridExtractor(source, session=session, rate_limiter=RateLimiter())

        record = run_extract(extractor, source)[0]

        assert session.request.call_args.kwargs["json"]["location"] == "NV"
        assert record.state == "NV"
        assert record.owner_name == "Unknown Owner"
        assert record.owner_type == "individual"

    def test_default_coverage(self, make_source):
        source = make_source(DataSourceName.MLSGRID, api_key="k", coverage=[])
        session = mock_session(*[json_response({"properties": []}) for _ in range(3)])
        extractor = MLSGridExtractor(source, session=session, rate_limiter=RateLimiter())

        run_extract(extractor, source)
        assert session.request.call_count == len(MLSGridExtractor.DEFAULT_COVERAGE)


class TestCountyAssessorExtractor:
    """Tests for CountyAssessorExtractor"""

    def test_county_request_and_mapping(self, make_source):
        source = make_source(DataSourceName.COUNTY_ASSESSOR, api_key="k", coverage=["MIAMI_DADE"])
        payload = {"properties": [{"address": "8 Bay Rd", "ownerType": "Absentee", "state": "FL"}]}
        session = mock_session(json_response(payload))
        extractor = CountyAssessorExtractor(source, session=session, rate_limiter=RateLimiter())

        record = run_extract(extractor, source)[0]

        args, kwargs = session.request.call_args
        assert args[1] == "https://www.miamidade.gov/pa/api/properties/search"
        assert kwargs["headers"] == {"X-County": "MIAMI_DADE"}
        assert kwargs["json"]["includeAssessorData"] is True
        assert record.owner_type == "absentee"
        assert record.city == "MIAMI_DADE"
        assert decode_raw_payload(record.raw_data)["county"] == "MIAMI_DADE"

    def test_unconfigured_county_is_skipped(self, make_source):
        source = make_source(DataSourceName.COUNTY_ASSESSOR, api_key="k", coverage=["NOWHERE", "LA"])
        session = mock_session(json_response({"properties": [{"address": "1 Sunset Blvd", "ownerType": "?"}]}))
        extractor = CountyAssessorExtractor(source, session=session, rate_limiter=RateLimiter())

        records = run_extract(extractor, source)

        assert len(records) == 1
        assert records[0].owner_type == "unknown"
        assert records[0].state == "CA"


class TestSweepAreas:
    """Tests for sweep_areas"""

    def test_waits_before_every_request(self):
        limiter = Mock()
        calls = []

        async def acquire():
            calls.append("acquire")

        limiter.acquire = acquire

        def search(region):
            calls.append(region)
            return []

        asyncio.run(sweep_areas("test", ["AZ", "TX"], search, limiter))
        assert calls == ["acquire", "AZ", "acquire", "TX"]

    def test_resolve_search_area(self):
        area = resolve_search_area("pa")
        assert (area.city, area.zip, area.label) == ("Philadelphia", "19102", "Philadelphia, PA")

        with pytest.raises(ValueError):
            resolve_search_area("ZZ")


class TestBuildExtractor:
    """Tests for extractor selection"""

    @pytest.mark.parametrize("name,extractor_cls", [
        (DataSourceName.ATTOM, AttomExtractor),
        (DataSourceName.CORELOGIC, CoreLogicExtractor),
        (DataSourceName.RENTSPREE, RentSpreeExtractor),
        (DataSourceName.REALTYMOLE, RealtyMoleExtractor),
        (DataSourceName.MLSGRID, MLSGridExtractor),
        (DataSourceName.COUNTY_ASSESSOR, CountyAssessorExtractor),
    ])
    def test_credentialed_provider(self, make_source, name, extractor_cls):
        extractor = build_extractor(make_source(name, api_key="key"))
        assert isinstance(extractor, extractor_cls)
        assert extractor.degradation_notice is None

    def test_missing_credential_degrades_to_mock(self, make_source):
        source = make_source(DataSourceName.ATTOM)
        extractor = build_extractor(source)

        assert isinstance(extractor, MockDataExtractor)
        assert "attom" in extractor.degradation_notice

        records = run_extract(extractor, source)
        assert len(records) > 0
        assert all(r.source == "mock" for r in records)

    @pytest.mark.parametrize("name", [
        DataSourceName.MOCK, DataSourceName.MLS, DataSourceName.RETSLY, DataSourceName.RENTDATA,
    ])
    def test_names_without_adapter_use_mock(self, make_source, name):
        extractor = build_extractor(make_source(name, api_key="key"))
        assert isinstance(extractor, MockDataExtractor)
        assert extractor.degradation_notice is None


class TestMockDataExtractor:
    """Tests for MockDataExtractor"""

    def test_sample_records(self, make_source):
        records = run_extract(MockDataExtractor(), make_source())

        assert [r.city for r in records] == ["Philadelphia", "New York", "Los Angeles"]
        assert records[2].owner_type == "LLC"
        assert decode_raw_payload(records[0].raw_data)["zip"] == "19102"

    def test_deterministic(self, make_source):
        first = run_extract(MockDataExtractor(), make_source())
        second = run_extract(MockDataExtractor(), make_source())
        assert [r.model_dump() for r in first] == [r.model_dump() for r in second]
