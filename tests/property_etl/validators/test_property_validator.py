"""
Unit tests for PropertyDataValidator
"""
import pytest

from src.property_etl.models.property import NormalizedProperty
from src.property_etl.validators.property_validator import PropertyDataValidator


def make_property(**overrides):
    values = {
        "id": "abc-def",
        "address": "1234 Main Street",
        "city": "Philadelphia",
        "state": "PA",
        "latitude": 39.9526,
        "longitude": -75.1652,
        "data_source": "mock",
        "data_confidence": 1.0,
        "equity_percent": 65,
        "assessed_value": 250000,
        "estimated_value": 275000,
    }
    values.update(overrides)
    return NormalizedProperty(**values)


@pytest.fixture
def validator():
    return PropertyDataValidator()


class TestPropertyDataValidator:
    """Tests for validation rules and confidence penalties"""

    def test_clean_property(self, validator):
        result = validator.validate(make_property())
        assert result.is_valid
        assert result.errors == []
        assert result.warnings == []
        assert result.confidence == 1.0
        assert result.source == "mock"

    def test_equity_over_100_fails(self, validator):
        result = validator.validate(make_property(equity_percent=150))
        assert not result.is_valid
        assert any("100%" in error for error in result.errors)
        assert result.confidence == pytest.approx(0.8)

    def test_missing_address(self, validator):
        result = validator.validate(make_property(address=""))
        assert not result.is_valid
        assert result.errors == ["Address is required"]
        assert result.confidence == pytest.approx(0.7)

    @pytest.mark.parametrize("overrides", [{"city": ""}, {"state": ""}])
    def test_city_and_state_required(self, validator, overrides):
        result = validator.validate(make_property(**overrides))
        assert result.errors == ["City and state are required"]

    def test_missing_coordinates_is_a_warning(self, validator):
        result = validator.validate(make_property(latitude=0))
        assert result.is_valid
        assert result.warnings == ["Missing coordinates"]
        assert result.confidence == pytest.approx(0.9)

    def test_negative_values(self, validator):
        result = validator.validate(make_property(assessed_value=-1))
        assert result.errors == ["Property values cannot be negative"]

    def test_negative_rooms(self, validator):
        result = validator.validate(make_property(bathrooms=-2))
        assert result.errors == ["Bedroom/bathroom counts cannot be negative"]
        assert result.confidence == pytest.approx(0.9)

    def test_short_address_warning(self, validator):
        result = validator.validate(make_property(address="1 A"))
        assert result.is_valid
        assert result.warnings == ["Address seems too short"]
        assert result.confidence == pytest.approx(0.95)

    def test_confidence_never_negative(self, validator):
        result = validator.validate(make_property(
            address="",
            city="",
            latitude=0,
            equity_percent=150,
            estimated_value=-5,
            bedrooms=-1,
        ))
        assert not result.is_valid
        assert len(result.errors) == 5
        assert result.confidence == 0.0
