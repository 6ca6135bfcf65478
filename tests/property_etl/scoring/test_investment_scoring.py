"""
Unit tests for investment scoring, condition and ARV estimates
"""
import pytest

from src.property_etl.models.property import PropertyCondition, RawPropertyData
from src.property_etl.scoring.investment_scoring import (
    ARVEstimator,
    InvestmentScorer,
    assess_property_condition,
    round_half_up,
)


def raw(**values):
    return RawPropertyData(source="mock", **values)


class TestAssessPropertyCondition:
    """Tests for condition inference"""

    @pytest.mark.parametrize("year_built,expected", [
        (1960, PropertyCondition.FAIR),
        (1969, PropertyCondition.FAIR),
        (1970, PropertyCondition.GOOD),
        (1989, PropertyCondition.GOOD),
        (1990, PropertyCondition.EXCELLENT),
        (None, PropertyCondition.EXCELLENT),
        (0, PropertyCondition.EXCELLENT),
    ])
    def test_year_tiers(self, year_built, expected):
        assert assess_property_condition(raw(year_built=year_built)) == expected

    def test_distressed_tag_wins(self):
        assert assess_property_condition(raw(year_built=2010, tags=["distressed"])) == PropertyCondition.POOR


class TestInvestmentScorer:
    """Tests for the 1-10 investment score"""

    @pytest.fixture
    def scorer(self):
        return InvestmentScorer()

    def test_base_score(self, scorer):
        assert scorer.score(raw()) == 5.0

    @pytest.mark.parametrize("equity,expected", [
        (95, 7.0), (80, 7.0), (79.9, 6.5), (60, 6.5), (45, 6.0), (39, 5.0), (None, 5.0),
    ])
    def test_only_highest_equity_tier_applies(self, scorer, equity, expected):
        assert scorer.score(raw(equity_percent=equity)) == pytest.approx(expected)

    def test_property_type_bonus(self, scorer):
        assert scorer.score(raw(property_type="Multi-Family")) == pytest.approx(5.5)
        assert scorer.score(raw(property_type="Commercial")) == pytest.approx(5.3)
        assert scorer.score(raw(property_type="Condo")) == 5.0

    def test_tag_bonuses_stack(self, scorer):
        score = scorer.score(raw(tags=["pre-foreclosure", "tax-delinquent", "distressed"]))
        assert score == pytest.approx(7.3)

    @pytest.mark.parametrize("owner_type,expected", [
        ("llc", 5.3), ("LLC", 5.3), ("corporation", 5.2), ("Corporation", 5.2), ("individual", 5.0),
    ])
    def test_owner_type_bonus(self, scorer, owner_type, expected):
        assert scorer.score(raw(owner_type=owner_type)) == pytest.approx(expected)

    def test_score_is_clamped_to_ten(self, scorer):
        record = raw(
            equity_percent=90,
            property_type="Multi-Family",
            tags=["pre-foreclosure", "tax-delinquent", "distressed"],
            owner_type="llc",
        )
        assert scorer.score(record) == 10.0


class TestARVEstimator:
    """Tests for after-repair value and rehab cost"""

    @pytest.fixture
    def estimator(self):
        return ARVEstimator()

    def test_fair_condition_example(self, estimator):
        """1960 build with 200k value and 1800 sqft"""
        record = raw(year_built=1960, estimated_value=200000, square_feet=1800)
        condition = assess_property_condition(record)

        assert condition == PropertyCondition.FAIR
        assert estimator.arv(record, condition) == 240000
        assert estimator.rehab_cost(record, condition) == 54000

    def test_falls_back_to_assessed_value(self, estimator):
        record = raw(assessed_value=100000)
        assert estimator.arv(record, PropertyCondition.POOR) == 140000

    def test_no_value(self, estimator):
        assert estimator.arv(raw(), PropertyCondition.GOOD) == 0

    def test_default_square_feet(self, estimator):
        assert estimator.rehab_cost(raw(), PropertyCondition.POOR) == 1500 * 50

    @pytest.mark.parametrize("condition", list(PropertyCondition))
    def test_arv_exceeds_base_value(self, estimator, condition):
        for value in (50000, 123457, 275000, 999999):
            assert estimator.arv(raw(estimated_value=value), condition) > value


class TestRoundHalfUp:

    @pytest.mark.parametrize("value,expected", [(2.5, 3), (2.4, 2), (-2.5, -2), (0.5, 1)])
    def test_rounding(self, value, expected):
        assert round_half_up(value) == expected
