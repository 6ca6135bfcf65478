"""
Investment metrics for canonical properties.

Condition inference, 1-10 investment score, after-repair value (ARV) and
rehab-cost estimates. All functions are pure and operate on a raw record.
"""
import math
from typing import Optional

from src.property_etl.models.property import OwnerType, PropertyCondition, RawPropertyData


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +infinity."""
    return int(math.floor(value + 0.5))


def _matches(value: Optional[str], expected: str) -> bool:
    return bool(value) and value.strip().lower() == expected.lower()


def assess_property_condition(raw: RawPropertyData) -> PropertyCondition:
    """
    Infer condition from tags and construction year.

    A missing (or zero) year_built falls through to EXCELLENT.
    """
    if raw.has_tag("distressed"):
        return PropertyCondition.POOR
    if raw.year_built and raw.year_built < 1970:
        return PropertyCondition.FAIR
    if raw.year_built and raw.year_built < 1990:
        return PropertyCondition.GOOD
    return PropertyCondition.EXCELLENT


class InvestmentScorer:
    """
    Heuristic 1-10 ranking of how attractive a property is to an investor.

    Logic:
    Base 5.0, plus the highest matching equity tier, property type, distress
    tags and owner type bonuses, clamped to [1.0, 10.0].
    """

    BASE_SCORE = 5.0
    MIN_SCORE = 1.0
    MAX_SCORE = 10.0

    # (minimum equity percent, bonus); first match wins
    EQUITY_TIERS = ((80, 2.0), (60, 1.5), (40, 1.0))

    PROPERTY_TYPE_BONUS = {
        "Multi-Family": 0.5,
        "Commercial": 0.3,
    }

    TAG_BONUS = {
        "pre-foreclosure": 1.0,
        "tax-delinquent": 0.8,
        "distressed": 0.5,
    }

    OWNER_TYPE_BONUS = {
        OwnerType.LLC.value: 0.3,
        OwnerType.CORPORATION.value: 0.2,
    }

    def score(self, raw: RawPropertyData) -> float:
        """
        Calculate investment score for a raw record.

        Args:
            raw: Provider record

        Returns:
            Score in [1.0, 10.0]
        """
        score = self.BASE_SCORE
        score += self._equity_bonus(raw.equity_percent)

        for property_type, bonus in self.PROPERTY_TYPE_BONUS.items():
            if _matches(raw.property_type, property_type):
                score += bonus

        for tag, bonus in self.TAG_BONUS.items():
            if raw.has_tag(tag):
                score += bonus

        for owner_type, bonus in self.OWNER_TYPE_BONUS.items():
            if _matches(raw.owner_type, owner_type):
                score += bonus

        return min(self.MAX_SCORE, max(self.MIN_SCORE, score))

    def _equity_bonus(self, equity_percent: Optional[float]) -> float:
        if not equity_percent:
            return 0.0
        for threshold, bonus in self.EQUITY_TIERS:
            if equity_percent >= threshold:
                return bonus
        return 0.0


class ARVEstimator:
    """
    After-repair value and rehab cost estimates driven by condition.

    ARV = base value * condition multiplier (every multiplier exceeds 1.0).
    Rehab = square feet (1500 if unknown) * condition cost per sqft.
    """

    ARV_MULTIPLIERS = {
        PropertyCondition.POOR: 1.4,
        PropertyCondition.FAIR: 1.2,
        PropertyCondition.GOOD: 1.1,
        PropertyCondition.EXCELLENT: 1.05,
    }

    REHAB_COST_PER_SQFT = {
        PropertyCondition.POOR: 50,
        PropertyCondition.FAIR: 30,
        PropertyCondition.GOOD: 15,
        PropertyCondition.EXCELLENT: 5,
    }

    DEFAULT_SQUARE_FEET = 1500

    def arv(self, raw: RawPropertyData, condition: PropertyCondition) -> int:
        base_value = raw.estimated_value or raw.assessed_value or 0
        return round_half_up(base_value * self.ARV_MULTIPLIERS[condition])

    def rehab_cost(self, raw: RawPropertyData, condition: PropertyCondition) -> int:
        square_feet = raw.square_feet or self.DEFAULT_SQUARE_FEET
        return round_half_up(square_feet * self.REHAB_COST_PER_SQFT[condition])
