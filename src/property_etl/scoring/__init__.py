"""
Scoring Module

Investment heuristics applied to every property during transformation.
"""
from src.property_etl.scoring.investment_scoring import (
    ARVEstimator,
    InvestmentScorer,
    assess_property_condition,
    round_half_up,
)

__all__ = [
    "ARVEstimator",
    "InvestmentScorer",
    "assess_property_condition",
    "round_half_up",
]
