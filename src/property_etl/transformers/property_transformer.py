"""
Property Data Transformer

Converts provider-shaped raw records into canonical properties with derived
investment fields.
"""
from datetime import datetime, timezone
from typing import List, Optional

from src.property_etl.models.property import (
    NormalizedProperty,
    OwnerType,
    RawPropertyData,
)
from src.property_etl.scoring.investment_scoring import (
    ARVEstimator,
    InvestmentScorer,
    assess_property_condition,
)
from src.property_etl.transformers.identity import generate_property_id
from src.property_etl.utils.logger import get_logger

logger = get_logger(__name__)


def calculate_data_confidence(raw: RawPropertyData) -> float:
    """
    Completeness score in [0.5, 1.0].

    Base 0.5; +0.2 full address, +0.1 coordinates, +0.1 any valuation,
    +0.1 owner name.
    """
    confidence = 0.5
    if raw.address and raw.city and raw.state and raw.zip:
        confidence += 0.2
    if raw.has_coordinates():
        confidence += 0.1
    if raw.assessed_value or raw.estimated_value:
        confidence += 0.1
    if raw.owner_name:
        confidence += 0.1
    return min(1.0, round(confidence, 4))


class PropertyDataTransformer:
    """
    Maps raw records 1:1 onto NormalizedProperty.

    Every canonical field has a default, so transformation never fails.
    """

    name = "property_transformer"

    def __init__(
        self,
        scorer: Optional[InvestmentScorer] = None,
        estimator: Optional[ARVEstimator] = None,
    ):
        self.scorer = scorer or InvestmentScorer()
        self.estimator = estimator or ARVEstimator()

    def transform(self, raw_records: List[RawPropertyData]) -> List[NormalizedProperty]:
        """
        Transform a batch of raw records.

        Args:
            raw_records: Records from one extraction

        Returns:
            One canonical property per raw record
        """
        properties = [self.transform_one(raw) for raw in raw_records]
        logger.info("properties_transformed", count=len(properties))
        return properties

    def transform_one(self, raw: RawPropertyData) -> NormalizedProperty:
        """Transform a single raw record."""
        property_id = raw.id or generate_property_id(raw.address, raw.latitude, raw.longitude)
        condition = assess_property_condition(raw)
        estimated_value = raw.estimated_value or 0
        square_feet = raw.square_feet or 0

        return NormalizedProperty(
            id=property_id,
            address=raw.address,
            city=raw.city or "",
            state=raw.state or "",
            zip=raw.zip or "",
            latitude=raw.latitude or 0.0,
            longitude=raw.longitude or 0.0,
            owner_name=raw.owner_name or "",
            owner_type=raw.owner_type or OwnerType.UNKNOWN.value,
            property_type=raw.property_type or "residential",
            bedrooms=raw.bedrooms or 0,
            bathrooms=raw.bathrooms or 0,
            square_feet=square_feet,
            lot_size=raw.lot_size or 0,
            year_built=raw.year_built or 0,
            assessed_value=raw.assessed_value or 0,
            estimated_value=estimated_value,
            equity_percent=raw.equity_percent or 0,
            mortgage_status=raw.mortgage_status or "unknown",
            lien_status=raw.lien_status or "unknown",
            tags=list(raw.tags),
            status=raw.status or "active",
            data_source=raw.source,
            data_confidence=calculate_data_confidence(raw),
            last_data_update=datetime.now(timezone.utc),
            market_value=raw.estimated_value or raw.assessed_value or 0,
            property_condition=condition,
            investment_score=self.scorer.score(raw),
            arv_estimate=self.estimator.arv(raw, condition),
            rehab_cost_estimate=self.estimator.rehab_cost(raw, condition),
            price_per_sqft=(estimated_value / square_feet) if square_feet else 0,
        )
