"""
Property Data Models

Pydantic models for provider-shaped raw records and the canonical property entity.
"""
import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class OwnerType(str, Enum):
    """Owner taxonomy every provider vocabulary is mapped into."""

    INDIVIDUAL = "individual"
    LLC = "llc"
    CORPORATION = "corporation"
    TRUST = "trust"
    PARTNERSHIP = "partnership"
    ABSENTEE = "absentee"
    UNKNOWN = "unknown"


class PropertyCondition(str, Enum):
    """Inferred physical condition of a property."""

    POOR = "poor"
    FAIR = "fair"
    GOOD = "good"
    EXCELLENT = "excellent"


def encode_raw_payload(payload: Any) -> bytes:
    """
    Serialize a provider response for audit storage.

    Keys are sorted so identical responses produce identical bytes.
    """
    if payload is None:
        return b""
    return json.dumps(payload, sort_keys=True, default=str).encode("utf-8")


def decode_raw_payload(raw_data: bytes) -> Any:
    """Inverse of encode_raw_payload, for debugging only."""
    if not raw_data:
        return None
    return json.loads(raw_data.decode("utf-8"))


class RawPropertyData(BaseModel):
    """
    Provider-shaped property record produced by an extractor.

    Every field except address and source is optional; defaults are applied
    by the transformer, not here.
    """

    model_config = ConfigDict(str_strip_whitespace=True, allow_inf_nan=False)

    id: Optional[str] = Field(None, description="Provider-assigned identifier")
    address: str = Field("", description="Street address")
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    owner_name: Optional[str] = None
    owner_type: Optional[str] = None
    property_type: Optional[str] = None
    bedrooms: Optional[float] = None
    bathrooms: Optional[float] = None
    square_feet: Optional[float] = None
    lot_size: Optional[float] = None
    year_built: Optional[int] = None
    assessed_value: Optional[float] = None
    estimated_value: Optional[float] = None
    equity_percent: Optional[float] = None
    mortgage_status: Optional[str] = None
    lien_status: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    status: Optional[str] = None
    source: str = Field(..., description="Provider tag")
    raw_data: bytes = Field(b"", description="Serialized provider response")

    def has_coordinates(self) -> bool:
        """Check if both coordinates are present and non-zero."""
        return bool(self.latitude) and bool(self.longitude)

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags


class NormalizedProperty(BaseModel):
    """
    Canonical property entity persisted by the loader.

    Range rules on equity, values and room counts are left to the validator
    so that bad provider data is reported instead of rejected here.
    """

    id: str
    address: str
    city: str = ""
    state: str = ""
    zip: str = ""
    latitude: float = 0.0
    longitude: float = 0.0
    owner_name: str = ""
    owner_type: str = OwnerType.UNKNOWN.value
    property_type: str = "residential"
    bedrooms: float = 0
    bathrooms: float = 0
    square_feet: float = 0
    lot_size: float = 0
    year_built: int = 0
    assessed_value: float = 0
    estimated_value: float = 0
    equity_percent: float = 0
    mortgage_status: str = "unknown"
    lien_status: str = "unknown"
    tags: List[str] = Field(default_factory=list)
    status: str = "active"
    data_source: str
    data_confidence: float = Field(..., ge=0.0, le=1.0)
    last_data_update: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Derived investment fields
    market_value: float = 0
    property_condition: PropertyCondition = PropertyCondition.EXCELLENT
    investment_score: float = Field(5.0, ge=1.0, le=10.0)
    arv_estimate: float = 0
    rehab_cost_estimate: float = 0
    price_per_sqft: float = 0

    def has_coordinates(self) -> bool:
        """Check if both coordinates are present and non-zero."""
        return bool(self.latitude) and bool(self.longitude)

    def to_record(self) -> Dict[str, Any]:
        """Column mapping for the properties table."""
        record = self.model_dump()
        record["property_condition"] = self.property_condition.value
        record["tags"] = list(self.tags)
        return record
