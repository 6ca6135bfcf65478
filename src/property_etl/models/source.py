"""
Data Source Descriptor Models

Pydantic models describing one external property data provider.
"""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class DataSourceName(str, Enum):
    """Known property data providers."""

    ATTOM = "attom"
    CORELOGIC = "corelogic"
    COUNTY_ASSESSOR = "county_assessor"
    MLS = "mls"
    RETSLY = "retsly"
    REALTYMOLE = "realtymole"
    RENTSPREE = "rentspree"
    RENTDATA = "rentdata"
    MLSGRID = "mlsgrid"
    MOCK = "mock"


class UpdateFrequency(str, Enum):
    """How often a source is expected to be refreshed."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class RateLimit(BaseModel):
    """
    Request budget published by a provider.

    Attributes:
        requests_per_minute: Maximum requests in any rolling 60 seconds
        requests_per_hour: Maximum requests in any rolling hour
    """

    model_config = ConfigDict(frozen=True)

    requests_per_minute: int = Field(..., gt=0, description="Requests per minute")
    requests_per_hour: int = Field(..., gt=0, description="Requests per hour")


class PropertyDataSource(BaseModel):
    """
    Configuration for one data provider.

    Created once at registration time and never mutated.

    Attributes:
        name: Provider name
        priority: Lower is preferred when sources disagree (reserved)
        update_frequency: Refresh cadence
        coverage: Region codes (states, county keys, or "all")
        api_key: Provider credential
        base_url: Override for the provider's default endpoint
        rate_limit: Provider request budget
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: DataSourceName = Field(..., description="Provider name")
    priority: int = Field(..., ge=0, description="Source priority")
    update_frequency: UpdateFrequency = Field(UpdateFrequency.DAILY, description="Refresh cadence")
    coverage: List[str] = Field(default_factory=list, description="Covered region codes")
    api_key: Optional[SecretStr] = Field(None, description="Provider credential")
    base_url: Optional[str] = Field(None, description="Endpoint override")
    rate_limit: Optional[RateLimit] = Field(None, description="Request budget")

    def has_credential(self) -> bool:
        """Check if a non-blank credential is configured."""
        if self.api_key is None:
            return False
        return bool(self.api_key.get_secret_value().strip())

    def credential(self) -> str:
        """Return the raw credential value (empty string if absent)."""
        if self.api_key is None:
            return ""
        return self.api_key.get_secret_value().strip()
