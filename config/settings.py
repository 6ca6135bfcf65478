"""
Configuration Settings

Centralized configuration management using Pydantic and environment variables.
"""
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All sensitive values should be stored in .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Provider API credentials (missing key => mock fallback)
    attom_api_key: Optional[str] = None
    corelogic_api_key: Optional[str] = None
    rentspree_api_key: Optional[str] = None
    realtymole_api_key: Optional[str] = None
    mlsgrid_api_key: Optional[str] = None
    county_assessor_api_key: Optional[str] = None

    # Provider endpoints
    attom_base_url: str = "https://api.gateway.attomdata.com/propertyapi/v1.0.0"
    corelogic_base_url: str = "https://api.corelogic.com/v1"
    rentspree_base_url: str = "https://api.rentspree.com/v1"
    realtymole_base_url: str = "https://realty-mole-property-api.p.rapidapi.com"
    mlsgrid_base_url: str = "https://api.mlsgrid.com/v2"
    county_assessor_base_url: str = "https://api.countyassessor.com/v1"

    # HTTP settings
    http_timeout_seconds: float = 30.0
    etl_user_agent: str = "PropertyETL/1.0"

    # Database settings
    database_url: str = "sqlite:///property_etl.db"
    database_pool_size: int = 20
    database_max_overflow: int = 10
    database_pool_timeout: int = 30
    database_pool_recycle: int = 3600
    database_echo: bool = False  # Set to True for SQL query logging

    # ETL settings
    etl_extract_timeout_seconds: float = 600.0
    etl_run_timeout_seconds: Optional[float] = None

    # Logging settings
    log_level: str = "INFO"
    log_format: str = "json"

    # Application settings
    environment: str = "development"


# Singleton instance
settings = Settings()
