"""
SQLAlchemy ORM Models

The properties table holds one row per deterministic property id. Columns
mirror NormalizedProperty.
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, DateTime, Float, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.property_etl.db.base import Base, TimestampMixin


class Property(Base, TimestampMixin):
    """
    Canonical property table.

    Rows are inserted or overwritten by the loader, never deleted.
    """
    __tablename__ = "properties"

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        comment="Deterministic id from normalized address and coordinates"
    )

    # Address and location
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    state: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    zip: Mapped[str] = mapped_column(String(20), nullable=False, default="")
    latitude: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    longitude: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    # Ownership
    owner_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    owner_type: Mapped[str] = mapped_column(String(50), nullable=False, default="unknown")

    # Structure
    property_type: Mapped[str] = mapped_column(String(50), nullable=False, default="residential")
    bedrooms: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    bathrooms: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    square_feet: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    lot_size: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    year_built: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Valuation and financing
    assessed_value: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    estimated_value: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    equity_percent: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    mortgage_status: Mapped[str] = mapped_column(String(50), nullable=False, default="unknown")
    lien_status: Mapped[str] = mapped_column(String(50), nullable=False, default="unknown")

    tags: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="active")

    # Provenance
    data_source: Mapped[str] = mapped_column(String(50), nullable=False)
    data_confidence: Mapped[float] = mapped_column(Float, nullable=False)
    last_data_update: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    # Derived investment fields
    market_value: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    property_condition: Mapped[str] = mapped_column(String(20), nullable=False)
    investment_score: Mapped[float] = mapped_column(Float, nullable=False)
    arv_estimate: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    rehab_cost_estimate: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    price_per_sqft: Mapped[float] = mapped_column(Float, nullable=False, default=0)

    __table_args__ = (
        Index("idx_properties_city_state", "city", "state"),
        Index("idx_properties_zip", "zip"),
        Index("idx_properties_data_source", "data_source"),
        Index("idx_properties_investment_score", "investment_score"),
    )

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, address={self.address}, source={self.data_source})>"
