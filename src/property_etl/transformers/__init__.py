"""
Transformers Package

Normalization of provider records into the canonical property schema.
"""
from src.property_etl.transformers.address_standardizer import AddressStandardizer, StandardizedAddress
from src.property_etl.transformers.identity import generate_property_id, hash_string
from src.property_etl.transformers.property_transformer import (
    PropertyDataTransformer,
    calculate_data_confidence,
)

__all__ = [
    "AddressStandardizer",
    "StandardizedAddress",
    "generate_property_id",
    "hash_string",
    "PropertyDataTransformer",
    "calculate_data_confidence",
]
