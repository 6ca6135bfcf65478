"""
ETL Package

Persistence and export of canonical properties.
"""
from src.property_etl.etl.loaders import PropertyLoader
from src.property_etl.etl.exporters import SUPPORTED_FORMATS, export_properties, from_rows

__all__ = [
    "PropertyLoader",
    "SUPPORTED_FORMATS",
    "export_properties",
    "from_rows",
]
