"""
Property ETL - Core Package

Extraction, normalization, scoring, validation and loading of property
records pulled from multiple real-estate data providers.
"""

__version__ = "0.1.0"
