"""
Validators Package

Data-quality gates applied between transformation and loading.
"""
from src.property_etl.validators.property_validator import PropertyDataValidator

__all__ = ["PropertyDataValidator"]
