"""
Helpers for computing batch data-quality metrics.
"""
from __future__ import annotations

from typing import Any, Dict, List

import pandas as pd

from src.property_etl.models.property import NormalizedProperty
from src.property_etl.models.results import ValidationResult


def compute_quality_metrics(
    properties: List[NormalizedProperty],
    results: List[ValidationResult],
) -> Dict[str, Any]:
    """
    Summarize one validated batch.

    Args:
        properties: Canonical properties, aligned with results
        results: Validation outcome per property

    Returns:
        Counts per source and condition, invalid/warning totals and mean
        confidences (entity completeness and validation-adjusted)
    """
    if not properties:
        return {
            "total": 0,
            "invalid": 0,
            "warnings": 0,
            "by_source": {},
            "by_condition": {},
            "mean_data_confidence": None,
            "mean_validation_confidence": None,
        }

    df = pd.DataFrame(
        {
            "data_source": [p.data_source for p in properties],
            "condition": [p.property_condition.value for p in properties],
            "data_confidence": [p.data_confidence for p in properties],
            "is_valid": [r.is_valid for r in results],
            "warnings": [len(r.warnings) for r in results],
            "validation_confidence": [r.confidence for r in results],
        }
    )

    return {
        "total": int(len(df)),
        "invalid": int((~df["is_valid"]).sum()),
        "warnings": int(df["warnings"].sum()),
        "by_source": {k: int(v) for k, v in df["data_source"].value_counts().items()},
        "by_condition": {k: int(v) for k, v in df["condition"].value_counts().items()},
        "mean_data_confidence": round(float(df["data_confidence"].mean()), 4),
        "mean_validation_confidence": round(float(df["validation_confidence"].mean()), 4),
    }
