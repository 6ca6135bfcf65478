"""
Property export helpers.

Render canonical properties as CSV, JSON, or GeoJSON for downstream tools.
"""
import json
from typing import Any, Dict, List

import pandas as pd

from src.property_etl.models.property import NormalizedProperty

SUPPORTED_FORMATS = ("csv", "json", "geojson")

CSV_COLUMNS = [
    "id", "address", "city", "state", "zip", "latitude", "longitude",
    "owner_name", "owner_type", "property_type", "bedrooms", "bathrooms",
    "square_feet", "year_built", "assessed_value", "estimated_value",
    "equity_percent", "property_condition", "investment_score",
    "arv_estimate", "rehab_cost_estimate", "data_source", "data_confidence",
]


def _json_ready(prop: NormalizedProperty) -> Dict[str, Any]:
    return prop.model_dump(mode="json")


def export_properties(properties: List[NormalizedProperty], fmt: str) -> str:
    """
    Serialize properties to the requested format.

    Args:
        properties: Canonical properties
        fmt: One of "csv", "json", "geojson"

    Returns:
        Serialized document

    Raises:
        ValueError: Unsupported format
    """
    fmt = fmt.lower()
    if fmt == "csv":
        return to_csv(properties)
    if fmt == "json":
        return json.dumps([_json_ready(p) for p in properties], indent=2)
    if fmt == "geojson":
        return json.dumps(to_geojson(properties), indent=2)
    raise ValueError(f"Unsupported export format: {fmt}")


def to_csv(properties: List[NormalizedProperty]) -> str:
    """Flat CSV with one row per property; tags are joined with ';'."""
    rows = []
    for prop in properties:
        row = _json_ready(prop)
        row["tags"] = ";".join(prop.tags)
        rows.append(row)
    df = pd.DataFrame(rows, columns=CSV_COLUMNS + ["tags"])
    return df.to_csv(index=False)


def to_geojson(properties: List[NormalizedProperty]) -> Dict[str, Any]:
    """FeatureCollection of properties that carry coordinates."""
    features = []
    for prop in properties:
        if not prop.has_coordinates():
            continue
        attributes = _json_ready(prop)
        attributes.pop("latitude")
        attributes.pop("longitude")
        features.append({
            "type": "Feature",
            "geometry": {
                "type": "Point",
                "coordinates": [prop.longitude, prop.latitude],
            },
            "properties": attributes,
        })
    return {"type": "FeatureCollection", "features": features}


def from_rows(rows: List[Any]) -> List[NormalizedProperty]:
    """Rebuild canonical properties from persisted Property rows."""
    return [NormalizedProperty.model_validate(row, from_attributes=True) for row in rows]
