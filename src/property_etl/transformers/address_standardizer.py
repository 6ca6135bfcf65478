"""
Address Standardization Transformer

Normalizes street addresses so the same physical property reported by
different providers yields the same identity key.
"""
import re
from typing import Optional
from dataclasses import dataclass

from src.property_etl.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class StandardizedAddress:
    """
    Standardized street address components.

    Attributes:
        street_number: House/building number
        street_name: Street name (normalized, directionals abbreviated)
        street_type: Street type (ST, AVE, RD, etc.)
        unit_type: Unit type (APT, UNIT, STE, etc.)
        unit_number: Unit number
        street_address: Complete standardized street line
    """
    street_number: Optional[str] = None
    street_name: Optional[str] = None
    street_type: Optional[str] = None
    unit_type: Optional[str] = None
    unit_number: Optional[str] = None
    street_address: str = ""


class AddressStandardizer:
    """
    Standardizes street lines to a consistent format across data sources.

    Handles common variations, abbreviations, and formatting inconsistencies.
    """

    STREET_TYPES = {
        'ALLEY': 'ALY', 'AVENUE': 'AVE', 'BOULEVARD': 'BLVD', 'CIRCLE': 'CIR',
        'COURT': 'CT', 'DRIVE': 'DR', 'EXPRESSWAY': 'EXPY', 'HIGHWAY': 'HWY',
        'LANE': 'LN', 'PARKWAY': 'PKWY', 'PLACE': 'PL', 'ROAD': 'RD',
        'STREET': 'ST', 'TERRACE': 'TER', 'TRAIL': 'TRL', 'WAY': 'WAY',
        'LOOP': 'LOOP', 'PATH': 'PATH', 'PIKE': 'PIKE', 'PLAZA': 'PLZ',
        'POINT': 'PT', 'RIDGE': 'RDG', 'RUN': 'RUN', 'SQUARE': 'SQ'
    }

    UNIT_TYPES = {
        'APARTMENT': 'APT', 'BUILDING': 'BLDG', 'FLOOR': 'FL',
        'SUITE': 'STE', 'UNIT': 'UNIT', 'ROOM': 'RM', '#': 'UNIT'
    }

    DIRECTIONS = {
        'NORTH': 'N', 'SOUTH': 'S', 'EAST': 'E', 'WEST': 'W',
        'NORTHEAST': 'NE', 'NORTHWEST': 'NW', 'SOUTHEAST': 'SE', 'SOUTHWEST': 'SW'
    }

    UNIT_PATTERN = re.compile(
        r'(?:^|\s)(#\s*|(?:APT|APARTMENT|UNIT|SUITE|STE|BLDG|BUILDING|FL|FLOOR|RM|ROOM)\s+)([A-Z0-9\-]+)\s*$'
    )

    def standardize(self, address: Optional[str]) -> StandardizedAddress:
        """
        Standardize a street line.

        Args:
            address: Raw street address

        Returns:
            StandardizedAddress with normalized components
        """
        if not address or not address.strip():
            return StandardizedAddress()

        cleaned = address.strip().upper().replace(',', ' ').replace('.', '')
        cleaned = ' '.join(cleaned.split())

        unit_type, unit_number, cleaned = self._extract_unit(cleaned)
        street_number, street_name, street_type = self._parse_street(cleaned)

        parts = [p for p in (street_number, street_name, street_type) if p]
        if unit_type and unit_number:
            parts.extend([unit_type, unit_number])

        return StandardizedAddress(
            street_number=street_number,
            street_name=street_name,
            street_type=street_type,
            unit_type=unit_type,
            unit_number=unit_number,
            street_address=' '.join(parts),
        )

    def normalize(self, address: Optional[str]) -> str:
        """Return the standardized street line ("" for blank input)."""
        return self.standardize(address).street_address

    def _extract_unit(self, address: str) -> tuple[Optional[str], Optional[str], str]:
        """
        Extract a trailing unit designator.

        Returns:
            Tuple of (unit_type, unit_number, remaining_address)
        """
        match = self.UNIT_PATTERN.search(address)
        if not match:
            return None, None, address

        designator = match.group(1).strip()
        unit_type = self.UNIT_TYPES.get(designator, designator)
        remaining = address[:match.start()].strip()
        if not remaining:
            # "# 5" alone is not a unit, keep it as the street line
            return None, None, address
        return unit_type, match.group(2), remaining

    def _parse_street(self, address: str) -> tuple[Optional[str], Optional[str], Optional[str]]:
        """
        Parse street components from address.

        Returns:
            Tuple of (street_number, street_name, street_type)
        """
        parts = address.split()
        if not parts:
            return None, None, None

        street_number = None
        if parts[0].replace('-', '').isdigit():
            street_number = parts[0]
            parts = parts[1:]

        if not parts:
            return street_number, None, None

        street_type = None
        if len(parts) > 1 and (parts[-1] in self.STREET_TYPES or parts[-1] in self.STREET_TYPES.values()):
            street_type = self.STREET_TYPES.get(parts[-1], parts[-1])
            parts = parts[:-1]

        street_name_parts = [self.DIRECTIONS.get(part, part) for part in parts]
        street_name = ' '.join(street_name_parts) if street_name_parts else None

        return street_number, street_name, street_type
