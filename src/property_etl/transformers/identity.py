"""
Deterministic property identity.

The id of a canonical property is derived only from its normalized street line
and coordinates, so re-ingesting the same property from any source maps to the
same row. The hash matches the 32-bit rolling string hash used by earlier
releases of the ingestion service, so ids already stored remain stable.
"""
from decimal import Decimal
from typing import Optional

from src.property_etl.transformers.address_standardizer import AddressStandardizer

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"
_standardizer = AddressStandardizer()


def to_base36(value: int) -> str:
    """Render a non-negative integer in lowercase base 36."""
    if value < 0:
        raise ValueError("to_base36 expects a non-negative integer")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def hash_string(value: str) -> str:
    """
    32-bit rolling hash (h = h * 31 + c) over UTF-16 code units.

    The accumulator wraps as a signed 32-bit integer; the absolute value is
    rendered in base 36.
    """
    h = 0
    encoded = value.encode("utf-16-le")
    for i in range(0, len(encoded), 2):
        code_unit = encoded[i] | (encoded[i + 1] << 8)
        h = ((h << 5) - h + code_unit) & 0xFFFFFFFF
    if h & 0x80000000:
        h -= 0x100000000
    return to_base36(abs(h))


def format_coordinate(value: float) -> str:
    """
    Format a coordinate the way ECMAScript prints numbers.

    Integral values drop the fractional part; magnitudes below 1e-6 use
    exponent notation without zero padding.
    """
    value = float(value)
    if value.is_integer():
        return str(int(value))
    text = repr(value)
    if "e" not in text:
        return text
    if abs(value) >= 1e-6:
        return format(Decimal(text), "f")
    mantissa, exponent = text.split("e")
    exp = int(exponent)
    sign = "+" if exp > 0 else "-"
    return f"{mantissa}e{sign}{abs(exp)}"


def normalize_address(address: Optional[str]) -> str:
    """Standardized street line used as the address half of the id."""
    return _standardizer.normalize(address)


def generate_property_id(
    address: Optional[str],
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
) -> str:
    """
    Build the deterministic id "{hash(address)}-{hash(coords)}".

    Coordinates count as present only when both are non-zero; otherwise the
    coordinate half is the literal "0".
    """
    address_hash = hash_string(normalize_address(address))
    if latitude and longitude:
        coord_hash = hash_string(f"{format_coordinate(latitude)},{format_coordinate(longitude)}")
    else:
        coord_hash = "0"
    return f"{address_hash}-{coord_hash}"
