"""
Property Data Validator

Structural and business-rule checks applied to canonical properties before
they are persisted.
"""
from src.property_etl.models.property import NormalizedProperty
from src.property_etl.models.results import ValidationResult


class PropertyDataValidator:
    """
    Validates one canonical property.

    Errors block persistence; warnings are informational. Each failed rule
    deducts a fixed penalty from a starting confidence of 1.0.
    """

    name = "property_validator"

    MIN_ADDRESS_LENGTH = 5

    def validate(self, prop: NormalizedProperty) -> ValidationResult:
        """
        Validate a canonical property.

        Args:
            prop: Property produced by the transformer

        Returns:
            ValidationResult with errors, warnings and adjusted confidence
        """
        errors = []
        warnings = []
        confidence = 1.0

        if not prop.address:
            errors.append("Address is required")
            confidence -= 0.3

        if not prop.city or not prop.state:
            errors.append("City and state are required")
            confidence -= 0.2

        if not prop.has_coordinates():
            warnings.append("Missing coordinates")
            confidence -= 0.1

        if prop.equity_percent > 100:
            errors.append("Equity percentage cannot exceed 100%")
            confidence -= 0.2

        if prop.assessed_value < 0 or prop.estimated_value < 0:
            errors.append("Property values cannot be negative")
            confidence -= 0.2

        if prop.bedrooms < 0 or prop.bathrooms < 0:
            errors.append("Bedroom/bathroom counts cannot be negative")
            confidence -= 0.1

        if prop.address and len(prop.address) < self.MIN_ADDRESS_LENGTH:
            warnings.append("Address seems too short")
            confidence -= 0.05

        return ValidationResult(
            is_valid=not errors,
            confidence=max(0.0, round(confidence, 4)),
            errors=errors,
            warnings=warnings,
            source=prop.data_source,
        )
