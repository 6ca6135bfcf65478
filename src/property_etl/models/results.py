"""
Pipeline result containers.
"""
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List


@dataclass
class ValidationResult:
    """Outcome of validating one canonical property."""

    is_valid: bool
    confidence: float
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    source: str = ""


@dataclass
class LoadResult:
    """Per-batch persistence counts."""

    added: int = 0
    updated: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        return self.added + self.updated + self.skipped


@dataclass
class ETLResult:
    """Summary of one pipeline run returned to the caller."""

    success: bool
    source: str
    properties_processed: int = 0
    properties_added: int = 0
    properties_updated: int = 0
    properties_skipped: int = 0
    errors: List[str] = field(default_factory=list)
    processing_time: float = 0.0  # seconds

    @classmethod
    def failure(cls, source: str, message: str, processing_time: float) -> "ETLResult":
        """Whole-run failure: zero counts and the error message."""
        return cls(
            success=False,
            source=source,
            errors=[message],
            processing_time=processing_time,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Dict representation used for JSON output."""
        return asdict(self)
