"""
Domain exceptions for the property ETL.
"""


class ETLError(Exception):
    """Base class for property ETL errors."""


class ProviderRequestError(ETLError):
    """Raised when a provider request for one coverage area fails."""

    def __init__(self, provider: str, area: str, message: str):
        super().__init__(f"{provider} request failed for {area}: {message}")
        self.provider = provider
        self.area = area


class PipelineNotFoundError(ETLError, KeyError):
    """Raised when running a pipeline that was never registered."""

    def __init__(self, source_name: str):
        super().__init__(f"Pipeline not found for source: {source_name}")
        self.source_name = source_name

    def __str__(self) -> str:
        return self.args[0]


class ExtractionTimeoutError(ETLError):
    """Raised when a source's extraction exceeds its time budget."""

    def __init__(self, timeout: float):
        super().__init__(f"Extraction timed out after {timeout:g}s")
        self.timeout = timeout
