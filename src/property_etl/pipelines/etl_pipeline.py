"""
Single-source ETL pipeline.

Runs extract, transform, validate and load for one data source and reports
the outcome as an ETLResult. Stages never overlap.
"""
import asyncio
import time
from enum import Enum
from typing import List, Optional, Tuple

from config.settings import settings
from src.property_etl.etl.loaders import PropertyLoader
from src.property_etl.extractors.base import DataExtractor
from src.property_etl.exceptions import ETLError, ExtractionTimeoutError
from src.property_etl.models.property import NormalizedProperty, RawPropertyData
from src.property_etl.models.results import ETLResult, LoadResult, ValidationResult
from src.property_etl.models.source import PropertyDataSource
from src.property_etl.monitoring.data_quality import compute_quality_metrics
from src.property_etl.transformers.property_transformer import PropertyDataTransformer
from src.property_etl.utils.logger import bind_run_context, clear_run_context, get_logger
from src.property_etl.validators.property_validator import PropertyDataValidator

logger = get_logger(__name__)

NO_DATA_MESSAGE = "No data extracted from source"


class PipelineStage(str, Enum):
    PENDING = "pending"
    EXTRACTING = "extracting"
    TRANSFORMING = "transforming"
    VALIDATING = "validating"
    LOADING = "loading"
    DONE = "done"


class ETLPipeline:
    """
    ETL run for one registered source.

    Only whole-run failures (an extractor that raises or times out, or an
    unexpected error in a later stage) produce success=False. Invalid
    properties and rows the loader skips are reported in the counts and
    errors of a successful result.
    """

    def __init__(
        self,
        source: PropertyDataSource,
        extractor: DataExtractor,
        transformer: PropertyDataTransformer,
        loader: PropertyLoader,
        validator: PropertyDataValidator,
        extract_timeout: Optional[float] = None,
    ):
        """
        Args:
            source: Source descriptor
            extractor: Extractor chosen for the source
            transformer: Shared transformer
            loader: Shared loader
            validator: Shared validator
            extract_timeout: Seconds allowed for extraction
                (defaults to settings.etl_extract_timeout_seconds)
        """
        self.source = source
        self.extractor = extractor
        self.transformer = transformer
        self.loader = loader
        self.validator = validator
        if extract_timeout is None:
            extract_timeout = settings.etl_extract_timeout_seconds
        self.extract_timeout = extract_timeout
        self.stage = PipelineStage.PENDING
        # Counts of a load that finished after the run was cancelled
        self.interrupted_result: Optional[ETLResult] = None

    @property
    def source_name(self) -> str:
        return self.source.name.value

    async def run(self) -> ETLResult:
        """
        Run all stages for this source.

        Returns:
            ETLResult summary (never raises except on cancellation)
        """
        started = time.perf_counter()
        self.interrupted_result = None
        bind_run_context(etl_source=self.source_name)
        logger.info("pipeline_started", extractor=self.extractor.name)

        try:
            result = await self._run_stages(started)
        except Exception as e:
            logger.error(
                "pipeline_failed",
                stage=self.stage.value,
                error=str(e),
                error_type=type(e).__name__
            )
            result = ETLResult.failure(
                self.source_name, str(e) or type(e).__name__, time.perf_counter() - started
            )
        finally:
            self.stage = PipelineStage.DONE
            clear_run_context("etl_source")

        logger.info(
            "pipeline_finished",
            source=result.source,
            success=result.success,
            processed=result.properties_processed,
            added=result.properties_added,
            updated=result.properties_updated,
            skipped=result.properties_skipped,
            errors=len(result.errors),
            processing_time=round(result.processing_time, 3)
        )
        return result

    async def _run_stages(self, started: float) -> ETLResult:
        errors: List[str] = []

        self.stage = PipelineStage.EXTRACTING
        try:
            raw_records = await asyncio.wait_for(self._extract(), timeout=self.extract_timeout)
        except asyncio.TimeoutError:
            raise ExtractionTimeoutError(self.extract_timeout) from None
        if self.extractor.degradation_notice:
            errors.append(self.extractor.degradation_notice)

        if not raw_records:
            logger.warning("no_data_extracted")
            return ETLResult(
                success=True,
                source=self.source_name,
                errors=errors + [NO_DATA_MESSAGE],
                processing_time=time.perf_counter() - started,
            )

        self.stage = PipelineStage.TRANSFORMING
        properties = self.transformer.transform(raw_records)

        self.stage = PipelineStage.VALIDATING
        valid, results = await self._validate_all(properties)
        for prop, check in zip(properties, results):
            if not check.is_valid:
                errors.append(f"Property {prop.address}: {', '.join(check.errors)}")

        logger.info("batch_quality", **compute_quality_metrics(properties, results))

        self.stage = PipelineStage.LOADING
        load = asyncio.ensure_future(asyncio.to_thread(self.loader.load, valid))
        try:
            load_result = await asyncio.shield(load)
        except asyncio.CancelledError:
            # The worker thread cannot be interrupted; wait for its writes to land
            await asyncio.wait({load})
            if load.exception() is None:
                load_result = load.result()
                self.interrupted_result = self._summary(False, raw_records, load_result, errors, started)
                logger.warning("load_finished_after_cancel", added=load_result.added, updated=load_result.updated)
            raise

        return self._summary(True, raw_records, load_result, errors, started)

    async def _extract(self) -> List[RawPropertyData]:
        """Run the extractor, keeping its own timeouts apart from the stage budget."""
        try:
            return await self.extractor.extract(self.source)
        except asyncio.TimeoutError as e:
            raise ETLError(str(e) or f"{self.extractor.name} extractor timed out") from e

    def _summary(
        self,
        success: bool,
        raw_records: List[RawPropertyData],
        load_result: LoadResult,
        errors: List[str],
        started: float,
    ) -> ETLResult:
        return ETLResult(
            success=success,
            source=self.source_name,
            properties_processed=len(raw_records),
            properties_added=load_result.added,
            properties_updated=load_result.updated,
            properties_skipped=load_result.skipped,
            errors=list(errors),
            processing_time=time.perf_counter() - started,
        )

    async def _validate_all(
        self, properties: List[NormalizedProperty]
    ) -> Tuple[List[NormalizedProperty], List[ValidationResult]]:
        """Validate every property concurrently; returns (valid, all results)."""

        async def check(prop: NormalizedProperty) -> ValidationResult:
            return self.validator.validate(prop)

        results = await asyncio.gather(*(check(prop) for prop in properties))
        valid = [prop for prop, result in zip(properties, results) if result.is_valid]

        logger.info("properties_validated", total=len(properties), valid=len(valid))
        return valid, list(results)
