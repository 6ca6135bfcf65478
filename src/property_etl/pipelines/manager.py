"""
ETL Pipeline Manager

Registry of per-source pipelines with single, sequential and concurrent
run entry points. Async methods are prefixed with "a"; the plain methods
wrap them with asyncio.run for synchronous callers.
"""
import asyncio
import time
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from config.settings import settings
from src.property_etl.etl.loaders import PropertyLoader
from src.property_etl.exceptions import PipelineNotFoundError
from src.property_etl.extractors.factory import ExtractorFactory, build_extractor
from src.property_etl.models.results import ETLResult
from src.property_etl.models.source import DataSourceName, PropertyDataSource
from src.property_etl.pipelines.etl_pipeline import ETLPipeline
from src.property_etl.transformers.property_transformer import PropertyDataTransformer
from src.property_etl.utils.logger import get_logger
from src.property_etl.validators.property_validator import PropertyDataValidator

logger = get_logger(__name__)

SourceKey = Union[str, DataSourceName]


class PipelineState(str, Enum):
    REGISTERED = "registered"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class PipelineStatus:
    """Last known state of one registered pipeline."""

    source: str
    extractor: str
    degraded: bool
    state: PipelineState = PipelineState.REGISTERED
    last_run_at: Optional[datetime] = None
    last_result: Optional[ETLResult] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "status": self.state.value,
            "extractor": self.extractor,
            "degraded": self.degraded,
            "last_run_at": self.last_run_at.isoformat() if self.last_run_at else None,
            "last_result": self.last_result.to_dict() if self.last_result else None,
        }


class ETLPipelineManager:
    """
    Owns one ETLPipeline per registered source.

    The transformer, validator and loader are shared by every pipeline;
    only the extractor differs per source.
    """

    def __init__(
        self,
        transformer: Optional[PropertyDataTransformer] = None,
        validator: Optional[PropertyDataValidator] = None,
        loader: Optional[PropertyLoader] = None,
        extractor_factory: ExtractorFactory = build_extractor,
        extract_timeout: Optional[float] = None,
        run_timeout: Optional[float] = None,
    ):
        """
        Args:
            transformer: Shared transformer (default PropertyDataTransformer)
            validator: Shared validator (default PropertyDataValidator)
            loader: Shared loader (default PropertyLoader on the configured database)
            extractor_factory: Source to extractor decision function
            extract_timeout: Per-pipeline extraction timeout in seconds
            run_timeout: Default bound for run-all calls in seconds
                (defaults to settings.etl_run_timeout_seconds; None = unbounded)
        """
        self.transformer = transformer or PropertyDataTransformer()
        self.validator = validator or PropertyDataValidator()
        self.loader = loader or PropertyLoader()
        self.extractor_factory = extractor_factory
        self.extract_timeout = extract_timeout
        self.run_timeout = run_timeout if run_timeout is not None else settings.etl_run_timeout_seconds
        self._pipelines: Dict[str, ETLPipeline] = {}
        self._status: Dict[str, PipelineStatus] = {}

    def register_pipeline(self, source: PropertyDataSource) -> ETLPipeline:
        """
        Build and register the pipeline for a source.

        Registering a name again replaces the earlier pipeline.

        Raises:
            Exception: Whatever the chosen extractor's constructor raises
        """
        extractor = self.extractor_factory(source)
        pipeline = ETLPipeline(
            source=source,
            extractor=extractor,
            transformer=self.transformer,
            loader=self.loader,
            validator=self.validator,
            extract_timeout=self.extract_timeout,
        )

        name = source.name.value
        replaced = name in self._pipelines
        self._pipelines[name] = pipeline
        self._status[name] = PipelineStatus(
            source=name,
            extractor=extractor.name,
            degraded=bool(extractor.degradation_notice),
        )
        logger.info(
            "pipeline_registered",
            source=name,
            extractor=extractor.name,
            priority=source.priority,
            replaced=replaced
        )
        return pipeline

    def unregister_pipeline(self, name: SourceKey) -> None:
        key = self._key(name)
        self._lookup(key)
        del self._pipelines[key]
        del self._status[key]
        logger.info("pipeline_unregistered", source=key)

    def registered_sources(self) -> List[str]:
        """Source names in registration order."""
        return list(self._pipelines)

    def get_pipeline(self, name: SourceKey) -> ETLPipeline:
        return self._lookup(self._key(name))

    def get_pipeline_status(self) -> List[Dict[str, Any]]:
        """State, last run time and last result for every registered source."""
        return [status.to_dict() for status in self._status.values()]

    async def arun_pipeline(self, name: SourceKey) -> ETLResult:
        """
        Run one registered pipeline.

        Raises:
            PipelineNotFoundError: Name was never registered
        """
        pipeline = self._lookup(self._key(name))
        return await self._run(pipeline)

    def run_pipeline(self, name: SourceKey) -> ETLResult:
        return asyncio.run(self.arun_pipeline(name))

    async def arun_all_pipelines(
        self,
        concurrent: bool = False,
        timeout: Optional[float] = None,
    ) -> List[ETLResult]:
        """
        Run every registered pipeline.

        Args:
            concurrent: Run pipelines as parallel tasks instead of one after
                another (each pipeline still runs its stages in order)
            timeout: Bound for the whole call in seconds; pipelines that have
                not finished are cancelled and reported as failed. A pipeline
                cancelled while loading lets the in-flight load finish and
                its failed summary carries the rows that load wrote.

        Returns:
            One ETLResult per registered source, in registration order
        """
        timeout = timeout if timeout is not None else self.run_timeout
        pipelines = list(self._pipelines.values())
        results: Dict[str, ETLResult] = {}
        started = time.perf_counter()

        logger.info(
            "run_all_started",
            sources=[p.source_name for p in pipelines],
            concurrent=concurrent,
            timeout=timeout
        )

        if concurrent:
            work = self._run_concurrently(pipelines, results)
        else:
            work = self._run_sequentially(pipelines, results)

        cancel_reason = None
        try:
            if timeout is None:
                await work
            else:
                await asyncio.wait_for(work, timeout=timeout)
        except asyncio.TimeoutError:
            cancel_reason = f"Run cancelled: timed out after {timeout:g}s"
            logger.error("run_all_timed_out", timeout=timeout, finished=len(results), total=len(pipelines))

        summaries = []
        for pipeline in pipelines:
            result = results.get(pipeline.source_name)
            if result is None:
                result = ETLResult.failure(
                    pipeline.source_name,
                    cancel_reason or "Run cancelled",
                    time.perf_counter() - started,
                )
                partial = pipeline.interrupted_result
                if partial is not None:
                    result = replace(
                        partial,
                        errors=result.errors + partial.errors,
                        processing_time=result.processing_time,
                    )
                self._record(pipeline.source_name, result)
            summaries.append(result)

        logger.info(
            "run_all_finished",
            total=len(summaries),
            failed=sum(1 for r in summaries if not r.success),
            elapsed=round(time.perf_counter() - started, 3)
        )
        return summaries

    def run_all_pipelines(self, concurrent: bool = False, timeout: Optional[float] = None) -> List[ETLResult]:
        return asyncio.run(self.arun_all_pipelines(concurrent=concurrent, timeout=timeout))

    async def _run_sequentially(self, pipelines: List[ETLPipeline], results: Dict[str, ETLResult]) -> None:
        for pipeline in pipelines:
            results[pipeline.source_name] = await self._run(pipeline)

    async def _run_concurrently(self, pipelines: List[ETLPipeline], results: Dict[str, ETLResult]) -> None:
        async def run_one(pipeline: ETLPipeline) -> None:
            results[pipeline.source_name] = await self._run(pipeline)

        await asyncio.gather(*(run_one(pipeline) for pipeline in pipelines))

    async def _run(self, pipeline: ETLPipeline) -> ETLResult:
        status = self._status[pipeline.source_name]
        status.state = PipelineState.RUNNING
        status.last_run_at = datetime.now(timezone.utc)

        try:
            result = await pipeline.run()
        except asyncio.CancelledError:
            status.state = PipelineState.FAILED
            raise

        self._record(pipeline.source_name, result)
        return result

    def _record(self, name: str, result: ETLResult) -> None:
        status = self._status.get(name)
        if status is None:
            return
        status.state = PipelineState.SUCCEEDED if result.success else PipelineState.FAILED
        status.last_result = result
        if status.last_run_at is None:
            status.last_run_at = datetime.now(timezone.utc)

    def _lookup(self, key: str) -> ETLPipeline:
        pipeline = self._pipelines.get(key)
        if pipeline is None:
            raise PipelineNotFoundError(key)
        return pipeline

    @staticmethod
    def _key(name: SourceKey) -> str:
        return name.value if isinstance(name, DataSourceName) else name
