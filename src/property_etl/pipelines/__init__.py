"""
Pipelines Package

Per-source ETL pipelines and the manager that registers and runs them.
"""
from src.property_etl.pipelines.etl_pipeline import NO_DATA_MESSAGE, ETLPipeline, PipelineStage
from src.property_etl.pipelines.manager import ETLPipelineManager, PipelineState, PipelineStatus
from src.property_etl.pipelines.sources import build_default_manager, default_sources

__all__ = [
    "NO_DATA_MESSAGE",
    "ETLPipeline",
    "ETLPipelineManager",
    "PipelineStage",
    "PipelineState",
    "PipelineStatus",
    "build_default_manager",
    "default_sources",
]
