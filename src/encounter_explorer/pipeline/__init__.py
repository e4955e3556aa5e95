"""
Pipeline Package - Orchestration.

    - AnalysisPipeline: runs preview, aggregation, row filter and boxplot
    - create_pipeline: wires the default adapters and validators
"""

from encounter_explorer.pipeline.analysis_pipeline import AnalysisPipeline, create_pipeline

__all__ = [
    "AnalysisPipeline",
    "create_pipeline",
]
