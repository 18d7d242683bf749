"""
Models for the index build pipeline.

Exports: PipelineResult
"""

from .pipeline_result import PipelineResult

__all__ = ["PipelineResult"]
