"""
分发流水线模块。
"""

from .pipeline import DispatchPipeline, Dispatched, ParseFailed, PipelineResult

__all__ = ["DispatchPipeline", "Dispatched", "ParseFailed", "PipelineResult"]
