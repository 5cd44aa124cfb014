"""Transformation framework.

Pluggable transformers for episode tables, composed by a sequential
pipeline.
"""

from .base import (
    TransformationContext,
    TransformationResult,
    TransformerPort,
    is_transformer,
)
from .multistate import AugmentTransformer, PolishTransformer
from .pipeline import TransformationPipeline

__all__ = [
    "AugmentTransformer",
    "PolishTransformer",
    "TransformationContext",
    "TransformationPipeline",
    "TransformationResult",
    "TransformerPort",
    "is_transformer",
]
