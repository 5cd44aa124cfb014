"""Multi-state transformers: episode expansion and coincident-row cleanup."""

from .augment_transformer import AugmentTransformer
from .polish_transformer import PolishTransformer

__all__ = ["AugmentTransformer", "PolishTransformer"]
