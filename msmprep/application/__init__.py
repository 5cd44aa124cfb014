"""Application layer: use cases and their request/response models."""

from .augment_use_case import (
    AugmentDependencies,
    AugmentUseCase,
    PolishUseCase,
    prepare_episode_frame,
)
from .models import AugmentRequest, AugmentResponse, PolishRequest, PolishResponse

__all__ = [
    "AugmentDependencies",
    "AugmentRequest",
    "AugmentResponse",
    "AugmentUseCase",
    "PolishRequest",
    "PolishResponse",
    "PolishUseCase",
    "prepare_episode_frame",
]
