"""Ports (interfaces) the application layer depends on."""

from .repositories import LongitudinalDataRepositoryPort
from .services import LoggerPort

__all__ = ["LoggerPort", "LongitudinalDataRepositoryPort"]
