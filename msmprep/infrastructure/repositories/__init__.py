from .longitudinal_data_repository import LongitudinalDataRepository

__all__ = ["LongitudinalDataRepository"]
