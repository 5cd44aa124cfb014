"""Presenters for CLI output formatting.

Presenters turn use case responses into rich tables and status lines.
"""

from .summary import SummaryPresenter, SummaryRequest

__all__ = ["SummaryPresenter", "SummaryRequest"]
