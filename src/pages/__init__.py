"""Pages package."""

from .advisor import AdvisorPage
from .dashboard import DashboardPage
from .history_page import HistoryPage
from .results import ResultsPage

__all__ = [
    "DashboardPage",
    "ResultsPage",
    "HistoryPage",
    "AdvisorPage",
]
