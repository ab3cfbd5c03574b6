from .aggregator import (
    DashboardSummary,
    VoteTally,
    aggregate_reports,
    filter_by_status,
    group_interactions,
    resolve_reporter_name,
    summarize,
)
from .dashboard import DashboardController
from .reports_service import ReportsService, ReportsServiceError

__all__ = [
    "DashboardController",
    "DashboardSummary",
    "ReportsService",
    "ReportsServiceError",
    "VoteTally",
    "aggregate_reports",
    "filter_by_status",
    "group_interactions",
    "resolve_reporter_name",
    "summarize",
]
