"""Analytics module: window summaries and the dashboard overview."""

from shopdash.features.analytics.engine import build_overview, build_summary
from shopdash.features.analytics.routes import router
from shopdash.features.analytics.schemas import (
    AnalyticsSummary,
    DashboardOverview,
    ReportWindow,
)
from shopdash.features.analytics.service import AnalyticsService

__all__ = [
    "AnalyticsService",
    "AnalyticsSummary",
    "DashboardOverview",
    "ReportWindow",
    "build_overview",
    "build_summary",
    "router",
]
