"""API routes for analytics endpoints."""

from fastapi import APIRouter, Depends, Query

from shopdash.core.clock import Clock, get_clock
from shopdash.features.analytics.schemas import (
    AnalyticsSummary,
    DashboardOverview,
    ReportWindow,
)
from shopdash.features.analytics.service import AnalyticsService
from shopdash.features.data_platform.deps import get_repositories
from shopdash.features.data_platform.repository import ShopRepositories

router = APIRouter(prefix="/analytics", tags=["analytics"])


def get_analytics_service(
    repos: ShopRepositories = Depends(get_repositories),
    clock: Clock = Depends(get_clock),
) -> AnalyticsService:
    """Build the analytics service for a request."""
    return AnalyticsService(repos=repos, clock=clock)


@router.get(
    "/summary",
    response_model=AnalyticsSummary,
    summary="Compute window analytics",
    description="""
Revenue, order counts, top products, daily trend, category mix and
customer cohorts for the last N days (shop-local calendar days, today
inclusive).

**Windows**: 7, 30, 90 or 365 days.
""",
)
async def get_summary(
    window_days: ReportWindow = Query(
        ReportWindow.LAST_30_DAYS,
        description="Window length in days: 7, 30, 90 or 365.",
    ),
    service: AnalyticsService = Depends(get_analytics_service),
) -> AnalyticsSummary:
    """Compute analytics for the selected window."""
    return service.compute_summary(window_days=window_days.value)


@router.get(
    "/overview",
    response_model=DashboardOverview,
    summary="Dashboard overview",
)
async def get_overview(
    service: AnalyticsService = Depends(get_analytics_service),
) -> DashboardOverview:
    """All-time counters, recent sales and low-stock items."""
    return service.compute_overview()
