"""Service layer for analytics operations.

Loads the three collections through the repositories and hands them to
the pure aggregation engine.
"""

from shopdash.core.clock import Clock, utc_now
from shopdash.core.config import get_settings
from shopdash.core.logging import get_logger
from shopdash.features.analytics.engine import build_overview, build_summary
from shopdash.features.analytics.schemas import AnalyticsSummary, DashboardOverview
from shopdash.features.data_platform.repository import ShopRepositories

logger = get_logger(__name__)


class AnalyticsService:
    """Compute window analytics and the dashboard overview.

    Repositories are read only; nothing here writes to storage.
    """

    def __init__(self, repos: ShopRepositories, clock: Clock = utc_now) -> None:
        """Initialize analytics service.

        Args:
            repos: Shop repositories.
            clock: Source of the reference instant.
        """
        self.repos = repos
        self.clock = clock
        self.settings = get_settings()

    def compute_summary(self, window_days: int | None = None) -> AnalyticsSummary:
        """Compute analytics for the trailing ``window_days``.

        Args:
            window_days: Window length. Defaults to the configured window.

        Returns:
            Analytics summary ending today (shop-local).
        """
        days = window_days or self.settings.analytics_default_window_days
        summary = build_summary(
            products=self.repos.products.load(),
            sales=self.repos.sales.load(),
            customers=self.repos.customers.load(),
            window_days=days,
            now=self.clock(),
            tz=self.settings.tzinfo,
            top_n=self.settings.analytics_top_products_limit,
        )

        logger.info(
            "analytics.summary_computed",
            window_days=days,
            start_date=str(summary.start_date),
            end_date=str(summary.end_date),
            total_revenue=float(summary.total_revenue),
            total_sales=summary.total_sales,
        )
        return summary

    def compute_overview(self) -> DashboardOverview:
        """Compute all-time counters for the landing page."""
        overview = build_overview(
            products=self.repos.products.load(),
            sales=self.repos.sales.load(),
            customers=self.repos.customers.load(),
        )

        logger.info(
            "analytics.overview_computed",
            total_products=overview.total_products,
            total_sales=overview.total_sales,
            low_stock=overview.low_stock,
        )
        return overview
