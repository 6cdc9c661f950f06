# src/application/services/dashboard_service.py
import logging
from typing import List

from ...domain.interfaces import IDashboardService, IDeliveryStorage
from ...domain.models import DashboardMetrics, ChartPoint, CategorySlice

logger = logging.getLogger(__name__)

MAX_CHART_DAYS = 365


class DashboardService(IDashboardService):
    """Service for dashboard read operations."""

    def __init__(self, storage: IDeliveryStorage):
        self._storage = storage

    async def get_metrics(self) -> DashboardMetrics:
        metrics = await self._storage.get_dashboard_metrics()
        logger.debug(f"Dashboard metrics for {metrics.date}: response rate {metrics.response_rate}%")
        return metrics

    async def get_chart_data(self, days: int = 7) -> List[ChartPoint]:
        if not 1 <= days <= MAX_CHART_DAYS:
            raise ValueError(f"days must be between 1 and {MAX_CHART_DAYS}, got {days}.")
        return await self._storage.get_chart_data(days)

    async def get_category_data(self) -> List[CategorySlice]:
        return await self._storage.get_category_data()
