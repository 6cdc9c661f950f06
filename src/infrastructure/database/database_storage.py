# src/infrastructure/database/database_storage.py
import logging
from typing import List, NoReturn, Optional

from ...config.settings import DatabaseSettings
from ...domain.exceptions import StorageNotImplementedError
from ...domain.interfaces import IDeliveryStorage
from ...domain.models import (
    Customer, Batch, DailyStats, BatchHistoryFilters, BatchPage,
    DashboardMetrics, ChartPoint, CategorySlice
)

logger = logging.getLogger(__name__)


class DatabaseStorage(IDeliveryStorage):
    """
    Database backend for DEV and PROD modes.

    Not implemented yet: every operation raises StorageNotImplementedError so
    a deployment pointed at it fails loudly instead of serving empty data.
    """

    def __init__(self, database: DatabaseSettings, mode: str = "DEV"):
        self.database = database
        self.mode = mode
        logger.info(f"Initializing database connection for {mode} mode")
        logger.info(f"Database: {database.host}:{database.port}/{database.database}")

    def _not_implemented(self, operation: str) -> NoReturn:
        logger.error(f"DatabaseStorage.{operation} called but database operations are not implemented.")
        raise StorageNotImplementedError(
            f"Database operation '{operation}' is not implemented yet; run in MOCKUP mode instead."
        )

    async def get_customer(self, customer_id: str) -> Optional[Customer]:
        self._not_implemented("get_customer")

    async def get_customer_by_phone(self, phone: str) -> Optional[Customer]:
        self._not_implemented("get_customer_by_phone")

    async def create_customer(self, name: str, phone: str) -> Customer:
        self._not_implemented("create_customer")

    async def get_batch(self, batch_id: str) -> Optional[Batch]:
        self._not_implemented("get_batch")

    async def query_batches(self, filters: Optional[BatchHistoryFilters] = None) -> BatchPage:
        self._not_implemented("query_batches")

    async def create_batch(
        self,
        batch_date: str,
        batch_type: str,
        file_name: str,
        channel: Optional[str] = None,
        customer_count: int = 0,
        confirmed: int = 0,
        not_confirmed: int = 0,
        questions: int = 0,
        other: int = 0
    ) -> Batch:
        self._not_implemented("create_batch")

    async def delete_batches_older_than(self, days: int) -> int:
        self._not_implemented("delete_batches_older_than")

    async def get_daily_stats(self, stats_date: str) -> Optional[DailyStats]:
        self._not_implemented("get_daily_stats")

    async def get_daily_stats_range(self, start_date: str, end_date: str) -> List[DailyStats]:
        self._not_implemented("get_daily_stats_range")

    async def create_or_update_daily_stats(
        self,
        stats_date: str,
        total_sent: Optional[int] = None,
        total_received: Optional[int] = None,
        confirmed: Optional[int] = None,
        not_confirmed: Optional[int] = None,
        questions: Optional[int] = None,
        other: Optional[int] = None,
        pending: Optional[int] = None
    ) -> DailyStats:
        self._not_implemented("create_or_update_daily_stats")

    async def get_dashboard_metrics(self) -> DashboardMetrics:
        self._not_implemented("get_dashboard_metrics")

    async def get_chart_data(self, days: int = 7) -> List[ChartPoint]:
        self._not_implemented("get_chart_data")

    async def get_category_data(self) -> List[CategorySlice]:
        self._not_implemented("get_category_data")
