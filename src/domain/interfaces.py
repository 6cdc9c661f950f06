# src/domain/interfaces.py
from abc import ABC, abstractmethod
from typing import List, Optional

from .models import (
    Customer, Batch, DailyStats, BatchHistoryFilters, BatchPage,
    DashboardMetrics, ChartPoint, CategorySlice
)


class IDeliveryStorage(ABC):
    """Storage contract shared by the mockup and database backends."""

    # Customer operations

    @abstractmethod
    async def get_customer(self, customer_id: str) -> Optional[Customer]:
        """Retrieve a customer by ID."""
        pass

    @abstractmethod
    async def get_customer_by_phone(self, phone: str) -> Optional[Customer]:
        """Retrieve a customer by phone number."""
        pass

    @abstractmethod
    async def create_customer(self, name: str, phone: str) -> Customer:
        """Create a new customer with a fresh ID."""
        pass

    # Batch operations

    @abstractmethod
    async def get_batch(self, batch_id: str) -> Optional[Batch]:
        """Retrieve a batch by ID."""
        pass

    @abstractmethod
    async def query_batches(self, filters: Optional[BatchHistoryFilters] = None) -> BatchPage:
        """Filtered, newest-first, paginated batch history."""
        pass

    @abstractmethod
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
        """Create a new batch."""
        pass

    @abstractmethod
    async def delete_batches_older_than(self, days: int) -> int:
        """Delete batches dated before today - days. Returns the number deleted."""
        pass

    # Daily stats operations

    @abstractmethod
    async def get_daily_stats(self, stats_date: str) -> Optional[DailyStats]:
        """Retrieve the stats record for a date."""
        pass

    @abstractmethod
    async def get_daily_stats_range(self, start_date: str, end_date: str) -> List[DailyStats]:
        """Stats records within [start_date, end_date], oldest first."""
        pass

    @abstractmethod
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
        """
        Upsert the stats record for a date.
        On update only the fields that are given replace existing values.
        """
        pass

    # Dashboard operations

    @abstractmethod
    async def get_dashboard_metrics(self) -> DashboardMetrics:
        """Metrics for today, or for the most recent day with data."""
        pass

    @abstractmethod
    async def get_chart_data(self, days: int = 7) -> List[ChartPoint]:
        """One point per day for the last `days` days, oldest first."""
        pass

    @abstractmethod
    async def get_category_data(self) -> List[CategorySlice]:
        """Response category breakdown for the dashboard pie chart."""
        pass


class IDashboardService(ABC):
    """Service interface for dashboard read operations."""

    @abstractmethod
    async def get_metrics(self) -> DashboardMetrics:
        pass

    @abstractmethod
    async def get_chart_data(self, days: int = 7) -> List[ChartPoint]:
        pass

    @abstractmethod
    async def get_category_data(self) -> List[CategorySlice]:
        pass


class IRetentionService(ABC):
    """Service interface for the periodic retention sweep."""

    @abstractmethod
    async def start(self) -> None:
        """Start the periodic sweep."""
        pass

    @abstractmethod
    async def stop(self) -> None:
        """Stop the periodic sweep."""
        pass

    @abstractmethod
    async def run_once(self, retention_days: Optional[int] = None) -> int:
        """
        Run a single sweep and return the number of deleted batches.
        retention_days overrides the configured window for this sweep only.
        """
        pass
