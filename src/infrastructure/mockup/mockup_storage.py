# src/infrastructure/mockup/mockup_storage.py
import logging
import uuid
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Callable, Dict, List, Optional

from ...domain.interfaces import IDeliveryStorage
from ...domain.models import (
    Customer, Batch, DailyStats, BatchHistoryFilters, BatchPage,
    DashboardMetrics, ChartPoint, CategorySlice, MockDataConfig,
    BATCH_TYPES, DEFAULT_CHANNEL
)
from .batch_query import query_batches
from .dataset_generator import MockDatasetGenerator
from .metrics_aggregator import build_dashboard_metrics, build_chart_data, build_category_data

logger = logging.getLogger(__name__)


class MockupStorage(IDeliveryStorage):
    """
    In-memory storage seeded with a deterministic synthetic dataset.

    Each entity type lives in its own dict keyed by ID. Secondary indexes
    (phone -> customer ID, date -> batch IDs) are updated together with the
    primary collections on every write. Daily stats are keyed by date.

    Retention policy: delete_batches_older_than() removes batches only.
    Daily stats are kept so trend charts keep their history after the raw
    batches have been swept.
    """

    def __init__(
        self,
        seed: int = 12345,
        config: Optional[MockDataConfig] = None,
        clock: Callable[[], date] = date.today
    ):
        self.config = config or MockDataConfig(seed=seed)
        self._clock = clock

        self._customers: Dict[str, Customer] = {}
        self._batches: Dict[str, Batch] = {}
        self._daily_stats: Dict[str, DailyStats] = {}

        self._customer_id_by_phone: Dict[str, str] = {}
        self._batch_ids_by_date: Dict[str, List[str]] = {}

        # Generation finishes before anything is stored, so a failure leaves the store empty
        dataset = MockDatasetGenerator(self.config, clock=clock).generate()
        for customer in dataset.customers:
            self._insert_customer(customer)
        for batch in dataset.batches:
            self._insert_batch(batch)
        self._daily_stats.update(dataset.daily_stats)

        logger.info(f"Mockup storage ready with seed {self.config.seed}.")

    # Index maintenance

    def _insert_customer(self, customer: Customer) -> None:
        self._customers[customer.id] = customer
        self._customer_id_by_phone[customer.phone] = customer.id

    def _insert_batch(self, batch: Batch) -> None:
        self._batches[batch.id] = batch
        self._batch_ids_by_date.setdefault(batch.date, []).append(batch.id)

    # Customer operations

    async def get_customer(self, customer_id: str) -> Optional[Customer]:
        return self._customers.get(customer_id)

    async def get_customer_by_phone(self, phone: str) -> Optional[Customer]:
        customer_id = self._customer_id_by_phone.get(phone)
        return self._customers.get(customer_id) if customer_id else None

    async def create_customer(self, name: str, phone: str) -> Customer:
        existing_id = self._customer_id_by_phone.get(phone)
        if existing_id:
            raise ValueError(f"Phone number {phone} is already registered to customer {existing_id}.")
        customer = Customer(id=str(uuid.uuid4()), name=name, phone=phone)
        self._insert_customer(customer)
        logger.debug(f"Created customer {customer.id}")
        return customer

    # Batch operations

    async def get_batch(self, batch_id: str) -> Optional[Batch]:
        return self._batches.get(batch_id)

    async def query_batches(self, filters: Optional[BatchHistoryFilters] = None) -> BatchPage:
        return query_batches(self._batches.values(), filters)

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
        if batch_type not in BATCH_TYPES:
            raise ValueError(f"Unknown batch type '{batch_type}'. Expected 'sent' or 'received'.")
        batch = Batch(
            id=str(uuid.uuid4()),
            date=batch_date,
            type=batch_type,
            file_name=file_name,
            channel=channel or DEFAULT_CHANNEL,
            customer_count=customer_count,
            confirmed=confirmed,
            not_confirmed=not_confirmed,
            questions=questions,
            other=other,
            created_at=datetime.now()
        )
        self._insert_batch(batch)
        logger.debug(f"Created {batch_type} batch {batch.id} for {batch_date}")
        return batch

    async def delete_batches_older_than(self, days: int) -> int:
        cutoff = (self._clock() - timedelta(days=days)).isoformat()

        deleted_count = 0
        stale_dates = [d for d in self._batch_ids_by_date if d < cutoff]
        for stale_date in stale_dates:
            for batch_id in self._batch_ids_by_date.pop(stale_date):
                del self._batches[batch_id]
                deleted_count += 1

        logger.info(f"Deleted {deleted_count} batches dated before {cutoff}.")
        return deleted_count

    # Daily stats operations

    async def get_daily_stats(self, stats_date: str) -> Optional[DailyStats]:
        return self._daily_stats.get(stats_date)

    async def get_daily_stats_range(self, start_date: str, end_date: str) -> List[DailyStats]:
        return [
            self._daily_stats[d]
            for d in sorted(self._daily_stats)
            if start_date <= d <= end_date
        ]

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
        given = {
            "total_sent": total_sent,
            "total_received": total_received,
            "confirmed": confirmed,
            "not_confirmed": not_confirmed,
            "questions": questions,
            "other": other,
            "pending": pending,
        }
        existing = self._daily_stats.get(stats_date)
        if existing:
            values = {k: v for k, v in given.items() if v is not None}
            stats = replace(existing, **values)
        else:
            values = {k: (v if v is not None else 0) for k, v in given.items()}
            stats = DailyStats(id=str(uuid.uuid4()), date=stats_date, **values)

        self._daily_stats[stats_date] = stats
        return stats

    # Dashboard operations

    async def get_dashboard_metrics(self) -> DashboardMetrics:
        return build_dashboard_metrics(self._daily_stats, self._clock())

    async def get_chart_data(self, days: int = 7) -> List[ChartPoint]:
        return build_chart_data(self._daily_stats, self._clock(), days)

    async def get_category_data(self) -> List[CategorySlice]:
        metrics = await self.get_dashboard_metrics()
        return build_category_data(metrics)
