# src/domain/models.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple

BATCH_TYPE_SENT = "sent"
BATCH_TYPE_RECEIVED = "received"
BATCH_TYPES = (BATCH_TYPE_SENT, BATCH_TYPE_RECEIVED)

DEFAULT_CHANNEL = "LINE OA"


@dataclass(frozen=True)
class Customer:
    """A customer who receives delivery confirmation messages."""
    id: str
    name: str
    phone: str


@dataclass(frozen=True)
class Batch:
    """One day's outbound message run ('sent') or inbound response collection ('received')."""
    id: str
    date: str  # 'YYYY-MM-DD'
    type: str
    file_name: str
    channel: str = DEFAULT_CHANNEL
    customer_count: int = 0
    # Response breakdown, always zero for 'sent' batches
    confirmed: int = 0
    not_confirmed: int = 0
    questions: int = 0
    other: int = 0
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class BatchWithSummary(Batch):
    """Batch as returned by history queries; total_responses is only set for 'received' batches."""
    total_responses: Optional[int] = None


@dataclass(frozen=True)
class DailyStats:
    """Per-day aggregate derived from the day's sent/received batch pair."""
    id: str
    date: str  # 'YYYY-MM-DD', unique
    total_sent: int = 0
    total_received: int = 0
    confirmed: int = 0
    not_confirmed: int = 0
    questions: int = 0
    other: int = 0
    pending: int = 0


@dataclass(frozen=True)
class BatchHistoryFilters:
    """Filters for the batch history listing. Dates are inclusive ISO bounds."""
    type: Optional[str] = None  # 'sent', 'received', 'all' or None
    date_from: Optional[str] = None
    date_to: Optional[str] = None
    limit: int = 50
    offset: int = 0

    def __post_init__(self):
        if self.type is not None and self.type != "all" and self.type not in BATCH_TYPES:
            raise ValueError(f"Unknown batch type '{self.type}'. Expected one of: sent, received, all.")
        if self.limit < 1:
            raise ValueError(f"limit must be at least 1, got {self.limit}.")
        if self.offset < 0:
            raise ValueError(f"offset must not be negative, got {self.offset}.")


@dataclass(frozen=True)
class BatchPage:
    """A page of batch history plus the size of the whole filtered set."""
    batches: List[BatchWithSummary]
    total: int


@dataclass(frozen=True)
class DashboardMetrics:
    """Headline numbers for a single day."""
    date: str
    total_sent: int
    total_received: int
    confirmed: int
    not_confirmed: int
    questions: int
    other: int
    pending: int
    response_rate: int  # rounded percentage


@dataclass(frozen=True)
class ChartPoint:
    """Daily sent/received data point."""
    date: str
    label: str  # e.g. 'Jan 15'
    sent: int
    received: int


@dataclass(frozen=True)
class CategorySlice:
    name: str
    value: int
    color: str


@dataclass(frozen=True)
class CategoryProportions:
    """Share of responses falling into each category. Must sum to 1.0."""
    confirmed: float = 0.60
    not_confirmed: float = 0.15
    questions: float = 0.08
    other: float = 0.17


@dataclass(frozen=True)
class MockDataConfig:
    """Tunable parameters for the synthetic dataset."""
    seed: int = 12345
    days_of_history: int = 30
    customers_per_day: Tuple[int, int] = (150, 200)
    response_rate: Tuple[float, float] = (0.65, 0.85)
    categories: CategoryProportions = field(default_factory=CategoryProportions)
    customer_count: int = 100
    channel: str = DEFAULT_CHANNEL
