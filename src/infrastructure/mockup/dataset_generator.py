# src/infrastructure/mockup/dataset_generator.py
import logging
import math
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Callable, Dict, List, Optional, Set

from ...domain.exceptions import ConfigurationInvalidError
from ...domain.models import (
    Customer, Batch, DailyStats, MockDataConfig,
    BATCH_TYPE_SENT, BATCH_TYPE_RECEIVED
)
from .seeded_random import SeededRandom

logger = logging.getLogger(__name__)

FAMILY_NAMES = ["田中", "佐藤", "山田", "中村", "小林", "渡辺", "伊藤", "鈴木", "高橋", "松本"]
GIVEN_NAMES = ["太郎", "花子", "次郎", "美智子", "三郎", "恵子", "四郎", "由美子", "五郎", "真理子"]

SENT_HOUR = 9
RECEIVED_HOUR = 18

PROPORTION_TOLERANCE = 1e-9


@dataclass
class GeneratedDataset:
    """Everything the generator produced, in generation order."""
    customers: List[Customer] = field(default_factory=list)
    batches: List[Batch] = field(default_factory=list)
    daily_stats: Dict[str, DailyStats] = field(default_factory=dict)


def validate_config(config: MockDataConfig) -> None:
    """Raise ConfigurationInvalidError if the config cannot produce consistent totals."""
    problems: List[str] = []

    if config.seed <= 0:
        problems.append(f"seed must be a positive integer, got {config.seed}")
    if config.days_of_history < 1:
        problems.append(f"days_of_history must be at least 1, got {config.days_of_history}")
    if config.customer_count < 0:
        problems.append(f"customer_count must not be negative, got {config.customer_count}")

    low, high = config.customers_per_day
    if low < 0 or low > high:
        problems.append(f"customers_per_day must be an ordered non-negative range, got {low}-{high}")

    rate_low, rate_high = config.response_rate
    if not (0.0 <= rate_low <= rate_high <= 1.0):
        problems.append(f"response_rate must be an ordered range within [0, 1], got {rate_low}-{rate_high}")

    proportions = config.categories
    shares = [proportions.confirmed, proportions.not_confirmed, proportions.questions, proportions.other]
    if any(share < 0.0 or share > 1.0 for share in shares):
        problems.append(f"category proportions must each be within [0, 1], got {shares}")
    elif abs(sum(shares) - 1.0) > PROPORTION_TOLERANCE:
        problems.append(f"category proportions must sum to 1.0, got {sum(shares)}")

    if problems:
        message = "; ".join(problems)
        logger.error(f"Invalid mock data configuration: {message}")
        raise ConfigurationInvalidError(message)


class MockDatasetGenerator:
    """
    Builds the synthetic customer roster, daily sent/received batches and
    daily stats from a seed.

    PRNG draws happen in a fixed order (roster first, then one count and one
    rate per day, newest day first), so equal seeds and configs always give
    equal datasets.
    """

    def __init__(self, config: Optional[MockDataConfig] = None, clock: Callable[[], date] = date.today):
        self.config = config or MockDataConfig()
        validate_config(self.config)
        self._clock = clock

    def generate(self) -> GeneratedDataset:
        rng = SeededRandom(self.config.seed)
        dataset = GeneratedDataset()
        dataset.customers = self._generate_customers(rng)

        today = self._clock()
        for day_offset in range(self.config.days_of_history):
            self._generate_day(rng, today - timedelta(days=day_offset), dataset)

        logger.info(
            f"Generated mock dataset (seed={self.config.seed}): {len(dataset.customers)} customers, "
            f"{len(dataset.batches)} batches, {len(dataset.daily_stats)} days of stats"
        )
        return dataset

    def _generate_customers(self, rng: SeededRandom) -> List[Customer]:
        customers: List[Customer] = []
        seen_phones: Set[str] = set()
        for i in range(self.config.customer_count):
            family_name = FAMILY_NAMES[i % len(FAMILY_NAMES)]
            given_name = GIVEN_NAMES[i % len(GIVEN_NAMES)]

            phone = self._draw_phone(rng)
            while phone in seen_phones:
                phone = self._draw_phone(rng)
            seen_phones.add(phone)

            customers.append(Customer(
                id=f"customer-{i:03d}",
                name=f"{family_name} {given_name}",
                phone=phone
            ))
        return customers

    @staticmethod
    def _draw_phone(rng: SeededRandom) -> str:
        # Arguments are evaluated left to right, which fixes the draw order
        return f"+81-{rng.next_int(70, 90)}-{rng.next_int(1000, 9999)}-{rng.next_int(1000, 9999)}"

    def _generate_day(self, rng: SeededRandom, day: date, dataset: GeneratedDataset) -> None:
        config = self.config
        date_str = day.isoformat()

        customer_count = rng.next_int(*config.customers_per_day)
        dataset.batches.append(Batch(
            id=f"sent-{date_str}",
            date=date_str,
            type=BATCH_TYPE_SENT,
            file_name=f"delivery_confirmations_{date_str}.csv",
            channel=config.channel,
            customer_count=customer_count,
            created_at=datetime.combine(day, time(hour=SENT_HOUR))
        ))

        rate_low, rate_high = config.response_rate
        response_rate = rate_low + rng.next() * (rate_high - rate_low)
        total_responses = math.floor(customer_count * response_rate)

        proportions = config.categories
        confirmed = math.floor(total_responses * proportions.confirmed)
        not_confirmed = math.floor(total_responses * proportions.not_confirmed)
        questions = math.floor(total_responses * proportions.questions)
        # Remainder absorbs rounding loss so the four counts sum exactly to total_responses
        other = total_responses - confirmed - not_confirmed - questions

        dataset.batches.append(Batch(
            id=f"received-{date_str}",
            date=date_str,
            type=BATCH_TYPE_RECEIVED,
            file_name=f"delivery_responses_{date_str}.csv",
            channel=config.channel,
            customer_count=total_responses,
            confirmed=confirmed,
            not_confirmed=not_confirmed,
            questions=questions,
            other=other,
            created_at=datetime.combine(day, time(hour=RECEIVED_HOUR))
        ))

        dataset.daily_stats[date_str] = DailyStats(
            id=f"stats-{date_str}",
            date=date_str,
            total_sent=customer_count,
            total_received=total_responses,
            confirmed=confirmed,
            not_confirmed=not_confirmed,
            questions=questions,
            other=other,
            pending=customer_count - total_responses
        )
