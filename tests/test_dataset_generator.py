"""Tests for the synthetic dataset generator."""

import math
from datetime import date, time

import pytest

from src.domain.exceptions import ConfigurationInvalidError
from src.domain.models import MockDataConfig, CategoryProportions
from src.infrastructure.mockup.dataset_generator import MockDatasetGenerator
from src.infrastructure.mockup.seeded_random import SeededRandom

TODAY = date(2024, 1, 15)


def _generate(config: MockDataConfig = None):
    return MockDatasetGenerator(config, clock=lambda: TODAY).generate()


def test_same_seed_produces_identical_dataset() -> None:
    first = _generate()
    second = _generate()

    assert first.customers == second.customers
    assert first.batches == second.batches
    assert first.daily_stats == second.daily_stats


def test_different_seed_produces_different_dataset() -> None:
    first = _generate(MockDataConfig(seed=12345))
    second = _generate(MockDataConfig(seed=54321))

    assert [b.customer_count for b in first.batches] != [b.customer_count for b in second.batches]


def test_roster_shape() -> None:
    dataset = _generate()

    assert len(dataset.customers) == 100
    assert dataset.customers[0].id == "customer-000"
    assert dataset.customers[0].name == "田中 太郎"
    assert dataset.customers[11].name == "佐藤 花子"
    assert dataset.customers[99].id == "customer-099"
    assert len({c.phone for c in dataset.customers}) == 100
    assert all(c.phone.startswith("+81-") for c in dataset.customers)


def test_first_phone_follows_draw_order() -> None:
    rng = SeededRandom(12345)
    expected = f"+81-{rng.next_int(70, 90)}-{rng.next_int(1000, 9999)}-{rng.next_int(1000, 9999)}"

    assert _generate().customers[0].phone == expected


def test_one_sent_and_one_received_batch_per_day() -> None:
    dataset = _generate()

    assert len(dataset.batches) == 60
    assert len(dataset.daily_stats) == 30
    for stats_date in dataset.daily_stats:
        day_batches = [b for b in dataset.batches if b.date == stats_date]
        assert sorted(b.type for b in day_batches) == ["received", "sent"]

    dates = sorted(dataset.daily_stats)
    assert dates[0] == "2023-12-17"
    assert dates[-1] == "2024-01-15"


def test_received_categories_sum_to_customer_count() -> None:
    for batch in _generate().batches:
        if batch.type == "received":
            assert batch.confirmed + batch.not_confirmed + batch.questions + batch.other == batch.customer_count
        else:
            assert (batch.confirmed, batch.not_confirmed, batch.questions, batch.other) == (0, 0, 0, 0)


def test_daily_stats_invariants() -> None:
    for stats in _generate().daily_stats.values():
        assert stats.pending == stats.total_sent - stats.total_received
        assert stats.total_received <= stats.total_sent
        assert stats.confirmed + stats.not_confirmed + stats.questions + stats.other == stats.total_received


def test_daily_stats_match_batch_pair() -> None:
    dataset = _generate()
    by_id = {b.id: b for b in dataset.batches}

    for stats_date, stats in dataset.daily_stats.items():
        sent = by_id[f"sent-{stats_date}"]
        received = by_id[f"received-{stats_date}"]
        assert stats.total_sent == sent.customer_count
        assert stats.total_received == received.customer_count
        assert stats.confirmed == received.confirmed
        assert stats.id == f"stats-{stats_date}"


def test_today_batches_follow_configured_ranges() -> None:
    dataset = _generate()
    by_id = {b.id: b for b in dataset.batches}
    sent = by_id["sent-2024-01-15"]
    received = by_id["received-2024-01-15"]

    assert 150 <= sent.customer_count <= 200
    assert math.floor(sent.customer_count * 0.65) <= received.customer_count <= math.floor(sent.customer_count * 0.85)
    assert received.confirmed == math.floor(received.customer_count * 0.60)
    assert sent.file_name == "delivery_confirmations_2024-01-15.csv"
    assert received.file_name == "delivery_responses_2024-01-15.csv"
    assert sent.channel == received.channel == "LINE OA"


def test_today_batches_replay_the_prng() -> None:
    rng = SeededRandom(12345)
    for _ in range(100 * 3):
        rng.next_int(0, 1)
    customer_count = rng.next_int(150, 200)
    rate = 0.65 + rng.next() * (0.85 - 0.65)

    by_id = {b.id: b for b in _generate().batches}

    assert by_id["sent-2024-01-15"].customer_count == customer_count
    assert by_id["received-2024-01-15"].customer_count == math.floor(customer_count * rate)


def test_sent_created_before_received() -> None:
    by_id = {b.id: b for b in _generate().batches}
    sent = by_id["sent-2024-01-10"]
    received = by_id["received-2024-01-10"]

    assert sent.created_at.time() == time(9, 0)
    assert received.created_at.time() == time(18, 0)
    assert sent.created_at < received.created_at


def test_custom_history_length() -> None:
    dataset = _generate(MockDataConfig(days_of_history=3, customer_count=5))

    assert sorted(dataset.daily_stats) == ["2024-01-13", "2024-01-14", "2024-01-15"]
    assert len(dataset.customers) == 5


@pytest.mark.parametrize("config", [
    MockDataConfig(categories=CategoryProportions(confirmed=0.7, not_confirmed=0.15, questions=0.08, other=0.17)),
    MockDataConfig(categories=CategoryProportions(confirmed=1.2, not_confirmed=-0.2, questions=0.0, other=0.0)),
    MockDataConfig(customers_per_day=(200, 150)),
    MockDataConfig(response_rate=(0.9, 0.5)),
    MockDataConfig(response_rate=(0.5, 1.5)),
    MockDataConfig(days_of_history=0),
    MockDataConfig(seed=0),
])
def test_invalid_config_is_rejected(config) -> None:
    with pytest.raises(ConfigurationInvalidError):
        MockDatasetGenerator(config)
