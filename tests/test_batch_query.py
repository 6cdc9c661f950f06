"""Tests for batch history filtering, sorting and pagination."""

import asyncio
from datetime import datetime

import pytest

from src.domain.models import Batch, BatchHistoryFilters
from src.infrastructure.mockup.batch_query import query_batches


def _all(storage, **filters):
    return asyncio.run(storage.query_batches(BatchHistoryFilters(limit=1000, **filters)))


def test_sent_page_example(storage) -> None:
    page = asyncio.run(storage.query_batches(BatchHistoryFilters(type="sent", limit=5, offset=0)))

    assert page.total == 30
    assert [b.date for b in page.batches] == [
        "2024-01-15", "2024-01-14", "2024-01-13", "2024-01-12", "2024-01-11"
    ]
    assert all(b.type == "sent" for b in page.batches)
    assert all(b.total_responses is None for b in page.batches)


def test_default_filters(storage) -> None:
    page = asyncio.run(storage.query_batches())

    assert page.total == 60
    assert len(page.batches) == 50


def test_all_type_means_no_filter(storage) -> None:
    assert _all(storage, type="all").total == 60


def test_received_batches_carry_total_responses(storage) -> None:
    page = _all(storage, type="received")

    assert page.total == 30
    for batch in page.batches:
        assert batch.total_responses == batch.confirmed + batch.not_confirmed + batch.questions + batch.other
        assert batch.total_responses == batch.customer_count


def test_date_bounds_are_inclusive(storage) -> None:
    page = _all(storage, date_from="2024-01-10", date_to="2024-01-12")

    assert page.total == 6
    assert {b.date for b in page.batches} == {"2024-01-10", "2024-01-11", "2024-01-12"}


def test_same_date_orders_latest_first(storage) -> None:
    page = _all(storage, date_from="2024-01-15", date_to="2024-01-15")

    assert [b.type for b in page.batches] == ["received", "sent"]


def test_offset_beyond_end_keeps_total(storage) -> None:
    page = asyncio.run(storage.query_batches(BatchHistoryFilters(type="sent", limit=10, offset=100)))

    assert page.batches == []
    assert page.total == 30


@pytest.mark.parametrize("limit", [1, 7, 13, 60])
def test_pages_reconstruct_full_set(storage, limit) -> None:
    full = _all(storage, date_from="2024-01-01")

    collected = []
    offset = 0
    while offset < full.total:
        page = asyncio.run(storage.query_batches(
            BatchHistoryFilters(date_from="2024-01-01", limit=limit, offset=offset)
        ))
        assert page.total == full.total
        collected.extend(page.batches)
        offset += limit

    assert [b.id for b in collected] == [b.id for b in full.batches]
    assert len({b.id for b in collected}) == full.total


def test_tie_break_is_stable_for_equal_dates() -> None:
    created = datetime(2024, 3, 1, 12, 0)
    batches = [
        Batch(id="b", date="2024-03-01", type="sent", file_name="b.csv", created_at=created),
        Batch(id="a", date="2024-03-01", type="sent", file_name="a.csv", created_at=created),
        Batch(id="c", date="2024-03-02", type="sent", file_name="c.csv", created_at=created),
    ]

    page = query_batches(batches, BatchHistoryFilters())

    assert [b.id for b in page.batches] == ["c", "a", "b"]


@pytest.mark.parametrize("kwargs", [
    {"limit": 0},
    {"limit": -3},
    {"offset": -1},
    {"type": "bounced"},
])
def test_invalid_filters_are_rejected(kwargs) -> None:
    with pytest.raises(ValueError):
        BatchHistoryFilters(**kwargs)
