"""Tests for dashboard metric derivation."""

from datetime import date

from src.domain.models import DailyStats
from src.infrastructure.mockup.metrics_aggregator import (
    build_dashboard_metrics, build_chart_data, build_category_data, response_rate_percent
)


def _stats(stats_date: str, sent: int, received: int) -> DailyStats:
    return DailyStats(
        id=f"stats-{stats_date}", date=stats_date, total_sent=sent, total_received=received,
        confirmed=received, pending=sent - received
    )


def test_response_rate_rounds_half_up() -> None:
    assert response_rate_percent(8, 5) == 63
    assert response_rate_percent(200, 1) == 1
    assert response_rate_percent(3, 2) == 67
    assert response_rate_percent(0, 0) == 0


def test_empty_store_gives_zero_metrics_for_today() -> None:
    metrics = build_dashboard_metrics({}, date(2024, 1, 15))

    assert metrics.date == "2024-01-15"
    assert metrics.total_sent == 0
    assert metrics.response_rate == 0


def test_latest_date_used_when_today_missing() -> None:
    stats = {
        "2024-01-10": _stats("2024-01-10", 100, 50),
        "2024-01-12": _stats("2024-01-12", 100, 80),
        "2024-01-11": _stats("2024-01-11", 100, 70),
    }

    metrics = build_dashboard_metrics(stats, date(2024, 1, 15))

    assert metrics.date == "2024-01-12"
    assert metrics.response_rate == 80


def test_zero_sent_day_has_zero_rate() -> None:
    metrics = build_dashboard_metrics({"2024-01-15": _stats("2024-01-15", 0, 0)}, date(2024, 1, 15))

    assert metrics.response_rate == 0


def test_chart_spans_month_boundary() -> None:
    points = build_chart_data({"2024-02-01": _stats("2024-02-01", 10, 5)}, date(2024, 2, 2), 3)

    assert [p.date for p in points] == ["2024-01-31", "2024-02-01", "2024-02-02"]
    assert [p.label for p in points] == ["Jan 31", "Feb 1", "Feb 2"]
    assert [(p.sent, p.received) for p in points] == [(0, 0), (10, 5), (0, 0)]


def test_category_breakdown_of_empty_metrics() -> None:
    slices = build_category_data(build_dashboard_metrics({}, date(2024, 1, 15)))

    assert [s.value for s in slices] == [0, 0, 0, 0]
