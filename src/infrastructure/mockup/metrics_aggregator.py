# src/infrastructure/mockup/metrics_aggregator.py
import math
from datetime import date, timedelta
from typing import List, Mapping

from ...domain.models import DailyStats, DashboardMetrics, ChartPoint, CategorySlice

CATEGORY_COLORS = (
    ("Confirmed", "confirmed", "#10b981"),
    ("Not Confirmed", "not_confirmed", "#ef4444"),
    ("Question", "questions", "#8b5cf6"),
    ("Other", "other", "#6b7280"),
)


def response_rate_percent(total_sent: int, total_received: int) -> int:
    """Received/sent as a percentage rounded half up; 0 when nothing was sent."""
    if total_sent <= 0:
        return 0
    return math.floor(total_received / total_sent * 100 + 0.5)


def build_dashboard_metrics(stats_by_date: Mapping[str, DailyStats], today: date) -> DashboardMetrics:
    """Metrics for today, else the latest day with stats, else zeros dated today."""
    today_str = today.isoformat()
    stats = stats_by_date.get(today_str)
    if stats is None and stats_by_date:
        stats = stats_by_date[max(stats_by_date)]

    if stats is None:
        return DashboardMetrics(
            date=today_str,
            total_sent=0,
            total_received=0,
            confirmed=0,
            not_confirmed=0,
            questions=0,
            other=0,
            pending=0,
            response_rate=0
        )

    return DashboardMetrics(
        date=stats.date,
        total_sent=stats.total_sent,
        total_received=stats.total_received,
        confirmed=stats.confirmed,
        not_confirmed=stats.not_confirmed,
        questions=stats.questions,
        other=stats.other,
        pending=stats.pending,
        response_rate=response_rate_percent(stats.total_sent, stats.total_received)
    )


def build_chart_data(stats_by_date: Mapping[str, DailyStats], today: date, days: int) -> List[ChartPoint]:
    """Exactly `days` points ending today, oldest first. Days without stats are zero."""
    points: List[ChartPoint] = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        stats = stats_by_date.get(day.isoformat())
        points.append(ChartPoint(
            date=day.isoformat(),
            label=f"{day:%b} {day.day}",
            sent=stats.total_sent if stats else 0,
            received=stats.total_received if stats else 0
        ))
    return points


def build_category_data(metrics: DashboardMetrics) -> List[CategorySlice]:
    return [
        CategorySlice(name=name, value=getattr(metrics, attr), color=color)
        for name, attr, color in CATEGORY_COLORS
    ]
