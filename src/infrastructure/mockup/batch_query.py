# src/infrastructure/mockup/batch_query.py
from dataclasses import asdict
from datetime import datetime
from typing import Iterable, List, Optional

from ...domain.models import (
    Batch, BatchWithSummary, BatchHistoryFilters, BatchPage, BATCH_TYPE_RECEIVED
)


def _matches(batch: Batch, filters: BatchHistoryFilters) -> bool:
    if filters.type and filters.type != "all" and batch.type != filters.type:
        return False
    # ISO dates are zero padded, so string order is chronological order
    if filters.date_from and batch.date < filters.date_from:
        return False
    if filters.date_to and batch.date > filters.date_to:
        return False
    return True


def _with_summary(batch: Batch) -> BatchWithSummary:
    total_responses = None
    if batch.type == BATCH_TYPE_RECEIVED:
        total_responses = batch.confirmed + batch.not_confirmed + batch.questions + batch.other
    return BatchWithSummary(**asdict(batch), total_responses=total_responses)


def sort_newest_first(batches: Iterable[Batch]) -> List[Batch]:
    """Date descending; same-date batches by created_at descending, then by id."""
    ordered = sorted(batches, key=lambda b: b.id)
    ordered.sort(key=lambda b: b.created_at or datetime.min, reverse=True)
    ordered.sort(key=lambda b: b.date, reverse=True)
    return ordered


def query_batches(batches: Iterable[Batch], filters: Optional[BatchHistoryFilters] = None) -> BatchPage:
    """Filter, sort and paginate a batch collection. `total` counts the whole filtered set."""
    filters = filters or BatchHistoryFilters()

    filtered = sort_newest_first(b for b in batches if _matches(b, filters))
    page = filtered[filters.offset:filters.offset + filters.limit]

    return BatchPage(
        batches=[_with_summary(b) for b in page],
        total=len(filtered)
    )
