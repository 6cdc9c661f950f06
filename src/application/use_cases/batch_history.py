# src/application/use_cases/batch_history.py
import csv
import io
import logging
from dataclasses import replace
from typing import Optional

from ...domain.interfaces import IDeliveryStorage
from ...domain.models import Batch, BatchHistoryFilters, BatchPage, Customer

logger = logging.getLogger(__name__)

EXPORT_PAGE_SIZE = 500
EXPORT_HEADERS = [
    "Date", "Type", "File Name", "Channel", "Customers", "Confirmed",
    "Not Confirmed", "Questions", "Other", "Total Responses", "Created At",
]


class BatchHistoryUseCase:
    """Use case for browsing and exporting batch history."""

    def __init__(self, storage: IDeliveryStorage):
        self._storage = storage

    async def list_batches(self, filters: Optional[BatchHistoryFilters] = None) -> BatchPage:
        filters = filters or BatchHistoryFilters()
        logger.debug(f"Listing batches with filters {filters}")
        return await self._storage.query_batches(filters)

    async def get_batch(self, batch_id: str) -> Optional[Batch]:
        """Returns None if the batch is not found."""
        return await self._storage.get_batch(batch_id)

    async def get_customer(self, customer_id: str) -> Optional[Customer]:
        """Returns None if the customer is not found."""
        return await self._storage.get_customer(customer_id)

    async def export_csv(self, filters: Optional[BatchHistoryFilters] = None) -> str:
        """
        Renders the whole filtered history as CSV, newest first.
        limit/offset in the given filters are ignored; every matching batch is exported.
        """
        filters = replace(filters or BatchHistoryFilters(), limit=EXPORT_PAGE_SIZE, offset=0)

        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(EXPORT_HEADERS)

        exported = 0
        while True:
            page = await self._storage.query_batches(filters)
            for batch in page.batches:
                writer.writerow([
                    batch.date,
                    batch.type,
                    batch.file_name,
                    batch.channel,
                    batch.customer_count,
                    batch.confirmed,
                    batch.not_confirmed,
                    batch.questions,
                    batch.other,
                    "" if batch.total_responses is None else batch.total_responses,
                    batch.created_at.isoformat() if batch.created_at else "",
                ])
            exported += len(page.batches)
            if not page.batches or exported >= page.total:
                break
            filters = replace(filters, offset=filters.offset + filters.limit)

        logger.info(f"Exported {exported} batches to CSV.")
        return buffer.getvalue()
