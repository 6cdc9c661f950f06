# src/application/services/retention_service.py
import asyncio
import logging
from typing import Optional

from ...domain.interfaces import IRetentionService, IDeliveryStorage

logger = logging.getLogger(__name__)


class RetentionService(IRetentionService):
    """
    Periodically deletes batches older than the retention window.

    Daily stats are left in place; see MockupStorage for the policy.
    """

    def __init__(self, storage: IDeliveryStorage, retention_days: int, interval_seconds: float = 24 * 3600):
        self._storage = storage
        self._retention_days = retention_days
        self._interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None

    async def run_once(self, retention_days: Optional[int] = None) -> int:
        """Run a single sweep and return the number of deleted batches."""
        days = self._retention_days if retention_days is None else retention_days
        deleted = await self._storage.delete_batches_older_than(days)
        logger.info(f"Retention sweep removed {deleted} batches older than {days} days.")
        return deleted

    async def _run_forever(self) -> None:
        while True:
            try:
                await self.run_once()
            except Exception as e:
                logger.error(f"Retention sweep failed: {e}", exc_info=True)
            await asyncio.sleep(self._interval_seconds)

    async def start(self) -> None:
        """Start the periodic sweep."""
        if self.is_running:
            return
        self._task = asyncio.create_task(self._run_forever())
        logger.info("Retention service started")

    async def stop(self) -> None:
        """Stop the periodic sweep."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Retention service stopped")

    @property
    def is_running(self) -> bool:
        """Check if the periodic sweep is active."""
        return self._task is not None and not self._task.done()
