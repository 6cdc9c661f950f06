# src/infrastructure/storage_factory.py
import logging

from ..config.settings import Settings
from ..domain.interfaces import IDeliveryStorage
from .database.database_storage import DatabaseStorage
from .mockup.mockup_storage import MockupStorage

logger = logging.getLogger(__name__)


def create_storage(settings: Settings) -> IDeliveryStorage:
    """Pick the storage backend for the configured operation mode."""
    if settings.MODE == "MOCKUP":
        logger.info(f"Using mockup storage (seed={settings.MOCK_DATA_SEED}).")
        return MockupStorage(seed=settings.MOCK_DATA_SEED)

    if settings.DATABASE is None:
        raise ValueError(f"Mode {settings.MODE} requires database settings.")
    logger.info(f"Using database storage for {settings.MODE} mode.")
    return DatabaseStorage(settings.DATABASE, mode=settings.MODE)
