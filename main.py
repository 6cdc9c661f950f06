# main.py
import asyncio
import logging

from src.config.settings import settings
from src.domain.interfaces import IDeliveryStorage, IDashboardService, IRetentionService
from src.infrastructure.storage_factory import create_storage
from src.application.services.dashboard_service import DashboardService
from src.application.services.retention_service import RetentionService
from src.application.use_cases.batch_history import BatchHistoryUseCase
from src.infrastructure.http.dashboard_server import DashboardHttpServer
from src.presentation.dashboard_app import DashboardApplication


def configure_logging():
    """Configures application-wide logging."""
    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=settings.LOG_LEVEL
    )
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def initialize_components() -> DashboardApplication:
    """Initialize all application components."""
    logger = logging.getLogger(__name__)
    logger.info(f"Initializing application components in {settings.MODE} mode...")

    # 1. Initialize Storage
    storage: IDeliveryStorage = create_storage(settings)
    logger.info("Storage initialized.")

    # 2. Initialize Services
    dashboard_service: IDashboardService = DashboardService(storage=storage)
    retention_service: IRetentionService = RetentionService(
        storage=storage,
        retention_days=settings.RETENTION_DAYS,
        interval_seconds=settings.RETENTION_SWEEP_INTERVAL_HOURS * 3600
    )
    logger.info("Services initialized.")

    # 3. Initialize Use Cases
    batch_history = BatchHistoryUseCase(storage=storage)
    logger.info("Use Cases initialized.")

    # 4. Initialize HTTP Server
    http_server = DashboardHttpServer(
        dashboard_service=dashboard_service,
        batch_history=batch_history,
        retention_service=retention_service,
        mode=settings.MODE,
        retention_days=settings.RETENTION_DAYS
    )
    logger.info("HTTP Dashboard Server initialized.")

    return DashboardApplication(
        http_server=http_server,
        retention_service=retention_service,
        host=settings.HTTP_HOST,
        port=settings.HTTP_PORT
    )


async def main_async():
    """Main async function."""
    configure_logging()
    logger = logging.getLogger(__name__)

    try:
        application = initialize_components()
        await application.run()
    except KeyboardInterrupt:
        logger.info("Application shutting down due to KeyboardInterrupt...")
    except Exception as e:
        logger.critical(f"Unhandled exception in main: {e}", exc_info=True)
    finally:
        logger.info("Application finished.")


if __name__ == "__main__":
    asyncio.run(main_async())
