# src/presentation/dashboard_app.py
import logging

import uvicorn

from ..domain.interfaces import IRetentionService
from ..infrastructure.http.dashboard_server import DashboardHttpServer

logger = logging.getLogger(__name__)


class DashboardApplication:
    """Runs the dashboard HTTP server together with the retention sweep."""

    def __init__(
        self,
        http_server: DashboardHttpServer,
        retention_service: IRetentionService,
        host: str = "0.0.0.0",
        port: int = 5000
    ):
        self.http_server = http_server
        self.retention_service = retention_service
        self.host = host
        self.port = port

    async def run(self) -> None:
        """Serve HTTP until the server exits; the retention sweep runs alongside."""
        await self.retention_service.start()
        config = uvicorn.Config(
            app=self.http_server.app,
            host=self.host,
            port=self.port,
            log_level="info"
        )
        server = uvicorn.Server(config)
        logger.info(f"Starting HTTP server on http://{self.host}:{self.port}")
        try:
            await server.serve()
        finally:
            logger.info("Stopping dashboard application...")
            await self.retention_service.stop()
            logger.info("Dashboard application stopped.")
