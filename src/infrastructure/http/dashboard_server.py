# src/infrastructure/http/dashboard_server.py
from datetime import date, datetime
from typing import Optional
import logging

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field

from ...application.use_cases.batch_history import BatchHistoryUseCase
from ...domain.exceptions import StorageNotImplementedError
from ...domain.interfaces import IDashboardService, IRetentionService
from ...domain.models import Batch, BatchHistoryFilters, Customer

logger = logging.getLogger(__name__)

ISO_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


class RetentionRequest(BaseModel):
    """Request model for a manual retention sweep."""
    retention_days: Optional[int] = Field(None, alias="retentionDays", ge=1, le=365)


def _batch_to_dict(batch: Batch) -> dict:
    data = {
        "id": batch.id,
        "date": batch.date,
        "type": batch.type,
        "fileName": batch.file_name,
        "channel": batch.channel,
        "customerCount": batch.customer_count,
        "confirmed": batch.confirmed,
        "notConfirmed": batch.not_confirmed,
        "questions": batch.questions,
        "other": batch.other,
        "createdAt": batch.created_at.isoformat() if batch.created_at else None,
    }
    total_responses = getattr(batch, "total_responses", None)
    if total_responses is not None:
        data["totalResponses"] = total_responses
    return data


def _customer_to_dict(customer: Customer) -> dict:
    return {"id": customer.id, "name": customer.name, "phone": customer.phone}


class DashboardHttpServer:
    """HTTP API behind the delivery confirmation dashboard."""

    def __init__(
            self,
            dashboard_service: IDashboardService,
            batch_history: BatchHistoryUseCase,
            retention_service: IRetentionService,
            mode: str,
            retention_days: int
    ):
        self.dashboard_service = dashboard_service
        self.batch_history = batch_history
        self.retention_service = retention_service
        self.mode = mode
        self.retention_days = retention_days
        self.app = FastAPI(title="Delivery Confirmation Monitor API", version="1.0.0")
        self._setup_exception_handlers()
        self._setup_routes()

    def _setup_exception_handlers(self) -> None:
        """Map domain errors onto HTTP status codes."""

        @self.app.exception_handler(StorageNotImplementedError)
        async def storage_not_implemented_handler(request: Request, exc: StorageNotImplementedError):
            return JSONResponse(status_code=503, content={"error": str(exc)})

        @self.app.exception_handler(ValueError)
        async def value_error_handler(request: Request, exc: ValueError):
            return JSONResponse(status_code=400, content={"error": str(exc)})

    def _setup_routes(self) -> None:
        """Setup HTTP routes."""

        @self.app.get("/health")
        async def health_check():
            """Health check endpoint."""
            return {"status": "healthy", "mode": self.mode, "timestamp": datetime.now()}

        @self.app.get("/api/config")
        async def get_config():
            return {"mode": self.mode, "retentionDays": self.retention_days}

        @self.app.get("/api/dashboard/metrics")
        async def get_dashboard_metrics():
            metrics = await self.dashboard_service.get_metrics()
            return {
                "date": metrics.date,
                "totalSent": metrics.total_sent,
                "totalReceived": metrics.total_received,
                "confirmed": metrics.confirmed,
                "notConfirmed": metrics.not_confirmed,
                "questions": metrics.questions,
                "other": metrics.other,
                "pending": metrics.pending,
                "responseRate": metrics.response_rate,
            }

        @self.app.get("/api/dashboard/chart-data")
        async def get_chart_data(days: int = Query(7, ge=1, le=365)):
            points = await self.dashboard_service.get_chart_data(days)
            return [
                {"date": p.date, "label": p.label, "sent": p.sent, "received": p.received}
                for p in points
            ]

        @self.app.get("/api/dashboard/category-data")
        async def get_category_data():
            slices = await self.dashboard_service.get_category_data()
            return [{"name": s.name, "value": s.value, "color": s.color} for s in slices]

        @self.app.get("/api/batches")
        async def list_batches(
                type: Optional[str] = Query(None, pattern="^(sent|received|all)$"),
                date_from: Optional[str] = Query(None, alias="dateFrom", pattern=ISO_DATE_PATTERN),
                date_to: Optional[str] = Query(None, alias="dateTo", pattern=ISO_DATE_PATTERN),
                limit: int = Query(50, ge=1, le=500),
                offset: int = Query(0, ge=0)
        ):
            filters = BatchHistoryFilters(type=type, date_from=date_from, date_to=date_to,
                                          limit=limit, offset=offset)
            page = await self.batch_history.list_batches(filters)
            return {"batches": [_batch_to_dict(b) for b in page.batches], "total": page.total}

        @self.app.get("/api/batches/export")
        async def export_batches(
                type: Optional[str] = Query(None, pattern="^(sent|received|all)$"),
                date_from: Optional[str] = Query(None, alias="dateFrom", pattern=ISO_DATE_PATTERN),
                date_to: Optional[str] = Query(None, alias="dateTo", pattern=ISO_DATE_PATTERN)
        ):
            filters = BatchHistoryFilters(type=type, date_from=date_from, date_to=date_to)
            content = await self.batch_history.export_csv(filters)
            file_name = f"batch_history_{date.today().isoformat()}.csv"
            return Response(
                content=content,
                media_type="text/csv",
                headers={"Content-Disposition": f"attachment; filename={file_name}"}
            )

        @self.app.get("/api/batches/{batch_id}")
        async def get_batch(batch_id: str):
            batch = await self.batch_history.get_batch(batch_id)
            if not batch:
                raise HTTPException(status_code=404, detail="Batch not found")
            return _batch_to_dict(batch)

        @self.app.get("/api/customers/{customer_id}")
        async def get_customer(customer_id: str):
            customer = await self.batch_history.get_customer(customer_id)
            if not customer:
                raise HTTPException(status_code=404, detail="Customer not found")
            return _customer_to_dict(customer)

        @self.app.post("/api/admin/retention")
        async def run_retention_sweep(data: Optional[RetentionRequest] = None):
            """Run one retention sweep immediately."""
            retention_days = data.retention_days if data and data.retention_days else self.retention_days
            deleted = await self.retention_service.run_once(retention_days)
            return {"status": "success", "deleted": deleted, "retentionDays": retention_days}

        @self.app.middleware("http")
        async def log_unhandled_errors(request: Request, call_next):
            try:
                return await call_next(request)
            except Exception as e:
                logger.error(f"Unhandled error on {request.method} {request.url.path}: {e}", exc_info=True)
                return JSONResponse(status_code=500, content={"error": "Internal server error"})
