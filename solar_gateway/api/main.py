"""FastAPI application factory"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from solar_gateway.api.errors import register_exception_handlers
from solar_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from solar_gateway.api.v1 import calendar, homeowners, investors, payments
from solar_gateway.domain.calendar import Calendar
from solar_gateway.infrastructure.database.session import init_db
from solar_gateway.infrastructure.observability.logging import setup_logging
from solar_gateway.infrastructure.observability.metrics import calendar_month_gauge
from solar_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.auto_create_tables:
        init_db()
    yield


def create_app(billing_calendar: Calendar | None = None) -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Solar Financing Gateway",
        description="Homeowner financing contracts, investments and monthly payments",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # One billing calendar per app; the payment run is its only writer
    app.state.calendar = billing_calendar or Calendar(
        start_month=settings.calendar_start_month,
        start_date=settings.calendar_start_date,
    )
    calendar_month_gauge.set(app.state.calendar.current_month)

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(homeowners.router, prefix="/v1", tags=["homeowners"])
    app.include_router(payments.router, prefix="/v1", tags=["payments"])
    app.include_router(investors.router, prefix="/v1", tags=["investors"])
    app.include_router(calendar.router, prefix="/v1", tags=["calendar"])

    return app


app = create_app()
