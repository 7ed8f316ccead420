"""FastAPI application factory"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from finance_tracker.api.middleware import RequestIDMiddleware, MetricsMiddleware
from finance_tracker.api.v1 import cards, reports, savings, transactions
from finance_tracker.config import Settings, settings as default_settings
from finance_tracker.infrastructure.database.store import LedgerStore
from finance_tracker.infrastructure.observability.logging import setup_logging


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure FastAPI application with its own ledger store"""
    app_settings = app_settings or default_settings

    # Setup structured logging
    setup_logging(app_settings.log_level, service_name=app_settings.service_name)

    store = LedgerStore.from_settings(app_settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store.create_schema()
        yield
        store.dispose()

    app = FastAPI(
        title="Finance Tracker",
        description="Personal ledger with installment purchases and monthly savings",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.store = store

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": app_settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(savings.router, prefix="/v1", tags=["ledger"])
    app.include_router(cards.router, prefix="/v1", tags=["cards"])
    app.include_router(transactions.router, prefix="/v1", tags=["transactions"])
    app.include_router(reports.router, prefix="/v1", tags=["reports"])

    return app


app = create_app()
