"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from zakat_gateway.api.middleware import MetricsMiddleware, RequestIDMiddleware
from zakat_gateway.api.v1 import nisab, wallets, zakat
from zakat_gateway.config import settings
from zakat_gateway.infrastructure.observability.logging import setup_logging

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Zakat Gateway",
        description="On-chain wallet screening, zakat calculation and stablecoin payment preparation",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(zakat.router, prefix="/v1", tags=["zakat"])
    app.include_router(wallets.router, prefix="/v1", tags=["wallets"])
    app.include_router(nisab.router, prefix="/v1", tags=["nisab"])

    return app


app = create_app()
