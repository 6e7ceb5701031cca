"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request

from zakat_gateway.config import settings
from zakat_gateway.domain.classification import ClassificationPolicy
from zakat_gateway.infrastructure.clients.indexer import IndexerClient
from zakat_gateway.infrastructure.clients.metal_prices import MetalPriceApiClient, PriceOracle, StaticPriceOracle
from zakat_gateway.services.screening import ZakatScreeningService


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_indexer_client() -> IndexerClient:
    """Provide blockchain indexer client instance"""
    return IndexerClient()


def get_price_oracle() -> PriceOracle:
    """Provide the configured metal price source"""
    if settings.price_source == "metalpriceapi":
        return MetalPriceApiClient()
    return StaticPriceOracle()


def get_screening_service(
    indexer: IndexerClient = Depends(get_indexer_client),
    price_oracle: PriceOracle = Depends(get_price_oracle),
) -> ZakatScreeningService:
    """Provide a screening service wired to the configured providers"""
    return ZakatScreeningService(
        indexer=indexer,
        price_oracle=price_oracle,
        policy=ClassificationPolicy.from_settings(settings),
        gold_grams=settings.nisab_gold_grams,
        silver_grams=settings.nisab_silver_grams,
    )
