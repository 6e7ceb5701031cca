"""Pytest fixtures for testing"""

import pytest
from typing import Callable
from fastapi.testclient import TestClient
from zakat_gateway.api.main import create_app
from zakat_gateway.api.dependencies import get_price_oracle
from zakat_gateway.domain.classification import ClassificationPolicy
from zakat_gateway.domain.models import BalanceItem
from zakat_gateway.infrastructure.clients.metal_prices import StaticPriceOracle


WALLET = "0x000000000000000000000000000000000000a11c"


@pytest.fixture
def app():
    """FastAPI app with deterministic metal prices (gold $75/g, silver $0.95/g)"""
    app = create_app()
    app.dependency_overrides[get_price_oracle] = lambda: StaticPriceOracle(75.0, 0.95)
    return app


@pytest.fixture
def client(app) -> TestClient:
    """Create FastAPI test client"""
    return TestClient(app)


@pytest.fixture
def policy() -> ClassificationPolicy:
    return ClassificationPolicy()


@pytest.fixture
def make_item() -> Callable[..., BalanceItem]:
    """Factory for indexer balance entries with sensible defaults"""

    def _make(**overrides) -> BalanceItem:
        fields = dict(
            symbol="TKN",
            name="Token",
            category="cryptocurrency",
            balance="1000000000000000000",
            decimals=18,
            quote=100.0,
            contract_address="0x1234567890abcdef1234567890abcdef12345678",
            logo_url=None,
        )
        fields.update(overrides)
        return BalanceItem(**fields)

    return _make


@pytest.fixture
def sample_balances(make_item) -> list[BalanceItem]:
    """1000 USDC, one NFT and a $200 Compound borrow position"""
    return [
        make_item(
            symbol="USDC",
            name="USD Coin",
            category="stablecoin",
            balance="1000000000",
            decimals=6,
            quote=1000.0,
            contract_address="0x833589fcd6edb6e08f4c7c32d4f71b54bda02913",
        ),
        make_item(symbol="BPUNK", name="Based Punks", category="nft", balance="1", decimals=0, quote=350.0),
        make_item(
            symbol="cUSDCv3",
            name="Compound Borrow USDC",
            category="cryptocurrency",
            balance="200000000",
            decimals=6,
            quote=200.0,
        ),
    ]
