"""Unit tests for metal price sources"""

import httpx
import pytest
from zakat_gateway.domain.exceptions import MalformedProviderDataError, ProviderUnavailableError
from zakat_gateway.infrastructure.clients.metal_prices import (
    TROY_OUNCE_GRAMS,
    MetalPriceApiClient,
    StaticPriceOracle,
)


def make_client(handler) -> MetalPriceApiClient:
    return MetalPriceApiClient(
        base_url="https://metals.test/v1",
        api_key="test-key",
        transport=httpx.MockTransport(handler),
    )


async def test_static_oracle():
    prices = await StaticPriceOracle(75.0, 0.95).get_metal_prices()

    assert prices.gold_usd_per_gram == 75.0
    assert prices.silver_usd_per_gram == 0.95


async def test_metal_price_api_direct_usd_quotes():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        return httpx.Response(
            200,
            json={"success": True, "base": "USD", "rates": {"USDXAU": 2332.86, "USDXAG": 29.55}},
        )

    prices = await make_client(handler).get_metal_prices()

    assert seen["path"] == "/v1/latest"
    assert seen["params"] == {"api_key": "test-key", "base": "USD", "currencies": "XAU,XAG"}
    assert prices.gold_usd_per_gram == pytest.approx(2332.86 / TROY_OUNCE_GRAMS)
    assert prices.silver_usd_per_gram == pytest.approx(29.55 / TROY_OUNCE_GRAMS)


async def test_metal_price_api_inverse_rates_fallback():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"success": True, "rates": {"XAU": 0.0005, "XAG": 0.04}})

    prices = await make_client(handler).get_metal_prices()

    assert prices.gold_usd_per_gram == pytest.approx(2000 / TROY_OUNCE_GRAMS)
    assert prices.silver_usd_per_gram == pytest.approx(25 / TROY_OUNCE_GRAMS)


@pytest.mark.parametrize(
    "body",
    [
        {"success": False, "error": {"code": 101}},
        {"success": True, "rates": {}},
        {"success": True, "rates": {"XAU": 0, "XAG": 0.04}},
        {"success": True, "rates": {"USDXAU": -1, "USDXAG": 29.5}},
        {"success": True, "rates": ["XAU"]},
    ],
)
async def test_metal_price_api_bad_payload(body):
    with pytest.raises(MalformedProviderDataError):
        await make_client(lambda request: httpx.Response(200, json=body)).get_metal_prices()


async def test_metal_price_api_http_error():
    with pytest.raises(ProviderUnavailableError) as exc_info:
        await make_client(lambda request: httpx.Response(502)).get_metal_prices()

    assert exc_info.value.provider == "metal_prices"


@pytest.mark.parametrize("rates", [{"USDXAU": "NaN", "USDXAG": 29.5}, {"USDXAU": 2300.0, "USDXAG": "inf"}])
async def test_metal_price_api_non_finite_rates(rates):
    with pytest.raises(MalformedProviderDataError):
        await make_client(lambda request: httpx.Response(200, json={"success": True, "rates": rates})).get_metal_prices()


async def test_static_oracle_keeps_explicit_zero():
    prices = await StaticPriceOracle(0.0, 0.95).get_metal_prices()

    assert prices.gold_usd_per_gram == 0.0
