"""Gold and silver price sources used to derive the Nisab"""

import logging
import math
from typing import Protocol

import httpx

from zakat_gateway.config import settings
from zakat_gateway.domain.exceptions import MalformedProviderDataError, ProviderUnavailableError
from zakat_gateway.domain.models import MetalPrices

logger = logging.getLogger(__name__)

TROY_OUNCE_GRAMS = 31.1034768


class PriceOracle(Protocol):
    async def get_metal_prices(self) -> MetalPrices: ...


class StaticPriceOracle:
    """Fixed prices from configuration, for demos and offline use"""

    def __init__(self, gold_usd_per_gram: float | None = None, silver_usd_per_gram: float | None = None):
        self.gold_usd_per_gram = (
            gold_usd_per_gram if gold_usd_per_gram is not None else settings.static_gold_usd_per_gram
        )
        self.silver_usd_per_gram = (
            silver_usd_per_gram if silver_usd_per_gram is not None else settings.static_silver_usd_per_gram
        )

    async def get_metal_prices(self) -> MetalPrices:
        return MetalPrices(gold_usd_per_gram=self.gold_usd_per_gram, silver_usd_per_gram=self.silver_usd_per_gram)


class MetalPriceApiClient:
    """Client for metalpriceapi.com latest rates (USD base, XAU/XAG)"""

    provider = "metal_prices"

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url if base_url is not None else settings.metal_price_api_base
        self.api_key = api_key if api_key is not None else settings.metal_price_api_key
        self.timeout = timeout if timeout is not None else settings.http_timeout_seconds
        self.transport = transport

    async def get_metal_prices(self) -> MetalPrices:
        """
        Fetch spot gold and silver and convert USD/troy ounce to USD/gram.

        Prefers the direct USDXAU/USDXAG quotes, falling back to 1/XAU.

        Raises:
            ProviderUnavailableError: On timeout, transport or HTTP errors
            MalformedProviderDataError: Unsuccessful payload or unusable rates
        """
        async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.get(
                    "/latest",
                    params={"api_key": self.api_key, "base": "USD", "currencies": "XAU,XAG"},
                )
                response.raise_for_status()
                payload = response.json()

            except httpx.TimeoutException as e:
                raise ProviderUnavailableError(self.provider, f"Metal price API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise ProviderUnavailableError(self.provider, f"Metal price API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise ProviderUnavailableError(self.provider, f"Metal price API unreachable: {e}") from e
            except ValueError as e:
                raise MalformedProviderDataError(self.provider, "Metal price API returned a non-JSON body") from e

        if not isinstance(payload, dict) or not payload.get("success"):
            raise MalformedProviderDataError(self.provider, "Unexpected payload from metal price API")

        rates = payload.get("rates") or {}
        try:
            gold_per_oz = float(rates["USDXAU"]) if rates.get("USDXAU") else 1 / float(rates["XAU"])
            silver_per_oz = float(rates["USDXAG"]) if rates.get("USDXAG") else 1 / float(rates["XAG"])
        except (AttributeError, KeyError, TypeError, ValueError, ZeroDivisionError) as e:
            raise MalformedProviderDataError(self.provider, f"Bad metal rates: {e}") from e

        if not all(math.isfinite(rate) and rate > 0 for rate in (gold_per_oz, silver_per_oz)):
            raise MalformedProviderDataError(self.provider, "Metal rate must be a positive finite number")

        prices = MetalPrices(
            gold_usd_per_gram=gold_per_oz / TROY_OUNCE_GRAMS,
            silver_usd_per_gram=silver_per_oz / TROY_OUNCE_GRAMS,
        )
        logger.debug("Metal prices per gram: gold=%.4f silver=%.4f", prices.gold_usd_per_gram, prices.silver_usd_per_gram)
        return prices
