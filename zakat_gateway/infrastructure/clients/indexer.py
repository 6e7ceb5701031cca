"""Blockchain indexer HTTP client for wallet balances and transfer history"""

import logging
import math
from typing import Any, Dict, List, Optional

import httpx

from zakat_gateway.config import settings
from zakat_gateway.domain.exceptions import MalformedProviderDataError, ProviderUnavailableError
from zakat_gateway.domain.models import BalanceItem, Transfer
from zakat_gateway.utils.date_utils import parse_timestamp

logger = logging.getLogger(__name__)


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _as_float(value: Any) -> Optional[float]:
    """Finite float from a number or numeric string; NaN and infinities are treated as absent"""
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return None
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def _as_int(value: Any) -> Optional[int]:
    number = _as_float(value)
    return None if number is None else int(number)


def parse_balance_item(raw: Any) -> Optional[BalanceItem]:
    """Map one balances_v2 entry; anything that is not an object is dropped"""
    if not isinstance(raw, dict):
        return None
    return BalanceItem(
        symbol=_as_str(raw.get("contract_ticker_symbol")),
        name=_as_str(raw.get("contract_name")),
        category=_as_str(raw.get("type")),
        balance=_as_str(raw.get("balance")),
        decimals=_as_int(raw.get("contract_decimals")),
        quote=_as_float(raw.get("quote")),
        contract_address=_as_str(raw.get("contract_address")),
        logo_url=_as_str(raw.get("logo_url")),
    )


def parse_transfer(raw: Any) -> Optional[Transfer]:
    """Map one transactions_v2 entry; missing values become None / 0"""
    if not isinstance(raw, dict):
        return None
    return Transfer(
        timestamp=parse_timestamp(raw.get("block_signed_at")),
        from_address=_as_str(raw.get("from_address")),
        to_address=_as_str(raw.get("to_address")),
        value_quote=_as_float(raw.get("value_quote")) or 0.0,
    )


class IndexerClient:
    """Client for a Covalent-compatible blockchain indexing API"""

    provider = "indexer"

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        chain_id: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url if base_url is not None else settings.indexer_api_base
        self.api_key = api_key if api_key is not None else settings.indexer_api_key
        self.timeout = timeout if timeout is not None else settings.http_timeout_seconds
        self.chain_id = chain_id if chain_id is not None else settings.chain_id
        self.transport = transport

    async def _get_items(self, path: str, params: Dict[str, str]) -> List[Any]:
        """
        GET an indexer endpoint and return its data.items list.

        Raises:
            ProviderUnavailableError: On timeout, transport or HTTP errors
            MalformedProviderDataError: Body is not JSON or has no items list
        """
        async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.get(path, params={**params, "key": self.api_key})
                response.raise_for_status()
                payload = response.json()

            except httpx.TimeoutException as e:
                raise ProviderUnavailableError(self.provider, f"Indexer timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise ProviderUnavailableError(self.provider, f"Indexer error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise ProviderUnavailableError(self.provider, f"Indexer unreachable: {e}") from e
            except ValueError as e:
                raise MalformedProviderDataError(self.provider, "Indexer returned a non-JSON body") from e

        data = payload.get("data") if isinstance(payload, dict) else None
        items = data.get("items") if isinstance(data, dict) else None
        if not isinstance(items, list):
            raise MalformedProviderDataError(self.provider, "Indexer response has no data.items list")

        logger.debug("Indexer returned %d items for %s", len(items), path)
        return items

    async def get_balances(self, address: str, chain_id: int | None = None) -> List[BalanceItem]:
        """Fetch current fungible token balances of a wallet"""
        chain = chain_id if chain_id is not None else self.chain_id
        items = await self._get_items(
            f"/v1/{chain}/address/{address}/balances_v2/",
            {"nft": "false", "no-nft-fetch": "true"},
        )
        return [parsed for parsed in map(parse_balance_item, items) if parsed is not None]

    async def get_transfers(self, address: str, chain_id: int | None = None) -> List[Transfer]:
        """Fetch transactions touching a wallet, as returned by the indexer"""
        chain = chain_id if chain_id is not None else self.chain_id
        items = await self._get_items(
            f"/v1/{chain}/address/{address}/transactions_v2/",
            {"no-logs": "true"},
        )
        return [parsed for parsed in map(parse_transfer, items) if parsed is not None]
