"""Unit tests for the per-request screening service"""

import asyncio
import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from zakat_gateway.domain.exceptions import InvalidAddressError, InvalidInputError, ProviderUnavailableError
from zakat_gateway.domain.models import Transfer
from zakat_gateway.infrastructure.clients.metal_prices import StaticPriceOracle
from zakat_gateway.services.screening import ZakatScreeningService

WALLET = "0x000000000000000000000000000000000000a11c"


@pytest.fixture
def indexer(sample_balances):
    indexer = MagicMock()
    indexer.chain_id = 8453
    indexer.get_balances = AsyncMock(return_value=sample_balances)
    indexer.get_transfers = AsyncMock(return_value=[])
    return indexer


@pytest.fixture
def service(indexer) -> ZakatScreeningService:
    return ZakatScreeningService(indexer=indexer, price_oracle=StaticPriceOracle(75.0, 0.95))


async def test_assess_wallet_end_to_end(service, indexer):
    """1000 USDC + NFT + $200 borrow, Nisab 565.25 -> liable, $20 due"""
    result = await service.assess_wallet(WALLET)

    indexer.get_balances.assert_awaited_once_with(WALLET, 8453)
    assert result.total_net_usd == pytest.approx(800.0)
    assert result.nisab == pytest.approx(565.25)
    assert result.is_liable is True
    assert result.zakat_due == pytest.approx(20.0)
    assert [a.symbol for a in result.assets] == ["USDC"]
    assert result.halal_score == 74  # 1000 / (1000 + 350)


async def test_assess_wallet_with_caller_nisab_skips_prices(indexer):
    oracle = MagicMock()
    oracle.get_metal_prices = AsyncMock()
    service = ZakatScreeningService(indexer=indexer, price_oracle=oracle)

    result = await service.assess_wallet(WALLET, nisab=1000.0)

    oracle.get_metal_prices.assert_not_awaited()
    assert result.nisab == 1000.0
    assert result.is_liable is False
    assert result.zakat_due == 0.0


async def test_assess_wallet_applies_user_debts(service):
    result = await service.assess_wallet(WALLET, user_debts_usd=300.0)

    assert result.total_net_usd == pytest.approx(500.0)
    assert result.user_debts_usd == 300.0
    assert result.is_liable is False


async def test_invalid_address_rejected_before_network(service, indexer):
    with pytest.raises(InvalidAddressError):
        await service.assess_wallet("0xnot-an-address")

    indexer.get_balances.assert_not_awaited()


async def test_negative_debts_rejected_before_network(service, indexer):
    with pytest.raises(InvalidInputError):
        await service.assess_wallet(WALLET, user_debts_usd=-10.0)

    indexer.get_balances.assert_not_awaited()


async def test_provider_failure_propagates(service, indexer):
    indexer.get_balances.side_effect = ProviderUnavailableError("indexer", "Indexer error: 503")

    with pytest.raises(ProviderUnavailableError):
        await service.assess_wallet(WALLET)


async def test_concurrent_screenings_are_isolated(indexer, make_item):
    other = "0x0000000000000000000000000000000000000b0b"
    balances = {
        WALLET: [make_item(symbol="USDC", quote=1000.0)],
        other: [make_item(symbol="DAI", quote=50.0)],
    }

    async def get_balances(address, chain_id):
        await asyncio.sleep(0.01 if address == WALLET else 0)
        return balances[address]

    indexer.get_balances = AsyncMock(side_effect=get_balances)
    service = ZakatScreeningService(indexer=indexer, price_oracle=StaticPriceOracle(75.0, 0.95))

    first, second = await asyncio.gather(service.assess_wallet(WALLET), service.assess_wallet(other))

    assert first.total_net_usd == 1000.0 and first.is_liable is True
    assert second.total_net_usd == 50.0 and second.is_liable is False


async def test_estimate_hawl(service, indexer):
    indexer.get_transfers.return_value = [
        Transfer(datetime.now(timezone.utc), "0x4200000000000000000000000000000000000010", WALLET, 300.0),
    ]

    report = await service.estimate_hawl(WALLET)

    indexer.get_transfers.assert_awaited_once_with(WALLET, 8453)
    assert report.address == WALLET
    assert report.chain_id == 8453
    assert len(report.monthly.months) == 12
    assert report.monthly.months[-1].value == 300.0
    assert report.simple.current_usd == pytest.approx(800.0)
    assert report.simple.one_year_ago_usd == pytest.approx(500.0)
    assert report.simple.hawl == pytest.approx(500.0)


async def test_estimate_hawl_reports_requested_chain(service, indexer):
    report = await service.estimate_hawl(WALLET, chain_id=1)

    indexer.get_balances.assert_awaited_once_with(WALLET, 1)
    indexer.get_transfers.assert_awaited_once_with(WALLET, 1)
    assert report.chain_id == 1


async def test_assess_wallet_with_hawl_fetches_balances_once(service, indexer):
    """The verdict and the Hawl estimate come from the same balances snapshot"""
    result = await service.assess_wallet(WALLET, include_hawl=True)

    assert indexer.get_balances.await_count == 1
    indexer.get_transfers.assert_awaited_once_with(WALLET, 8453)
    assert result.hawl.chain_id == result.chain_id
    assert result.hawl.simple.current_usd == result.total_net_usd


async def test_assess_wallet_without_hawl_skips_transfers(service, indexer):
    result = await service.assess_wallet(WALLET)

    indexer.get_transfers.assert_not_awaited()
    assert result.hawl is None


async def test_get_nisab_breakdown(service):
    prices, threshold = await service.get_nisab_breakdown()

    assert prices.gold_usd_per_gram == 75.0
    assert threshold.basis == "silver"
