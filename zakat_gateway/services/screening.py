"""Per-request orchestration of the zakat screening pipeline"""

import asyncio
import logging
from typing import Optional, Tuple

from zakat_gateway.domain.classification import ClassificationPolicy
from zakat_gateway.domain.exceptions import InvalidInputError
from zakat_gateway.domain.hawl import build_hawl_report
from zakat_gateway.domain.models import (
    HawlReport,
    MetalPrices,
    NisabThreshold,
    ScreeningResult,
    WalletScreening,
)
from zakat_gateway.domain.screening import compute_halal_score, screen_balances
from zakat_gateway.domain.validation import validate_address
from zakat_gateway.domain.zakat import NISAB_GOLD_GRAMS, NISAB_SILVER_GRAMS, calculate_zakat, compute_nisab
from zakat_gateway.infrastructure.clients.indexer import IndexerClient
from zakat_gateway.infrastructure.clients.metal_prices import PriceOracle

logger = logging.getLogger(__name__)


async def _skipped() -> None:
    return None


class ZakatScreeningService:
    """
    Runs one screening per call. Nothing is kept between calls: every
    invocation builds and owns its own records, so concurrent requests
    for different wallets never share state.
    """

    def __init__(
        self,
        indexer: IndexerClient,
        price_oracle: PriceOracle,
        policy: ClassificationPolicy | None = None,
        gold_grams: float = NISAB_GOLD_GRAMS,
        silver_grams: float = NISAB_SILVER_GRAMS,
    ):
        self.indexer = indexer
        self.price_oracle = price_oracle
        self.policy = policy or ClassificationPolicy()
        self.gold_grams = gold_grams
        self.silver_grams = silver_grams

    def _chain(self, chain_id: Optional[int]) -> int:
        return chain_id if chain_id is not None else self.indexer.chain_id

    async def get_nisab_breakdown(self) -> Tuple[MetalPrices, NisabThreshold]:
        prices = await self.price_oracle.get_metal_prices()
        return prices, compute_nisab(prices, self.gold_grams, self.silver_grams)

    async def get_nisab(self) -> NisabThreshold:
        _, threshold = await self.get_nisab_breakdown()
        return threshold

    async def screen_wallet(self, address: str, chain_id: int | None = None) -> WalletScreening:
        """
        Fetch balances and classify them into included assets and liabilities.

        Raises:
            InvalidAddressError: Before any network call
            ProviderUnavailableError: Indexer failure
        """
        validate_address(address)
        chain = self._chain(chain_id)
        items = await self.indexer.get_balances(address, chain)
        screening = screen_balances(address, chain, items, self.policy)
        logger.debug(
            "Screened %s: %d records, %d included, %d liabilities",
            address,
            len(items),
            len(screening.assets),
            len(screening.liabilities),
        )
        return screening

    async def assess_wallet(
        self,
        address: str,
        chain_id: int | None = None,
        nisab: float | None = None,
        user_debts_usd: float = 0.0,
        include_hawl: bool = False,
    ) -> ScreeningResult:
        """
        Screen a wallet and compute the zakat due.

        Balances, prices (when no Nisab is given) and transfers (when the
        Hawl estimate is requested) are fetched once and concurrently, so the
        verdict and the Hawl estimate describe the same snapshot.

        Args:
            address: Wallet address
            chain_id: Chain to query (defaults to the configured chain)
            nisab: Threshold in USD; derived from metal prices when omitted
            user_debts_usd: Debts declared for this calculation, never stored
            include_hawl: Also attach both advisory Hawl estimates

        Raises:
            InvalidInputError: Malformed address or negative amounts
            ProviderUnavailableError: Indexer or price provider failure
        """
        validate_address(address)
        if user_debts_usd < 0:
            raise InvalidInputError("Declared debts cannot be negative")
        if nisab is not None and nisab < 0:
            raise InvalidInputError("Nisab cannot be negative")

        chain = self._chain(chain_id)
        screening, threshold, transfers = await asyncio.gather(
            self.screen_wallet(address, chain),
            self.get_nisab() if nisab is None else _skipped(),
            self.indexer.get_transfers(address, chain) if include_hawl else _skipped(),
        )
        if threshold is not None:
            nisab = threshold.value

        assessment = calculate_zakat(screening.net_worth_usd, nisab, user_debts_usd)

        return ScreeningResult(
            address=address,
            chain_id=screening.chain_id,
            total_net_usd=assessment.net_worth_usd,
            nisab=assessment.nisab,
            assets=screening.assets,
            liabilities=screening.liabilities,
            liquid_total_usd=screening.liquid_total_usd,
            liabilities_total_usd=screening.liabilities_total_usd,
            user_debts_usd=user_debts_usd,
            is_liable=assessment.is_liable,
            zakat_due=assessment.zakat_due,
            diagnostic=assessment.diagnostic,
            halal_score=compute_halal_score(screening),
            hawl=build_hawl_report(screening, transfers) if include_hawl else None,
        )

    async def estimate_hawl(self, address: str, chain_id: int | None = None) -> HawlReport:
        """
        Both advisory Hawl estimates from one balances and one transfer history fetch.

        The backward estimator starts from the current screened net worth.
        """
        validate_address(address)
        chain = self._chain(chain_id)
        screening, transfers = await asyncio.gather(
            self.screen_wallet(address, chain),
            self.indexer.get_transfers(address, chain),
        )
        return build_hawl_report(screening, transfers)
