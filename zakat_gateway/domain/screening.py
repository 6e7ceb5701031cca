"""Screening engine - nets classified holdings against detected liabilities"""

from typing import Iterable, Optional

from zakat_gateway.domain.classification import (
    ClassificationPolicy,
    is_included,
    is_liability,
    to_asset_record,
    to_liability_record,
)
from zakat_gateway.domain.models import BalanceItem, WalletScreening


def screen_balances(
    address: str,
    chain_id: int,
    items: Iterable[BalanceItem],
    policy: ClassificationPolicy,
) -> WalletScreening:
    """
    Classify every balance entry and compute the wallet's net worth.

    Buckets are exclusive: an entry detected as a liability is never also
    counted as a holding, whatever its liquidity.

    Net worth = max(0, sum of included liquid USD - sum of liability USD).
    User-declared debts are not applied here (see calculate_zakat).
    """
    holdings = []
    assets = []
    liabilities = []

    for item in items:
        if is_liability(item):
            liabilities.append(to_liability_record(item))
            continue

        record = to_asset_record(item, policy)
        if record is None:
            continue

        holdings.append(record)
        if is_included(record, policy):
            assets.append(record)

    liquid_total = sum(a.usd for a in assets)
    liabilities_total = sum(l.usd for l in liabilities)

    return WalletScreening(
        address=address,
        chain_id=chain_id,
        holdings=tuple(holdings),
        assets=tuple(assets),
        liabilities=tuple(liabilities),
        liquid_total_usd=liquid_total,
        liabilities_total_usd=liabilities_total,
        net_worth_usd=max(0.0, liquid_total - liabilities_total),
    )


def compute_halal_score(screening: WalletScreening) -> Optional[int]:
    """
    Share (0-100) of the wallet's positively valued holdings that is
    zakatable liquid wealth. None when nothing in the wallet has a value.
    """
    gross = sum(h.usd for h in screening.holdings if h.usd > 0)
    if gross <= 0:
        return None
    return round(100 * min(screening.liquid_total_usd / gross, 1.0))
