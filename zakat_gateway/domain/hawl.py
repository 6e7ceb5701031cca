"""
Hawl estimators - approximate the minimum balance held over the past year.

Both estimators only see simple transfers (USD value at transfer time).
Swaps, fees, price appreciation and other DeFi flows are invisible to
them, so they disagree for most real wallets. Results are advisory and
are never used for the liability verdict.
"""

from collections import defaultdict
from datetime import datetime, timezone
from typing import Dict, Iterable, Optional

from zakat_gateway.domain.models import (
    HawlReport,
    MonthlyBalanceSample,
    MonthlyHawlEstimate,
    SimpleHawlEstimate,
    Transfer,
    WalletScreening,
)
from zakat_gateway.utils.date_utils import as_utc, month_key, one_year_before, trailing_month_keys

HAWL_MONTHS = 12
HAWL_NOTE = (
    "Approximation based on simple transfers only; swaps, fees and price "
    "changes are not modelled. Treat as advisory."
)


def _same_address(candidate: Optional[str], wallet: str) -> bool:
    return bool(candidate) and candidate.lower() == wallet


def simulate_monthly_net_balance(
    transfers: Iterable[Transfer],
    address: str,
    now: datetime | None = None,
) -> MonthlyHawlEstimate:
    """
    Forward replay over the trailing 12 calendar months.

    Starting from zero, each month adds inbound transfer value and subtracts
    outbound value. A transfer to and from the wallet counts as inbound.
    Snapshots are floored at zero, the running total is not.
    Hawl is the lowest snapshot.
    """
    now = as_utc(now or datetime.now(timezone.utc))
    wallet = address.lower()

    net_by_month: Dict[str, float] = defaultdict(float)
    for tx in transfers:
        if tx.timestamp is None or not tx.value_quote > 0:
            continue
        key = month_key(as_utc(tx.timestamp))
        if _same_address(tx.to_address, wallet):
            net_by_month[key] += tx.value_quote
        elif _same_address(tx.from_address, wallet):
            net_by_month[key] -= tx.value_quote

    running = 0.0
    months = []
    for key in trailing_month_keys(now, HAWL_MONTHS):
        running += net_by_month.get(key, 0.0)
        months.append(MonthlyBalanceSample(month=key, value=max(0.0, running)))

    return MonthlyHawlEstimate(months=tuple(months), hawl=min(m.value for m in months))


def compute_hawl_simple(
    current_usd: float,
    transfers: Iterable[Transfer],
    address: str,
    now: datetime | None = None,
) -> SimpleHawlEstimate:
    """
    Backward reconstruction of the balance one year ago.

    Walks back from the current net worth through transfers of the last
    year: inbound value was not there yet (subtract), outbound value still
    was (add back). hawl = min(current, one year ago),
    plus_value = current - one year ago.
    """
    now = as_utc(now or datetime.now(timezone.utc))
    cutoff = one_year_before(now)
    wallet = address.lower()

    one_year_ago = current_usd
    for tx in transfers:
        if tx.timestamp is None or as_utc(tx.timestamp) <= cutoff:
            continue
        if _same_address(tx.to_address, wallet):
            one_year_ago -= tx.value_quote
        if _same_address(tx.from_address, wallet):
            one_year_ago += tx.value_quote

    one_year_ago = max(0.0, one_year_ago)

    return SimpleHawlEstimate(
        current_usd=current_usd,
        one_year_ago_usd=one_year_ago,
        hawl=min(current_usd, one_year_ago),
        plus_value=current_usd - one_year_ago,
    )


def build_hawl_report(
    screening: WalletScreening,
    transfers: Iterable[Transfer],
    now: datetime | None = None,
) -> HawlReport:
    """Run both estimators over one snapshot; the backward one starts from the screened net worth"""
    transfers = list(transfers)
    return HawlReport(
        address=screening.address,
        chain_id=screening.chain_id,
        monthly=simulate_monthly_net_balance(transfers, screening.address, now),
        simple=compute_hawl_simple(screening.net_worth_usd, transfers, screening.address, now),
    )
