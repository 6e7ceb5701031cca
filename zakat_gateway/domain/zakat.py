"""Zakat calculator - Nisab threshold and the 2.5% rate"""

from zakat_gateway.domain.exceptions import InvalidInputError
from zakat_gateway.domain.models import MetalPrices, NisabThreshold, ZakatAssessment

ZAKAT_RATE = 0.025
NISAB_GOLD_GRAMS = 85
NISAB_SILVER_GRAMS = 595

INSTANTANEOUS_BALANCE_NOTE = (
    "Note: this calculation uses the current net balance (after detected DeFi debts). "
    "Full compliance requires zakat on the minimum amount held over a lunar year (hawl), "
    "which needs the wallet's complete history."
)


def compute_nisab(
    prices: MetalPrices,
    gold_grams: float = NISAB_GOLD_GRAMS,
    silver_grams: float = NISAB_SILVER_GRAMS,
) -> NisabThreshold:
    """
    Nisab in USD: the lesser of 85g of gold and 595g of silver.

    Example:
        gold $75/g, silver $0.95/g -> min(6375.00, 565.25) = 565.25 (silver basis)
    """
    gold_value = prices.gold_usd_per_gram * gold_grams
    silver_value = prices.silver_usd_per_gram * silver_grams

    if silver_value <= gold_value:
        return NisabThreshold(value=silver_value, gold_value=gold_value, silver_value=silver_value, basis="silver")
    return NisabThreshold(value=gold_value, gold_value=gold_value, silver_value=silver_value, basis="gold")


def build_diagnostic(is_liable: bool, zakat_due: float) -> str:
    if is_liable:
        headline = f"You are liable for Zakat. Amount due: ${zakat_due:,.2f}"
    else:
        headline = "You are not liable for Zakat (net worth is below the Nisab)."
    return f"{headline}\n\n{INSTANTANEOUS_BALANCE_NOTE}"


def calculate_zakat(net_worth_usd: float, nisab: float, user_debts_usd: float = 0.0) -> ZakatAssessment:
    """
    Apply the Nisab test and the zakat rate.

    Args:
        net_worth_usd: Wallet net worth, already net of detected liabilities
        nisab: Threshold in USD
        user_debts_usd: Debts declared by the user for this calculation only

    Returns:
        ZakatAssessment where zakat_due is 0 below the Nisab, 2.5% of net worth otherwise

    Raises:
        InvalidInputError: Negative debts or Nisab
    """
    if user_debts_usd < 0:
        raise InvalidInputError("Declared debts cannot be negative")
    if nisab < 0:
        raise InvalidInputError("Nisab cannot be negative")

    net_worth = max(0.0, net_worth_usd - user_debts_usd)
    is_liable = net_worth >= nisab
    zakat_due = net_worth * ZAKAT_RATE if is_liable else 0.0

    return ZakatAssessment(
        net_worth_usd=net_worth,
        nisab=nisab,
        is_liable=is_liable,
        zakat_due=zakat_due,
        diagnostic=build_diagnostic(is_liable, zakat_due),
    )
