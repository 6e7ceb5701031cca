"""Asset classifier - ordered decision tables for liquidity and liability"""

import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Callable, FrozenSet, List, Optional, Tuple

from zakat_gateway.domain.models import AssetRecord, BalanceItem, LiabilityRecord

STABLECOINS: FrozenSet[str] = frozenset({"USDC", "USDT", "DAI", "TUSD", "USDP", "GUSD", "LUSD"})
DEBT_KEYWORDS: Tuple[str, ...] = ("debt", "borrow", "loan", "liability")


class Liquidity(str, Enum):
    LIQUID = "liquid"
    ILLIQUID = "illiquid"


@dataclass(frozen=True)
class ClassificationPolicy:
    """Tunable inputs of the decision tables"""

    native_symbol: str = "ETH"
    dust_threshold_usd: float = 0.50
    crypto_liquidity_threshold_usd: float = 10.0
    stablecoins: FrozenSet[str] = STABLECOINS

    @classmethod
    def from_settings(cls, settings) -> "ClassificationPolicy":
        return cls(
            native_symbol=settings.native_symbol,
            dust_threshold_usd=settings.dust_threshold_usd,
            crypto_liquidity_threshold_usd=settings.crypto_liquidity_threshold_usd,
        )


def quote_usd(item: BalanceItem) -> float:
    """USD quote of an entry; missing or non-finite quotes count as $0"""
    if item.quote is None or not math.isfinite(item.quote):
        return 0.0
    return item.quote


LiquidityRule = Tuple[str, Callable[[BalanceItem, ClassificationPolicy], bool], Liquidity]

# Evaluated top to bottom, first match wins. The last rule always matches.
LIQUIDITY_RULES: List[LiquidityRule] = [
    (
        "stablecoin",
        lambda item, policy: item.symbol in policy.stablecoins,
        Liquidity.LIQUID,
    ),
    (
        "native_coin",
        lambda item, policy: item.symbol == policy.native_symbol,
        Liquidity.LIQUID,
    ),
    (
        "valued_cryptocurrency",
        lambda item, policy: item.category == "cryptocurrency"
        and quote_usd(item) > policy.crypto_liquidity_threshold_usd,
        Liquidity.LIQUID,
    ),
    (
        "otherwise",
        lambda item, policy: True,
        Liquidity.ILLIQUID,
    ),
]


def parse_raw_balance(value: Optional[str]) -> Optional[int]:
    """Integer balance from the provider string, None if it is not a number"""
    if value is None:
        return None
    try:
        parsed = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    if not parsed.is_finite():
        return None
    return int(parsed)


def _mentions_debt_keyword(item: BalanceItem) -> bool:
    fields = ((item.name or "").lower(), (item.symbol or "").lower(), (item.category or "").lower())
    return any(keyword in field for keyword in DEBT_KEYWORDS for field in fields)


def _has_negative_balance(item: BalanceItem) -> bool:
    raw = parse_raw_balance(item.balance)
    return raw is not None and raw < 0


LIABILITY_RULES: List[Tuple[str, Callable[[BalanceItem], bool]]] = [
    ("debt_keyword", _mentions_debt_keyword),
    ("negative_balance", _has_negative_balance),
]


def match_liquidity_rule(item: BalanceItem, policy: ClassificationPolicy) -> Tuple[str, Liquidity]:
    """Return (rule name, outcome) of the first liquidity rule matching the item"""
    for name, predicate, outcome in LIQUIDITY_RULES:
        if predicate(item, policy):
            return name, outcome
    return "otherwise", Liquidity.ILLIQUID


def classify_liquidity(item: BalanceItem, policy: ClassificationPolicy) -> Liquidity:
    return match_liquidity_rule(item, policy)[1]


def is_liability(item: BalanceItem) -> bool:
    return any(predicate(item) for _, predicate in LIABILITY_RULES)


def to_liability_record(item: BalanceItem) -> LiabilityRecord:
    """Liability amount is the magnitude of the quote, whatever its sign"""
    return LiabilityRecord(
        symbol=item.symbol or "",
        name=item.name or "",
        category=item.category or "",
        usd=abs(quote_usd(item)),
    )


def to_asset_record(item: BalanceItem, policy: ClassificationPolicy) -> Optional[AssetRecord]:
    """
    Build an AssetRecord from a provider entry.

    Entries missing any identifying field (symbol, name, type, balance,
    decimals, contract address) or carrying an unparseable balance are
    provider noise and yield None. A missing quote counts as $0.
    """
    required = (item.symbol, item.name, item.category, item.balance, item.decimals, item.contract_address)
    if any(field is None for field in required):
        return None

    raw_balance = parse_raw_balance(item.balance)
    if raw_balance is None:
        return None

    return AssetRecord(
        symbol=item.symbol,
        name=item.name,
        category=item.category,
        contract_address=item.contract_address,
        decimals=item.decimals,
        raw_balance=raw_balance,
        usd=quote_usd(item),
        is_liquid=classify_liquidity(item, policy) is Liquidity.LIQUID,
        logo_url=item.logo_url,
    )


def is_included(asset: AssetRecord, policy: ClassificationPolicy) -> bool:
    """Only liquid holdings worth more than the dust threshold count toward zakat"""
    return asset.is_liquid and asset.usd > policy.dust_threshold_usd
