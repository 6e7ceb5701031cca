"""Domain models - pure Python dataclasses representing zakat screening entities"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional, Tuple

TRUST_WALLET_ASSETS = "https://raw.githubusercontent.com/trustwallet/assets/master/blockchains/ethereum"


@dataclass(frozen=True)
class BalanceItem:
    """Balance entry as reported by the indexer; any field may be missing"""

    symbol: Optional[str]
    name: Optional[str]
    category: Optional[str]  # provider "type" tag: cryptocurrency, stablecoin, nft, dust...
    balance: Optional[str]  # fixed-point integer, string-encoded
    decimals: Optional[int]
    quote: Optional[float]  # USD value of the whole position
    contract_address: Optional[str]
    logo_url: Optional[str] = None


@dataclass(frozen=True)
class AssetRecord:
    """One classified holding of a wallet on one chain"""

    symbol: str
    name: str
    category: str
    contract_address: str
    decimals: int
    raw_balance: int
    usd: float
    is_liquid: bool
    logo_url: Optional[str] = None

    @property
    def balance(self) -> Decimal:
        """Human-scaled balance (raw / 10^decimals)"""
        return Decimal(self.raw_balance).scaleb(-self.decimals)

    @property
    def display_logo(self) -> str:
        if self.logo_url:
            return self.logo_url
        if self.symbol == "ETH":
            return f"{TRUST_WALLET_ASSETS}/info/logo.png"
        if self.contract_address:
            return f"{TRUST_WALLET_ASSETS}/assets/{self.contract_address}/logo.png"
        return "/icon.png"


@dataclass(frozen=True)
class LiabilityRecord:
    """Detected debt position; usd is always the positive amount owed"""

    symbol: str
    name: str
    category: str
    usd: float


@dataclass(frozen=True)
class WalletScreening:
    """Screening engine output, before user-declared debts are applied"""

    address: str
    chain_id: int
    holdings: Tuple[AssetRecord, ...]  # every parsed non-liability record
    assets: Tuple[AssetRecord, ...]  # liquid records above the dust threshold
    liabilities: Tuple[LiabilityRecord, ...]
    liquid_total_usd: float
    liabilities_total_usd: float
    net_worth_usd: float  # max(0, liquid - liabilities)


@dataclass(frozen=True)
class ZakatAssessment:
    """Output of the zakat calculator"""

    net_worth_usd: float
    nisab: float
    is_liable: bool
    zakat_due: float
    diagnostic: str


@dataclass(frozen=True)
class ScreeningResult:
    """Full answer for one wallet: screening composed with the calculation"""

    address: str
    chain_id: int
    total_net_usd: float
    nisab: float
    assets: Tuple[AssetRecord, ...]
    liabilities: Tuple[LiabilityRecord, ...]
    liquid_total_usd: float
    liabilities_total_usd: float
    user_debts_usd: float
    is_liable: bool
    zakat_due: float
    diagnostic: str
    halal_score: Optional[int] = None
    hawl: Optional["HawlReport"] = None  # only when requested


@dataclass(frozen=True)
class MetalPrices:
    """Spot price per gram in USD"""

    gold_usd_per_gram: float
    silver_usd_per_gram: float


@dataclass(frozen=True)
class NisabThreshold:
    """Lesser of the gold and silver based thresholds"""

    value: float
    gold_value: float
    silver_value: float
    basis: str  # "gold" | "silver"


@dataclass(frozen=True)
class Transfer:
    """Transaction touching a wallet, as reported by the indexer"""

    timestamp: Optional[datetime]
    from_address: Optional[str]
    to_address: Optional[str]
    value_quote: float


@dataclass(frozen=True)
class MonthlyBalanceSample:
    """Reconstructed net USD at the end of one calendar month"""

    month: str  # YYYY-MM
    value: float


@dataclass(frozen=True)
class MonthlyHawlEstimate:
    """Forward replay of the trailing 12 months"""

    months: Tuple[MonthlyBalanceSample, ...]
    hawl: float


@dataclass(frozen=True)
class SimpleHawlEstimate:
    """Backward reconstruction of the balance held one year ago"""

    current_usd: float
    one_year_ago_usd: float
    hawl: float
    plus_value: float


@dataclass(frozen=True)
class HawlReport:
    """Both advisory estimates for one wallet, from a single balances and transfers snapshot"""

    address: str
    chain_id: int
    monthly: MonthlyHawlEstimate
    simple: SimpleHawlEstimate


@dataclass(frozen=True)
class PaymentCall:
    """Unsigned contract call for an external wallet to submit"""

    to: str  # token contract
    data: str  # ABI-encoded calldata
    value: int
    recipient: str
    amount_base_units: int
    amount_usd: Decimal
