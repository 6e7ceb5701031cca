"""Pydantic schemas for API request/response validation"""

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from zakat_gateway.domain.models import (
    AssetRecord,
    HawlReport,
    LiabilityRecord,
    MetalPrices,
    NisabThreshold,
)
from zakat_gateway.domain.validation import ADDRESS_PATTERN

ADDRESS_REGEX = ADDRESS_PATTERN.pattern


class ScreenRequest(BaseModel):
    """Request body for POST /v1/zakat/screen"""

    address: str = Field(..., pattern=ADDRESS_REGEX, description="Wallet address (0x + 40 hex)")
    chain_id: Optional[int] = Field(None, gt=0, description="Chain to screen, defaults to Base mainnet")
    nisab: Optional[float] = Field(None, ge=0, description="Nisab in USD, derived from metal prices when omitted")
    user_debts_usd: float = Field(0.0, ge=0, description="Debts to deduct for this calculation only")
    include_hawl: bool = Field(False, description="Also return the advisory Hawl estimates")


class AssetSchema(BaseModel):
    """Single classified holding"""

    symbol: str
    name: str
    category: str
    contract_address: str
    decimals: int
    raw_balance: str
    balance: str
    usd: float
    is_liquid: bool
    logo_url: str

    @classmethod
    def from_record(cls, record: AssetRecord) -> "AssetSchema":
        return cls(
            symbol=record.symbol,
            name=record.name,
            category=record.category,
            contract_address=record.contract_address,
            decimals=record.decimals,
            raw_balance=str(record.raw_balance),
            balance=str(record.balance),
            usd=record.usd,
            is_liquid=record.is_liquid,
            logo_url=record.display_logo,
        )


class LiabilitySchema(BaseModel):
    """Detected debt position"""

    symbol: str
    name: str
    category: str
    usd: float

    @classmethod
    def from_record(cls, record: LiabilityRecord) -> "LiabilitySchema":
        return cls(symbol=record.symbol, name=record.name, category=record.category, usd=record.usd)


class MonthlySampleSchema(BaseModel):
    month: str
    value: float


class HawlResponse(BaseModel):
    """Both advisory Hawl estimates"""

    address: str
    chain_id: int
    approximate: bool = True
    note: str
    monthly: List[MonthlySampleSchema]
    monthly_hawl: float
    current_usd: float
    one_year_ago_usd: float
    simple_hawl: float
    plus_value: float

    @classmethod
    def from_report(cls, report: HawlReport, note: str) -> "HawlResponse":
        return cls(
            address=report.address,
            chain_id=report.chain_id,
            note=note,
            monthly=[MonthlySampleSchema(month=m.month, value=m.value) for m in report.monthly.months],
            monthly_hawl=report.monthly.hawl,
            current_usd=report.simple.current_usd,
            one_year_ago_usd=report.simple.one_year_ago_usd,
            simple_hawl=report.simple.hawl,
            plus_value=report.simple.plus_value,
        )


class ScreenResponse(BaseModel):
    """Response for POST /v1/zakat/screen"""

    address: str
    chain_id: int
    total_net_usd: float
    nisab: float
    is_liable: bool
    zakat_due: float
    diagnostic: str
    liquid_total_usd: float
    liabilities_total_usd: float
    user_debts_usd: float
    halal_score: Optional[int] = None
    assets: List[AssetSchema]
    liabilities: List[LiabilitySchema]
    hawl: Optional[HawlResponse] = None


class BalancesResponse(BaseModel):
    """Response for GET /v1/wallets/{address}/balances"""

    address: str
    chain_id: int
    holdings: List[AssetSchema]
    liabilities: List[LiabilitySchema]


class NisabResponse(BaseModel):
    """Response for GET /v1/nisab"""

    gold_usd_per_gram: float
    silver_usd_per_gram: float
    gold_nisab_usd: float
    silver_nisab_usd: float
    nisab: float
    basis: str

    @classmethod
    def from_threshold(cls, prices: MetalPrices, threshold: NisabThreshold) -> "NisabResponse":
        return cls(
            gold_usd_per_gram=prices.gold_usd_per_gram,
            silver_usd_per_gram=prices.silver_usd_per_gram,
            gold_nisab_usd=threshold.gold_value,
            silver_nisab_usd=threshold.silver_value,
            nisab=threshold.value,
            basis=threshold.basis,
        )


class PaymentRequest(BaseModel):
    """Request body for POST /v1/zakat/payment"""

    payer_address: str = Field(..., pattern=ADDRESS_REGEX, description="Wallet that will sign and submit")
    amount_usd: Decimal = Field(..., gt=0, description="Amount to pay, in USD stablecoin")


class PaymentResponse(BaseModel):
    """Unsigned stablecoin transfer for the payer's wallet"""

    from_address: str
    to: str
    data: str
    value: str
    recipient: str
    token_address: str
    amount_usd: str
    amount_base_units: str
