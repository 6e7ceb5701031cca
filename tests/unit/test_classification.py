"""Unit tests for the liquidity and liability decision tables"""

import pytest
from decimal import Decimal
from zakat_gateway.domain.classification import (
    LIQUIDITY_RULES,
    STABLECOINS,
    ClassificationPolicy,
    Liquidity,
    classify_liquidity,
    is_included,
    is_liability,
    match_liquidity_rule,
    parse_raw_balance,
    quote_usd,
    to_asset_record,
    to_liability_record,
)


def test_liquidity_rules_priority_order():
    """Rules are evaluated stablecoin, native coin, valued crypto, fallback"""
    assert [name for name, _, _ in LIQUIDITY_RULES] == [
        "stablecoin",
        "native_coin",
        "valued_cryptocurrency",
        "otherwise",
    ]


@pytest.mark.parametrize("symbol", sorted(STABLECOINS))
def test_stablecoins_always_liquid(make_item, policy, symbol):
    """Stablecoins are liquid whatever their quote or category"""
    item = make_item(symbol=symbol, category="nft", quote=0.01)
    assert match_liquidity_rule(item, policy) == ("stablecoin", Liquidity.LIQUID)


def test_native_coin_liquid_even_when_tiny(make_item, policy):
    item = make_item(symbol="ETH", category="dust", quote=0.2)
    assert match_liquidity_rule(item, policy) == ("native_coin", Liquidity.LIQUID)


def test_native_symbol_is_configurable(make_item):
    policy = ClassificationPolicy(native_symbol="MATIC")
    assert classify_liquidity(make_item(symbol="MATIC", quote=1.0), policy) is Liquidity.LIQUID
    assert classify_liquidity(make_item(symbol="ETH", quote=1.0), policy) is Liquidity.ILLIQUID


def test_cryptocurrency_needs_quote_above_threshold(make_item, policy):
    """Rule 3 is strict: a $10 position is not enough"""
    assert classify_liquidity(make_item(quote=10.01), policy) is Liquidity.LIQUID
    assert classify_liquidity(make_item(quote=10.0), policy) is Liquidity.ILLIQUID
    assert classify_liquidity(make_item(quote=None), policy) is Liquidity.ILLIQUID


def test_other_categories_illiquid(make_item, policy):
    item = make_item(category="nft", quote=5000.0)
    assert match_liquidity_rule(item, policy) == ("otherwise", Liquidity.ILLIQUID)


def test_crypto_threshold_is_configurable(make_item):
    policy = ClassificationPolicy(crypto_liquidity_threshold_usd=100.0)
    assert classify_liquidity(make_item(quote=50.0), policy) is Liquidity.ILLIQUID


def test_liability_by_keyword_in_name(make_item):
    """A positive-balance 'Aave Debt Token' is a liability"""
    item = make_item(name="Aave Debt Token", symbol="aDEBT", balance="5000")
    assert is_liability(item) is True


@pytest.mark.parametrize(
    "overrides",
    [
        {"symbol": "variableDebtWETH"},
        {"name": "Compound BORROW"},
        {"category": "loan"},
        {"name": "Protocol Liability Share"},
    ],
)
def test_liability_keywords_case_insensitive(make_item, overrides):
    assert is_liability(make_item(**overrides)) is True


def test_liability_by_negative_balance(make_item):
    """Balance -5 with no keyword is still a liability"""
    item = make_item(name="Plain Token", symbol="PLN", balance="-5")
    assert is_liability(item) is True


def test_not_a_liability(make_item):
    assert is_liability(make_item()) is False
    assert is_liability(make_item(balance=None, name=None, symbol=None, category=None)) is False


def test_liability_amount_is_positive(make_item):
    record = to_liability_record(make_item(name="Debt", quote=-250.0))
    assert record.usd == 250.0
    assert to_liability_record(make_item(name="Debt", quote=None)).usd == 0.0


@pytest.mark.parametrize("quote", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_quote_counts_as_zero(make_item, policy, quote):
    assert quote_usd(make_item(quote=quote)) == 0.0
    assert to_liability_record(make_item(name="Aave Debt", quote=quote)).usd == 0.0
    assert to_asset_record(make_item(quote=quote), policy).usd == 0.0
    assert classify_liquidity(make_item(category="cryptocurrency", quote=quote), policy) is Liquidity.ILLIQUID


def test_parse_raw_balance():
    assert parse_raw_balance("1000") == 1000
    assert parse_raw_balance(" -5 ") == -5
    assert parse_raw_balance("1e3") == 1000
    assert parse_raw_balance("abc") is None
    assert parse_raw_balance("NaN") is None
    assert parse_raw_balance(None) is None


def test_to_asset_record_scales_balance(make_item, policy):
    record = to_asset_record(make_item(symbol="USDC", balance="1500000", decimals=6, quote=1.5), policy)
    assert record is not None
    assert record.balance == Decimal("1.5")
    assert record.is_liquid is True
    assert record.usd == 1.5


def test_to_asset_record_missing_fields(make_item, policy):
    """Entries missing identifying fields are provider noise"""
    assert to_asset_record(make_item(symbol=None), policy) is None
    assert to_asset_record(make_item(decimals=None), policy) is None
    assert to_asset_record(make_item(balance="not-a-number"), policy) is None


def test_to_asset_record_missing_quote_is_zero(make_item, policy):
    record = to_asset_record(make_item(quote=None), policy)
    assert record.usd == 0.0
    assert record.is_liquid is False


def test_is_included_requires_liquid_and_above_dust(make_item, policy):
    liquid_dust = to_asset_record(make_item(symbol="ETH", quote=0.5), policy)
    liquid = to_asset_record(make_item(symbol="ETH", quote=0.51), policy)
    illiquid = to_asset_record(make_item(category="nft", quote=900.0), policy)

    assert is_included(liquid_dust, policy) is False
    assert is_included(liquid, policy) is True
    assert is_included(illiquid, policy) is False


def test_display_logo_fallbacks(make_item, policy):
    eth = to_asset_record(make_item(symbol="ETH", contract_address=""), policy)
    token = to_asset_record(make_item(contract_address="0xabc"), policy)
    with_logo = to_asset_record(make_item(logo_url="https://example.com/x.png"), policy)
    bare = to_asset_record(make_item(contract_address=""), policy)

    assert eth.display_logo.endswith("/ethereum/info/logo.png")
    assert token.display_logo.endswith("/assets/0xabc/logo.png")
    assert with_logo.display_logo == "https://example.com/x.png"
    assert bare.display_logo == "/icon.png"
