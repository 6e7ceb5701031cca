"""Stablecoin payment call for the amount of zakat due"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from zakat_gateway.domain.exceptions import InvalidInputError
from zakat_gateway.domain.models import PaymentCall
from zakat_gateway.domain.validation import validate_address

TRANSFER_SELECTOR = "a9059cbb"  # transfer(address,uint256)
MAX_UINT256 = 2**256 - 1


def to_base_units(amount: Union[Decimal, float, str], decimals: int) -> int:
    """
    Convert a token amount to integer base units, rounding half up.

    Example:
        20.0000005 USDC (6 decimals) -> 20000001
    """
    try:
        value = Decimal(str(amount))
    except InvalidOperation as e:
        raise InvalidInputError(f"Invalid amount: {amount!r}") from e
    if not value.is_finite():
        raise InvalidInputError(f"Invalid amount: {amount!r}")
    return int(value.scaleb(decimals).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def encode_transfer(recipient: str, amount_base_units: int) -> str:
    """ABI-encode an ERC-20 transfer call"""
    address_word = recipient[2:].lower().rjust(64, "0")
    amount_word = format(amount_base_units, "x").rjust(64, "0")
    return f"0x{TRANSFER_SELECTOR}{address_word}{amount_word}"


def build_payment_call(
    amount_usd: Union[Decimal, float, str],
    token_address: str,
    recipient: str,
    decimals: int = 6,
) -> PaymentCall:
    """
    Prepare the stablecoin transfer paying zakat to the recipient.

    The call is unsigned; the payer's wallet submits it (gas sponsored by
    its paymaster).

    Raises:
        InvalidInputError: Non-positive amount or malformed addresses
    """
    validate_address(token_address)
    validate_address(recipient)

    amount_base_units = to_base_units(amount_usd, decimals)
    if amount_base_units <= 0:
        raise InvalidInputError("Payment amount must be positive")
    if amount_base_units > MAX_UINT256:
        raise InvalidInputError("Payment amount is too large")

    return PaymentCall(
        to=token_address,
        data=encode_transfer(recipient, amount_base_units),
        value=0,
        recipient=recipient,
        amount_base_units=amount_base_units,
        amount_usd=Decimal(str(amount_usd)),
    )
