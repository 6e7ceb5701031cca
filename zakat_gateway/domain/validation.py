"""Input validation shared by the API and the screening service"""

import re
from typing import Any

from zakat_gateway.domain.exceptions import InvalidAddressError

ADDRESS_PATTERN = re.compile(r"^0x[a-fA-F0-9]{40}$")


def is_valid_address(address: Any) -> bool:
    return isinstance(address, str) and ADDRESS_PATTERN.fullmatch(address) is not None


def validate_address(address: Any) -> str:
    """
    Return the address unchanged if it is a well-formed EVM address.

    Raises:
        InvalidAddressError: Anything other than 0x followed by 40 hex characters
    """
    if not is_valid_address(address):
        raise InvalidAddressError(f"Invalid wallet address: {address!r}")
    return address
