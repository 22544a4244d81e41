"""
Address Value Object

Ledger account addresses are 20 bytes written as `0x` + 40 hex digits.
The all-zero address is the "no owner" sentinel of a ticket.
"""

import re
from typing import NewType

from src.platform.exception.exceptions import DomainError


Address = NewType('Address', str)

ADDRESS_BYTE_LENGTH = 20
ZERO_ADDRESS = Address('0x' + '00' * ADDRESS_BYTE_LENGTH)

_ADDRESS_PATTERN = re.compile(r'^0x[0-9a-f]{40}$')


def parse_address(value: str) -> Address:
    """Normalise an address to lower case, raising DomainError when malformed."""
    normalized = value.strip().lower() if isinstance(value, str) else ''
    if not _ADDRESS_PATTERN.match(normalized):
        raise DomainError(f'Invalid address: {value!r}')
    return Address(normalized)


def is_zero_address(address: str) -> bool:
    return address == ZERO_ADDRESS
