"""
Seat Value Objects

A seat is identified by a signed 32-bit number and a single UTF-16 code unit letter,
e.g. `Seat(number=12, letter='C')`. Identity never changes once a catalog is created.
"""

import attrs

from src.platform.exception.exceptions import DomainError
from src.service.ticket_sale.domain.value_object.uint64 import require_uint64


INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
NUL_LETTER = '\0'


def _validate_number(instance: object, attribute: attrs.Attribute, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise DomainError(f'Seat {attribute.name} must be an integer')
    if not INT32_MIN <= value <= INT32_MAX:
        raise DomainError(f'Seat {attribute.name} must fit in 32 bits')


def _validate_letter(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not isinstance(value, str) or len(value) != 1 or ord(value) > 0xFFFF:
        raise DomainError(f'Seat {attribute.name} must be a single 16-bit character')


@attrs.define(frozen=True)
class Seat:
    """Seat (Value Object)"""

    number: int = attrs.field(validator=_validate_number)
    letter: str = attrs.field(validator=_validate_letter)

    @property
    def is_unaddressable(self) -> bool:
        """Seats with a zero number or NUL letter collide with the "not found" sentinel."""
        return self.number == 0 or self.letter == NUL_LETTER

    @property
    def has_surrogate_letter(self) -> bool:
        """A lone UTF-16 surrogate decodes fine but cannot be rendered as text."""
        return 0xD800 <= ord(self.letter) <= 0xDFFF

    @property
    def label(self) -> str:
        return f'{self.number}{self.letter}'


@attrs.define(frozen=True)
class SeatPrice:
    """Price entry handed to BeginSale, matched against the catalog by seat identity."""

    seat: Seat
    price: int = attrs.field()

    @price.validator
    def _check_price(self, attribute: attrs.Attribute, value: int) -> None:
        require_uint64(value, name='Ticket price')
