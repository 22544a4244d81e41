import attrs

from src.service.ticket_sale.domain.value_object.address import (
    ZERO_ADDRESS,
    Address,
    is_zero_address,
)
from src.service.ticket_sale.domain.value_object.seat import Seat


@attrs.define
class Ticket:
    seat: Seat
    price: int = 0
    owner: Address = ZERO_ADDRESS
    customer_identifier: str = ''

    @property
    def is_available(self) -> bool:
        return is_zero_address(self.owner)

    def clear(self) -> None:
        self.owner = ZERO_ADDRESS
        self.price = 0
        self.customer_identifier = ''
