from typing import Tuple

import attrs

from src.service.ticket_sale.domain.entity.ticket_entity import Ticket
from src.service.ticket_sale.domain.enum.sale_phase import SalePhase
from src.service.ticket_sale.domain.value_object.address import Address


@attrs.define(frozen=True)
class SaleOverview:
    owner: Address
    phase: SalePhase
    end_of_sale: int
    release_fee: int
    no_refund_block_count: int
    tickets: Tuple[Ticket, ...]

    @property
    def available_count(self) -> int:
        return sum(1 for ticket in self.tickets if ticket.is_available)
