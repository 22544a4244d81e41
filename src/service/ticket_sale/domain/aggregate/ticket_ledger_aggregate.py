"""
Ticket Ledger Aggregate - Aggregate Root for a venue's tickets

[DDD Design Principles]
- TicketLedgerAggregate is the Aggregate Root
- Ticket is the entity within the aggregate, one per catalog seat
- The seat catalog is the ordered seat list of the tickets; it has no setter

[Business Invariants]
- Ticket count equals catalog size for the lifetime of the contract
- The ticket at position i always belongs to the seat at position i
- No seat appears twice and no seat collides with the "not found" sentinel
- owner == ZERO_ADDRESS <=> the ticket is not reserved
"""

from typing import List, Optional, Sequence

import attrs

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.ticket_sale.domain.entity.ticket_entity import Ticket
from src.service.ticket_sale.domain.value_object.address import (
    ZERO_ADDRESS,
    Address,
    is_zero_address,
)
from src.service.ticket_sale.domain.value_object.seat import Seat, SeatPrice


@attrs.define
class TicketLedgerAggregate:
    tickets: List[Ticket] = attrs.field(factory=list)

    @classmethod
    @Logger.io
    def create_for_catalog(cls, *, seats: Sequence[Seat]) -> 'TicketLedgerAggregate':
        """
        Create one empty ticket per seat - Aggregate root factory method

        Seat order is kept as given; it is the catalog order from then on.
        """
        cls._validate_catalog(seats)
        return cls(tickets=[Ticket(seat=seat) for seat in seats])

    @staticmethod
    def _validate_catalog(seats: Sequence[Seat]) -> None:
        seen: set[Seat] = set()
        for seat in seats:
            if seat.is_unaddressable or seat.has_surrogate_letter:
                raise DomainError(f'Invalid seat in catalog: {seat.label!r}')
            if seat in seen:
                raise DomainError(f'Duplicate seat in catalog: {seat.label}')
            seen.add(seat)

    @property
    def seat_catalog(self) -> tuple[Seat, ...]:
        return tuple(ticket.seat for ticket in self.tickets)

    def find_index(self, seat: Seat) -> Optional[int]:
        """Linear scan by seat identity; None when the seat is not in the catalog."""
        for index, ticket in enumerate(self.tickets):
            if ticket.seat == seat:
                return index
        return None

    def find_ticket(self, seat: Seat) -> Optional[Ticket]:
        index = self.find_index(seat)
        return None if index is None else self.tickets[index]

    @Logger.io
    def apply_prices(self, *, prices: Sequence[SeatPrice]) -> None:
        """
        Price every ticket from a full price list - all or nothing

        Every catalog seat must appear exactly once; an unknown, duplicated or
        missing seat raises DomainError and leaves all prices untouched.
        """
        if len(prices) != len(self.tickets):
            raise DomainError('Seat elements must be equal')

        price_by_seat: dict[Seat, int] = {}
        for entry in prices:
            if entry.seat in price_by_seat:
                raise DomainError(f'Duplicate seat provided: {entry.seat.label}')
            if self.find_index(entry.seat) is None:
                raise DomainError(f'Invalid seat provided: {entry.seat.label}')
            price_by_seat[entry.seat] = entry.price

        # Equal lengths, no duplicates and no unknown seats: every ticket has a price
        for ticket in self.tickets:
            ticket.price = price_by_seat[ticket.seat]

    def reserve(self, *, index: int, owner: Address, customer_identifier: str) -> Ticket:
        ticket = self.tickets[index]
        if not ticket.is_available:
            raise DomainError(f'Seat {ticket.seat.label} is already reserved')
        if is_zero_address(owner):
            raise DomainError('Tickets cannot be reserved for the zero address')
        ticket.owner = owner
        ticket.customer_identifier = customer_identifier
        return ticket

    def release(self, *, index: int) -> Ticket:
        """Return a ticket to the pool; the price stays so it can be bought again."""
        ticket = self.tickets[index]
        ticket.owner = ZERO_ADDRESS
        return ticket

    def reset(self) -> None:
        for ticket in self.tickets:
            ticket.clear()

    @property
    def reserved_count(self) -> int:
        return sum(1 for ticket in self.tickets if not ticket.is_available)
