from typing import Sequence

from src.platform.exception.exceptions import ConflictError, DomainError
from src.platform.logging.loguru_io import Logger
from src.service.ticket_sale.app.interface.i_contract_state_store import IContractStateStore
from src.service.ticket_sale.app.service.contract_guard import save_ticket_ledger
from src.service.ticket_sale.domain.aggregate.ticket_ledger_aggregate import (
    TicketLedgerAggregate,
)
from src.service.ticket_sale.domain.domain_event.ticket_sale_events import Venue
from src.service.ticket_sale.domain.enum.state_key import StateKey
from src.service.ticket_sale.domain.value_object.address import is_zero_address
from src.service.ticket_sale.domain.value_object.invocation_context import InvocationContext
from src.service.ticket_sale.domain.value_object.seat import Seat
from src.service.ticket_sale.domain.value_object.text import require_utf8_text


class CreateTicketContractUseCase:
    """
    Contract construction

    The caller becomes the contract owner for good and the seat catalog is fixed:
    one empty ticket per seat, in the order given.
    """

    def __init__(self, *, state_store: IContractStateStore) -> None:
        self.state_store = state_store

    @Logger.io
    def create_contract(
        self, *, context: InvocationContext, seats: Sequence[Seat], venue_name: str
    ) -> TicketLedgerAggregate:
        if not is_zero_address(self.state_store.get_address(StateKey.OWNER)):
            raise ConflictError('Contract already created')
        if is_zero_address(context.caller):
            raise DomainError('Contract owner cannot be the zero address')

        require_utf8_text(venue_name, name='Venue name')
        ledger = TicketLedgerAggregate.create_for_catalog(seats=seats)

        self.state_store.set_address(StateKey.OWNER, context.caller)
        save_ticket_ledger(self.state_store, ledger)
        context.emit(Venue(name=venue_name))

        Logger.base.info(
            f'🏟️ [CREATE] Venue {venue_name!r} with {len(ledger.tickets)} seats, owner {context.caller}'
        )
        return ledger
