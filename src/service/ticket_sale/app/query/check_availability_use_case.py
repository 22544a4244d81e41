from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.ticket_sale.app.interface.i_contract_state_store import IContractStateStore
from src.service.ticket_sale.app.service.contract_guard import load_sale_phase, load_ticket_ledger
from src.service.ticket_sale.domain.value_object.invocation_context import InvocationContext
from src.service.ticket_sale.domain.value_object.seat import Seat


class CheckAvailabilityUseCase:
    def __init__(self, *, state_store: IContractStateStore) -> None:
        self.state_store = state_store

    @Logger.io
    def check_availability(self, *, context: InvocationContext, seat: Seat) -> bool:
        """Whether the seat can be reserved right now; only meaningful while a sale is open."""
        if not load_sale_phase(self.state_store, context).is_open:
            raise ConflictError('Sale not open')

        ticket = load_ticket_ledger(self.state_store).find_ticket(seat)
        if ticket is None:
            raise NotFoundError('Seat not found')

        return ticket.is_available
