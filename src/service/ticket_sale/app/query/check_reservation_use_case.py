from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.ticket_sale.app.dto.reservation_query_result import ReservationQueryResult
from src.service.ticket_sale.app.interface.i_contract_state_store import IContractStateStore
from src.service.ticket_sale.app.service.contract_guard import load_ticket_ledger
from src.service.ticket_sale.domain.value_object.address import Address, is_zero_address
from src.service.ticket_sale.domain.value_object.seat import Seat


class CheckReservationUseCase:
    """
    Ownership check used by the venue at the door

    Works in any sale phase, so tickets can be verified after the sale has closed
    (until the owner ends the sale and the tickets are wiped).
    """

    def __init__(self, *, state_store: IContractStateStore) -> None:
        self.state_store = state_store

    @Logger.io
    def check_reservation(self, *, seat: Seat, address: Address) -> ReservationQueryResult:
        if is_zero_address(address):
            raise DomainError('Invalid address')

        ticket = load_ticket_ledger(self.state_store).find_ticket(seat)
        if ticket is None:
            raise NotFoundError('Seat not found')

        return ReservationQueryResult(
            owns_ticket=ticket.owner == address,
            customer_identifier=ticket.customer_identifier,
        )
