"""
Reserve Ticket Use Case

Value-bearing seat reservation. The attached payment is either applied in full to the
ticket price (excess refunded) or refunded in full; the contract never keeps
anything else.

Outcomes:
- Hard abort (raises): sale not open, unknown seat, oversized customer identifier
- Soft failure (returns False): seat already taken, payment below price
- Success (returns True): caller owns the ticket
"""

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import ConflictError, DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.ticket_sale.app.interface.i_contract_state_store import IContractStateStore
from src.service.ticket_sale.app.interface.i_value_transfer import IValueTransfer
from src.service.ticket_sale.app.service.contract_guard import (
    load_sale_phase,
    load_ticket_ledger,
    refund_caller,
    save_ticket_ledger,
)
from src.service.ticket_sale.domain.value_object.invocation_context import InvocationContext
from src.service.ticket_sale.domain.value_object.seat import Seat
from src.service.ticket_sale.domain.value_object.text import is_utf8_text


class ReserveTicketUseCase:
    def __init__(
        self,
        *,
        state_store: IContractStateStore,
        value_transfer: IValueTransfer,
        max_customer_identifier_length: int = settings.MAX_CUSTOMER_IDENTIFIER_LENGTH,
    ) -> None:
        self.state_store = state_store
        self.value_transfer = value_transfer
        self.max_customer_identifier_length = max_customer_identifier_length

    @Logger.io
    def reserve(
        self, *, context: InvocationContext, seat: Seat, customer_identifier: str = ''
    ) -> bool:
        payment = context.attached_value

        if not load_sale_phase(self.state_store, context).is_open:
            self._refund(context, payment)
            raise ConflictError('Sale not open')

        ledger = load_ticket_ledger(self.state_store)
        index = ledger.find_index(seat)
        if index is None:
            self._refund(context, payment)
            raise NotFoundError('Seat not found')

        if len(customer_identifier) > self.max_customer_identifier_length:
            self._refund(context, payment)
            raise DomainError(
                f'Customer identifier exceeds {self.max_customer_identifier_length} characters'
            )
        if not is_utf8_text(customer_identifier):
            self._refund(context, payment)
            raise DomainError('Customer identifier must be valid UTF-8 text')

        ticket = ledger.tickets[index]
        if not ticket.is_available:
            Logger.base.info(f'⚠️ [RESERVE] Seat {seat.label} already reserved, refunding {payment}')
            self._refund(context, payment)
            return False

        if payment < ticket.price:
            Logger.base.info(
                f'⚠️ [RESERVE] Seat {seat.label} costs {ticket.price}, got {payment}, refunding'
            )
            self._refund(context, payment)
            return False

        # Ticket state is persisted before any value leaves the contract
        ledger.reserve(index=index, owner=context.caller, customer_identifier=customer_identifier)
        save_ticket_ledger(self.state_store, ledger)
        self._refund(context, payment - ticket.price)

        Logger.base.info(f'✅ [RESERVE] Seat {seat.label} reserved by {context.caller}')
        return True

    def _refund(self, context: InvocationContext, amount: int) -> None:
        refund_caller(self.value_transfer, context, amount=amount)
