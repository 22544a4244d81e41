from src.platform.exception.exceptions import ConflictError, ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.ticket_sale.app.interface.i_contract_state_store import IContractStateStore
from src.service.ticket_sale.app.interface.i_value_transfer import IValueTransfer
from src.service.ticket_sale.app.service.contract_guard import (
    load_sale_phase,
    load_ticket_ledger,
    save_ticket_ledger,
    send_value,
)
from src.service.ticket_sale.domain.enum.state_key import StateKey
from src.service.ticket_sale.domain.value_object.invocation_context import InvocationContext
from src.service.ticket_sale.domain.value_object.seat import Seat


class ReleaseTicketUseCase:
    """
    Voluntary ticket release with partial refund

    Flow:
    1. Sale must be open
    2. height + NoRefundBlockCount must stay below EndOfSale
    3. Seat must exist and the caller must hold its ticket
    4. Clear the owner (price stays, the seat is immediately buyable again)
    5. Refund price - ReleaseFee when the price exceeds the fee

    Note: when price <= ReleaseFee nothing is refunded and the holder still loses the
    ticket (the fee acts as a floor).
    """

    def __init__(
        self, *, state_store: IContractStateStore, value_transfer: IValueTransfer
    ) -> None:
        self.state_store = state_store
        self.value_transfer = value_transfer

    @Logger.io
    def release_ticket(self, *, context: InvocationContext, seat: Seat) -> int:
        """
        Returns:
            The amount refunded to the caller
        """
        if not load_sale_phase(self.state_store, context).is_open:
            raise ConflictError('Sale not open')

        end_of_sale = self.state_store.get_uint64(StateKey.END_OF_SALE)
        no_refund_blocks = self.state_store.get_uint64(StateKey.NO_REFUND_BLOCK_COUNT)
        if context.current_height + no_refund_blocks >= end_of_sale:
            raise ConflictError('Surpassed no refund block limit')

        ledger = load_ticket_ledger(self.state_store)
        index = ledger.find_index(seat)
        if index is None:
            raise NotFoundError('Seat not found')

        ticket = ledger.tickets[index]
        if ticket.is_available or ticket.owner != context.caller:
            raise ForbiddenError('You do not own this ticket')

        release_fee = self.state_store.get_uint64(StateKey.RELEASE_FEE)
        refund = ticket.price - release_fee if ticket.price > release_fee else 0

        ledger.release(index=index)
        save_ticket_ledger(self.state_store, ledger)
        send_value(self.value_transfer, recipient=context.caller, amount=refund)

        if refund:
            Logger.base.info(
                f'↩️ [RELEASE] Seat {seat.label} released by {context.caller}, refunded {refund}'
            )
        else:
            Logger.base.warning(
                f'↩️ [RELEASE] Seat {seat.label} released by {context.caller} without refund '
                f'(price {ticket.price} <= fee {release_fee})'
            )
        return refund
