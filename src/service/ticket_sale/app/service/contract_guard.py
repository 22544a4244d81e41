"""
Contract Guard - checks shared by the ticket sale use cases

Every helper either returns what it loaded or raises a CustomBaseError, which the
ledger host turns into an aborted invocation.
"""

from src.platform.exception.exceptions import DomainError, ForbiddenError, PaymentError
from src.platform.logging.loguru_io import Logger
from src.service.ticket_sale.app.interface.i_contract_state_store import IContractStateStore
from src.service.ticket_sale.app.interface.i_value_transfer import IValueTransfer
from src.service.ticket_sale.domain.aggregate.ticket_ledger_aggregate import (
    TicketLedgerAggregate,
)
from src.service.ticket_sale.domain.enum.sale_phase import SalePhase
from src.service.ticket_sale.domain.enum.state_key import StateKey
from src.service.ticket_sale.domain.value_object.address import Address, is_zero_address
from src.service.ticket_sale.domain.value_object.invocation_context import InvocationContext


def load_sale_phase(state_store: IContractStateStore, context: InvocationContext) -> SalePhase:
    return SalePhase.at(
        end_of_sale=state_store.get_uint64(StateKey.END_OF_SALE),
        current_height=context.current_height,
    )


def load_ticket_ledger(state_store: IContractStateStore) -> TicketLedgerAggregate:
    return TicketLedgerAggregate(tickets=state_store.get_tickets(StateKey.TICKETS))


def save_ticket_ledger(state_store: IContractStateStore, ledger: TicketLedgerAggregate) -> None:
    state_store.set_tickets(StateKey.TICKETS, ledger.tickets)


def require_contract_owner(
    state_store: IContractStateStore, context: InvocationContext, *, message: str
) -> None:
    owner = state_store.get_address(StateKey.OWNER)
    if is_zero_address(owner) or context.caller != owner:
        raise ForbiddenError(message)


def send_value(value_transfer: IValueTransfer, *, recipient: Address, amount: int) -> None:
    """Transfer a positive amount out of the contract; a refused transfer aborts."""
    if amount <= 0:
        return
    if not value_transfer.transfer(recipient, amount):
        raise PaymentError(f'Transfer of {amount} to {recipient} failed')
    Logger.base.info(f'💸 [TRANSFER] {amount} -> {recipient}')


def refund_caller(
    value_transfer: IValueTransfer, context: InvocationContext, *, amount: int
) -> None:
    if amount > context.attached_value:
        raise DomainError('Invalid refund value')
    send_value(value_transfer, recipient=context.caller, amount=amount)
