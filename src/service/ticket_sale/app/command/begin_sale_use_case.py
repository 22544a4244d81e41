from typing import Sequence

from src.platform.exception.exceptions import ConflictError, DomainError
from src.platform.logging.loguru_io import Logger
from src.service.ticket_sale.app.interface.i_contract_state_store import IContractStateStore
from src.service.ticket_sale.app.service.contract_guard import (
    load_sale_phase,
    load_ticket_ledger,
    require_contract_owner,
    save_ticket_ledger,
)
from src.service.ticket_sale.domain.domain_event.ticket_sale_events import Show
from src.service.ticket_sale.domain.enum.sale_phase import SalePhase
from src.service.ticket_sale.domain.enum.state_key import StateKey
from src.service.ticket_sale.domain.value_object.invocation_context import InvocationContext
from src.service.ticket_sale.domain.value_object.seat import SeatPrice
from src.service.ticket_sale.domain.value_object.text import require_utf8_text
from src.service.ticket_sale.domain.value_object.uint64 import require_uint64


class BeginSaleUseCase:
    """
    Open a sale: Inactive -> Open

    Flow:
    1. Caller must be the contract owner
    2. No sale may be running or awaiting close
    3. The sale must end at a future block
    4. Price every ticket from the full price list (matched by seat identity)
    5. Persist tickets and EndOfSale, emit Show
    """

    def __init__(self, *, state_store: IContractStateStore) -> None:
        self.state_store = state_store

    @Logger.io
    def begin_sale(
        self,
        *,
        context: InvocationContext,
        prices: Sequence[SeatPrice],
        show_name: str,
        organiser: str,
        time: int,
        end_of_sale: int,
    ) -> None:
        require_contract_owner(
            self.state_store, context, message='Only contract owner can begin a sale'
        )
        if load_sale_phase(self.state_store, context) is not SalePhase.INACTIVE:
            raise ConflictError('Sale currently in progress')

        require_utf8_text(show_name, name='Show name')
        require_utf8_text(organiser, name='Organiser')
        require_uint64(time, name='Show time')
        require_uint64(end_of_sale, name='End of sale')
        if context.current_height >= end_of_sale:
            raise DomainError('Sale must finish in the future')

        ledger = load_ticket_ledger(self.state_store)
        ledger.apply_prices(prices=prices)

        save_ticket_ledger(self.state_store, ledger)
        self.state_store.set_uint64(StateKey.END_OF_SALE, end_of_sale)
        context.emit(
            Show(name=show_name, organiser=organiser, time=time, end_of_sale=end_of_sale)
        )

        Logger.base.info(
            f'🎫 [BEGIN_SALE] {show_name!r} by {organiser!r}: {len(ledger.tickets)} tickets '
            f'on sale until block {end_of_sale}'
        )
