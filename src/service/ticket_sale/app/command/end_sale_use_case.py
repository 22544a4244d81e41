from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.ticket_sale.app.interface.i_contract_state_store import IContractStateStore
from src.service.ticket_sale.app.service.contract_guard import (
    load_sale_phase,
    load_ticket_ledger,
    require_contract_owner,
    save_ticket_ledger,
)
from src.service.ticket_sale.domain.enum.sale_phase import NO_SALE, SalePhase
from src.service.ticket_sale.domain.enum.state_key import StateKey
from src.service.ticket_sale.domain.value_object.invocation_context import InvocationContext


class EndSaleUseCase:
    """Close a finished sale: AwaitingClose -> Inactive, wiping every ticket."""

    def __init__(self, *, state_store: IContractStateStore) -> None:
        self.state_store = state_store

    @Logger.io
    def end_sale(self, *, context: InvocationContext) -> None:
        require_contract_owner(self.state_store, context, message='Only contract owner can end sale')

        phase = load_sale_phase(self.state_store, context)
        if phase is SalePhase.INACTIVE:
            raise ConflictError('Sale not currently in progress')
        if phase is SalePhase.OPEN:
            raise ConflictError('Sale contract not fulfilled')

        ledger = load_ticket_ledger(self.state_store)
        sold = ledger.reserved_count
        ledger.reset()

        save_ticket_ledger(self.state_store, ledger)
        self.state_store.set_uint64(StateKey.END_OF_SALE, NO_SALE)

        Logger.base.info(f'🏁 [END_SALE] Sale closed with {sold}/{len(ledger.tickets)} seats held')
