from src.platform.logging.loguru_io import Logger
from src.service.ticket_sale.app.dto.sale_overview import SaleOverview
from src.service.ticket_sale.app.interface.i_contract_state_store import IContractStateStore
from src.service.ticket_sale.app.service.contract_guard import load_sale_phase
from src.service.ticket_sale.domain.enum.state_key import StateKey
from src.service.ticket_sale.domain.value_object.invocation_context import InvocationContext


class GetSaleOverviewUseCase:
    def __init__(self, *, state_store: IContractStateStore) -> None:
        self.state_store = state_store

    @Logger.io
    def get_sale_overview(self, *, context: InvocationContext) -> SaleOverview:
        """Public contract state: configuration, current phase and every ticket."""
        return SaleOverview(
            owner=self.state_store.get_address(StateKey.OWNER),
            phase=load_sale_phase(self.state_store, context),
            end_of_sale=self.state_store.get_uint64(StateKey.END_OF_SALE),
            release_fee=self.state_store.get_uint64(StateKey.RELEASE_FEE),
            no_refund_block_count=self.state_store.get_uint64(StateKey.NO_REFUND_BLOCK_COUNT),
            tickets=tuple(self.state_store.get_tickets(StateKey.TICKETS)),
        )
