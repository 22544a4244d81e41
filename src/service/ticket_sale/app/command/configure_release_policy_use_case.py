from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.ticket_sale.app.interface.i_contract_state_store import IContractStateStore
from src.service.ticket_sale.app.service.contract_guard import (
    load_sale_phase,
    require_contract_owner,
)
from src.service.ticket_sale.domain.domain_event.ticket_sale_events import (
    NoRefundBlocks,
    TicketReleaseFee,
)
from src.service.ticket_sale.domain.enum.state_key import StateKey
from src.service.ticket_sale.domain.value_object.invocation_context import InvocationContext
from src.service.ticket_sale.domain.value_object.uint64 import require_uint64


class ConfigureReleasePolicyUseCase:
    """
    Owner-only release policy settings, writable while no sale is open.

    Values persist across sales until the owner changes them again.
    """

    def __init__(self, *, state_store: IContractStateStore) -> None:
        self.state_store = state_store

    @Logger.io
    def set_ticket_release_fee(self, *, context: InvocationContext, release_fee: int) -> None:
        require_contract_owner(
            self.state_store, context, message='Only contract owner can set release fee'
        )
        self._require_sale_not_open(context)
        require_uint64(release_fee, name='Release fee')

        self.state_store.set_uint64(StateKey.RELEASE_FEE, release_fee)
        context.emit(TicketReleaseFee(amount=release_fee))
        Logger.base.info(f'⚙️ [RELEASE_POLICY] Release fee set to {release_fee}')

    @Logger.io
    def set_no_release_blocks(self, *, context: InvocationContext, no_release_blocks: int) -> None:
        require_contract_owner(
            self.state_store,
            context,
            message='Only contract owner can set no release blocks limit',
        )
        self._require_sale_not_open(context)
        require_uint64(no_release_blocks, name='No release blocks')

        self.state_store.set_uint64(StateKey.NO_REFUND_BLOCK_COUNT, no_release_blocks)
        context.emit(NoRefundBlocks(count=no_release_blocks))
        Logger.base.info(f'⚙️ [RELEASE_POLICY] No-refund window set to {no_release_blocks} blocks')

    def _require_sale_not_open(self, context: InvocationContext) -> None:
        if load_sale_phase(self.state_store, context).is_open:
            raise ConflictError('Sale is open')
