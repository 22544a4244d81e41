"""
Ledger Host - the single entry point that invokes the ticket sale contract

Plays the host ledger for the contract:
- Knows the block height and who is calling
- Moves the attached value from caller to contract before the call
- Decodes seat identifiers from their wire bytes
- Runs each invocation inside a unit of work: a raised CustomBaseError (or any other
  exception) restores state, balances and notification log, then re-raises
- Publishes the invocation's notifications only when it succeeds
- Rejects an invocation started while another one is still running

Mutating calls return an InvocationReceipt; read-only calls return their value
directly and never commit.
"""

from typing import Callable, Optional, Sequence, TypeVar

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import ConflictError, DomainError, PaymentError
from src.platform.logging.loguru_io import Logger
from src.platform.state.unit_of_work import SnapshotUnitOfWork
from src.service.ticket_sale.app.codec.ticket_codec import decode_seat
from src.service.ticket_sale.app.command.begin_sale_use_case import BeginSaleUseCase
from src.service.ticket_sale.app.command.configure_release_policy_use_case import (
    ConfigureReleasePolicyUseCase,
)
from src.service.ticket_sale.app.command.create_ticket_contract_use_case import (
    CreateTicketContractUseCase,
)
from src.service.ticket_sale.app.command.end_sale_use_case import EndSaleUseCase
from src.service.ticket_sale.app.command.release_ticket_use_case import ReleaseTicketUseCase
from src.service.ticket_sale.app.command.reserve_ticket_use_case import ReserveTicketUseCase
from src.service.ticket_sale.app.dto.invocation_receipt import InvocationReceipt
from src.service.ticket_sale.app.dto.reservation_query_result import ReservationQueryResult
from src.service.ticket_sale.app.dto.sale_overview import SaleOverview
from src.service.ticket_sale.app.query.check_availability_use_case import (
    CheckAvailabilityUseCase,
)
from src.service.ticket_sale.app.query.check_reservation_use_case import (
    CheckReservationUseCase,
)
from src.service.ticket_sale.app.query.get_sale_overview_use_case import GetSaleOverviewUseCase
from src.service.ticket_sale.domain.enum.state_key import StateKey
from src.service.ticket_sale.domain.value_object.address import (
    ZERO_ADDRESS,
    is_zero_address,
    parse_address,
)
from src.service.ticket_sale.domain.value_object.invocation_context import InvocationContext
from src.service.ticket_sale.domain.value_object.seat import Seat, SeatPrice
from src.service.ticket_sale.domain.value_object.uint64 import require_uint64
from src.service.ticket_sale.driven_adapter.ledger.in_memory_value_ledger_impl import (
    InMemoryValueLedgerImpl,
)
from src.service.ticket_sale.driven_adapter.notification.notification_log_impl import (
    NotificationLogImpl,
)
from src.service.ticket_sale.driven_adapter.state.in_memory_contract_state_store_impl import (
    InMemoryContractStateStoreImpl,
)


T = TypeVar('T')


class LedgerHost:
    def __init__(
        self,
        *,
        state_store: InMemoryContractStateStoreImpl,
        value_ledger: InMemoryValueLedgerImpl,
        notification_log: NotificationLogImpl,
        initial_height: int = settings.INITIAL_BLOCK_HEIGHT,
        max_customer_identifier_length: int = settings.MAX_CUSTOMER_IDENTIFIER_LENGTH,
    ) -> None:
        self.state_store = state_store
        self.value_ledger = value_ledger
        self.notification_log = notification_log
        self.height = initial_height
        self._unit_of_work = SnapshotUnitOfWork(
            participants=[state_store, value_ledger, notification_log]
        )
        self._invocation_in_progress = False

        # Commands
        self.create_ticket_contract_use_case = CreateTicketContractUseCase(state_store=state_store)
        self.begin_sale_use_case = BeginSaleUseCase(state_store=state_store)
        self.end_sale_use_case = EndSaleUseCase(state_store=state_store)
        self.reserve_ticket_use_case = ReserveTicketUseCase(
            state_store=state_store,
            value_transfer=value_ledger,
            max_customer_identifier_length=max_customer_identifier_length,
        )
        self.release_ticket_use_case = ReleaseTicketUseCase(
            state_store=state_store, value_transfer=value_ledger
        )
        self.configure_release_policy_use_case = ConfigureReleasePolicyUseCase(
            state_store=state_store
        )

        # Queries
        self.check_availability_use_case = CheckAvailabilityUseCase(state_store=state_store)
        self.check_reservation_use_case = CheckReservationUseCase(state_store=state_store)
        self.get_sale_overview_use_case = GetSaleOverviewUseCase(state_store=state_store)

    @property
    def contract_address(self) -> str:
        return self.value_ledger.contract_address

    @property
    def is_deployed(self) -> bool:
        return not is_zero_address(self.state_store.get_address(StateKey.OWNER))

    @Logger.io
    def mine_blocks(self, count: int = 1) -> int:
        if count < 1:
            raise DomainError('Block count must be positive')
        self.height += count
        return self.height

    # ========================================================================
    # Mutating invocations
    # ========================================================================

    @Logger.io
    def deploy(
        self, *, caller: str, seats: Sequence[Seat], venue_name: str
    ) -> InvocationReceipt[None]:
        return self._invoke(
            caller=caller,
            requires_deployment=False,
            operation=lambda context: self._discard(
                self.create_ticket_contract_use_case.create_contract(
                    context=context, seats=seats, venue_name=venue_name
                )
            ),
        )

    @Logger.io
    def begin_sale(
        self,
        *,
        caller: str,
        prices: Sequence[SeatPrice],
        show_name: str,
        organiser: str,
        time: int,
        end_of_sale: int,
    ) -> InvocationReceipt[None]:
        return self._invoke(
            caller=caller,
            operation=lambda context: self.begin_sale_use_case.begin_sale(
                context=context,
                prices=prices,
                show_name=show_name,
                organiser=organiser,
                time=time,
                end_of_sale=end_of_sale,
            ),
        )

    @Logger.io
    def end_sale(self, *, caller: str) -> InvocationReceipt[None]:
        return self._invoke(
            caller=caller,
            operation=lambda context: self.end_sale_use_case.end_sale(context=context),
        )

    @Logger.io
    def reserve(
        self, *, caller: str, seat_id: bytes, value: int = 0, customer_identifier: str = ''
    ) -> InvocationReceipt[bool]:
        return self._invoke(
            caller=caller,
            value=value,
            operation=lambda context: self.reserve_ticket_use_case.reserve(
                context=context,
                seat=decode_seat(seat_id),
                customer_identifier=customer_identifier,
            ),
        )

    @Logger.io
    def release_ticket(self, *, caller: str, seat_id: bytes) -> InvocationReceipt[int]:
        return self._invoke(
            caller=caller,
            operation=lambda context: self.release_ticket_use_case.release_ticket(
                context=context, seat=decode_seat(seat_id)
            ),
        )

    @Logger.io
    def set_ticket_release_fee(self, *, caller: str, release_fee: int) -> InvocationReceipt[None]:
        return self._invoke(
            caller=caller,
            operation=lambda context: (
                self.configure_release_policy_use_case.set_ticket_release_fee(
                    context=context, release_fee=release_fee
                )
            ),
        )

    @Logger.io
    def set_no_release_blocks(
        self, *, caller: str, no_release_blocks: int
    ) -> InvocationReceipt[None]:
        return self._invoke(
            caller=caller,
            operation=lambda context: (
                self.configure_release_policy_use_case.set_no_release_blocks(
                    context=context, no_release_blocks=no_release_blocks
                )
            ),
        )

    # ========================================================================
    # Read-only invocations
    # ========================================================================

    @Logger.io
    def check_availability(self, *, seat_id: bytes) -> bool:
        return self._call(
            lambda context: self.check_availability_use_case.check_availability(
                context=context, seat=decode_seat(seat_id)
            )
        )

    @Logger.io
    def check_reservation(self, *, seat_id: bytes, address: str) -> ReservationQueryResult:
        return self._call(
            lambda context: self.check_reservation_use_case.check_reservation(
                seat=decode_seat(seat_id), address=parse_address(address)
            )
        )

    @Logger.io
    def get_sale_overview(self) -> SaleOverview:
        return self._call(
            lambda context: self.get_sale_overview_use_case.get_sale_overview(context=context)
        )

    # ========================================================================
    # Invocation plumbing
    # ========================================================================

    def _invoke(
        self,
        *,
        caller: str,
        operation: Callable[[InvocationContext], T],
        value: int = 0,
        requires_deployment: bool = True,
    ) -> InvocationReceipt[T]:
        caller_address = parse_address(caller)
        if is_zero_address(caller_address):
            raise DomainError('Invalid caller address')
        require_uint64(value, name='Attached value')

        with self._exclusive():
            with self._unit_of_work as uow:
                if requires_deployment and not self.is_deployed:
                    raise ConflictError('Contract not deployed')

                if not self.value_ledger.transfer_between(
                    sender=caller_address, recipient=self.value_ledger.contract_address, amount=value
                ):
                    raise PaymentError(f'Caller balance cannot cover attached value {value}')
                transfers_before = len(self.value_ledger.transfer_log)

                context = InvocationContext(
                    caller=caller_address, current_height=self.height, attached_value=value
                )
                return_value = operation(context)

                self.notification_log.publish(context.notifications)
                transfers = tuple(self.value_ledger.transfer_log[transfers_before:])
                uow.commit()

        return InvocationReceipt(
            return_value=return_value,
            block_height=context.current_height,
            transfers=transfers,
            notifications=tuple(context.notifications),
        )

    def _call(self, operation: Callable[[InvocationContext], T]) -> T:
        with self._exclusive():
            # Never committed: whatever the query does is rolled back
            with self._unit_of_work:
                if not self.is_deployed:
                    raise ConflictError('Contract not deployed')
                return operation(
                    InvocationContext(caller=ZERO_ADDRESS, current_height=self.height)
                )

    def _exclusive(self) -> '_InvocationGuard':
        return _InvocationGuard(self)

    @staticmethod
    def _discard(_: object) -> None:
        return None


class _InvocationGuard:
    """Marks the host busy for the duration of one invocation."""

    def __init__(self, host: LedgerHost) -> None:
        self.host = host

    def __enter__(self) -> None:
        if self.host._invocation_in_progress:
            raise ConflictError('Reentrant invocation rejected')
        self.host._invocation_in_progress = True

    def __exit__(self, *args: object) -> Optional[bool]:
        self.host._invocation_in_progress = False
        return None
