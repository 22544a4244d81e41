"""
Integration tests for LedgerHost over the in-memory adapters

Test Coverage:
1. The Globe walkthrough: deploy, policy, begin sale, reserve, release, end sale
2. Aborted invocations leave state, balances and notifications untouched
3. Value conservation across the whole contract lifecycle
4. Host rules: zero caller, undeployed contract, redeploy, reentrancy, funding
"""

import pytest

from src.platform.exception.exceptions import (
    ConflictError,
    DecodeError,
    DomainError,
    ForbiddenError,
    NotFoundError,
    PaymentError,
)
from src.service.ticket_sale.app.codec.ticket_codec import encode_seat
from src.service.ticket_sale.domain.domain_event.ticket_sale_events import (
    NoRefundBlocks,
    Show,
    TicketReleaseFee,
    Venue,
)
from src.service.ticket_sale.domain.enum.sale_phase import SalePhase
from src.service.ticket_sale.domain.enum.state_key import StateKey
from src.service.ticket_sale.domain.value_object.address import ZERO_ADDRESS
from src.service.ticket_sale.domain.value_object.seat import SeatPrice
from src.service.ticket_sale.driving_adapter.ledger_host import LedgerHost
from test.constants import (
    ANOTHER_BUYER,
    BUYER,
    CONTRACT_ADDRESS,
    END_OF_SALE,
    ORGANISER,
    OWNER,
    PRICE_1A,
    PRICE_2B,
    SEAT_1A,
    SEAT_2B,
    SHOW_NAME,
    SHOW_TIME,
    UNKNOWN_SEAT,
    VENUE_NAME,
)


pytestmark = pytest.mark.integration

PRICES = [SeatPrice(seat=SEAT_1A, price=PRICE_1A), SeatPrice(seat=SEAT_2B, price=PRICE_2B)]
BUYER_FUNDS = 1_000


def mine_to(host: LedgerHost, height: int) -> None:
    host.mine_blocks(height - host.height)


@pytest.fixture
def deployed_host(ledger_host: LedgerHost, seats) -> LedgerHost:
    ledger_host.deploy(caller=OWNER, seats=seats, venue_name=VENUE_NAME)
    ledger_host.value_ledger.mint(BUYER, BUYER_FUNDS)
    ledger_host.value_ledger.mint(ANOTHER_BUYER, BUYER_FUNDS)
    return ledger_host


@pytest.fixture
def sale_host(deployed_host: LedgerHost) -> LedgerHost:
    """Release fee 10, no-refund window 5, sale open at height 10 until END_OF_SALE"""
    deployed_host.set_ticket_release_fee(caller=OWNER, release_fee=10)
    deployed_host.set_no_release_blocks(caller=OWNER, no_release_blocks=5)
    mine_to(deployed_host, 10)
    deployed_host.begin_sale(
        caller=OWNER,
        prices=PRICES,
        show_name=SHOW_NAME,
        organiser=ORGANISER,
        time=SHOW_TIME,
        end_of_sale=END_OF_SALE,
    )
    return deployed_host


class TestGlobeWalkthrough:
    def test_deploy_emits_venue(self, ledger_host, seats):
        receipt = ledger_host.deploy(caller=OWNER, seats=seats, venue_name=VENUE_NAME)

        assert receipt.return_value is None
        assert receipt.notifications == (Venue(name=VENUE_NAME),)
        assert ledger_host.notification_log.read_all() == [Venue(name=VENUE_NAME)]
        overview = ledger_host.get_sale_overview()
        assert overview.owner == OWNER
        assert overview.phase is SalePhase.INACTIVE

    def test_begin_sale_prices_every_ticket(self, sale_host):
        overview = sale_host.get_sale_overview()

        assert overview.phase is SalePhase.OPEN
        assert overview.end_of_sale == END_OF_SALE
        assert [t.price for t in overview.tickets] == [PRICE_1A, PRICE_2B]
        assert sale_host.notification_log.read_all() == [
            Venue(name=VENUE_NAME),
            TicketReleaseFee(amount=10),
            NoRefundBlocks(count=5),
            Show(name=SHOW_NAME, organiser=ORGANISER, time=SHOW_TIME, end_of_sale=END_OF_SALE),
        ]

    def test_exact_payment_then_repeat_is_refunded(self, sale_host, seat_1a_id):
        first = sale_host.reserve(caller=BUYER, seat_id=seat_1a_id, value=PRICE_1A)
        second = sale_host.reserve(caller=ANOTHER_BUYER, seat_id=seat_1a_id, value=PRICE_1A)

        assert first.return_value is True
        assert first.total_sent_to(BUYER) == 0
        assert second.return_value is False
        assert second.total_sent_to(ANOTHER_BUYER) == PRICE_1A
        result = sale_host.check_reservation(seat_id=seat_1a_id, address=BUYER)
        assert result.owns_ticket is True
        assert sale_host.value_ledger.balance_of(ANOTHER_BUYER) == BUYER_FUNDS

    def test_underpayment_is_refunded_in_full(self, sale_host, seat_2b_id):
        receipt = sale_host.reserve(caller=BUYER, seat_id=seat_2b_id, value=150)

        assert receipt.return_value is False
        assert receipt.total_sent_to(BUYER) == 150
        assert sale_host.check_availability(seat_id=seat_2b_id) is True

    def test_overpayment_refunds_excess(self, sale_host, seat_2b_id):
        receipt = sale_host.reserve(caller=BUYER, seat_id=seat_2b_id, value=250)

        assert receipt.return_value is True
        assert receipt.total_sent_to(BUYER) == 50
        assert sale_host.value_ledger.balance_of(BUYER) == BUYER_FUNDS - PRICE_2B
        assert sale_host.check_availability(seat_id=seat_2b_id) is False

    def test_release_refunds_price_minus_fee(self, sale_host, seat_1a_id):
        sale_host.reserve(caller=BUYER, seat_id=seat_1a_id, value=PRICE_1A)
        mine_to(sale_host, 20)

        receipt = sale_host.release_ticket(caller=BUYER, seat_id=seat_1a_id)

        assert receipt.return_value == PRICE_1A - 10
        assert receipt.total_sent_to(BUYER) == PRICE_1A - 10
        ticket = sale_host.get_sale_overview().tickets[0]
        assert ticket.owner == ZERO_ADDRESS
        assert ticket.price == PRICE_1A
        assert sale_host.check_availability(seat_id=seat_1a_id) is True

    def test_end_sale_wipes_tickets(self, sale_host, seat_1a_id, seat_2b_id):
        sale_host.reserve(caller=BUYER, seat_id=seat_1a_id, value=PRICE_1A, customer_identifier='a')
        sale_host.reserve(caller=ANOTHER_BUYER, seat_id=seat_2b_id, value=PRICE_2B)
        mine_to(sale_host, 60)

        sale_host.end_sale(caller=OWNER)

        overview = sale_host.get_sale_overview()
        assert overview.phase is SalePhase.INACTIVE
        assert overview.end_of_sale == 0
        for ticket in overview.tickets:
            assert (ticket.owner, ticket.price, ticket.customer_identifier) == (ZERO_ADDRESS, 0, '')

    def test_second_sale_after_end(self, sale_host, seat_1a_id):
        mine_to(sale_host, 60)
        sale_host.end_sale(caller=OWNER)

        sale_host.begin_sale(
            caller=OWNER,
            prices=[SeatPrice(seat=SEAT_1A, price=5), SeatPrice(seat=SEAT_2B, price=6)],
            show_name='Macbeth',
            organiser=ORGANISER,
            time=SHOW_TIME,
            end_of_sale=100,
        )

        overview = sale_host.get_sale_overview()
        assert overview.phase is SalePhase.OPEN
        # release policy persists across sales
        assert (overview.release_fee, overview.no_refund_block_count) == (10, 5)
        assert sale_host.reserve(caller=BUYER, seat_id=seat_1a_id, value=5).return_value is True


class TestAbortedInvocationRollback:
    def test_abort_after_refund_restores_everything(self, deployed_host, seat_1a_id):
        state_before = deployed_host.state_store.snapshot()
        log_before = len(deployed_host.notification_log)

        with pytest.raises(ConflictError, match='Sale not open'):
            deployed_host.reserve(caller=BUYER, seat_id=seat_1a_id, value=300)

        assert deployed_host.value_ledger.balance_of(BUYER) == BUYER_FUNDS
        assert deployed_host.value_ledger.balance_of(CONTRACT_ADDRESS) == 0
        assert deployed_host.value_ledger.transfer_log == []
        assert deployed_host.state_store.snapshot() == state_before
        assert len(deployed_host.notification_log) == log_before

    def test_unknown_seat_restores_payment(self, sale_host):
        with pytest.raises(NotFoundError):
            sale_host.reserve(caller=BUYER, seat_id=encode_seat(UNKNOWN_SEAT), value=100)

        assert sale_host.value_ledger.balance_of(BUYER) == BUYER_FUNDS

    def test_malformed_seat_id_aborts(self, sale_host):
        with pytest.raises(DecodeError):
            sale_host.reserve(caller=BUYER, seat_id=b'\x01\x00', value=100)

        assert sale_host.value_ledger.balance_of(BUYER) == BUYER_FUNDS

    def test_failed_begin_sale_emits_nothing(self, deployed_host):
        log_before = len(deployed_host.notification_log)

        with pytest.raises(DomainError):
            deployed_host.begin_sale(
                caller=OWNER,
                prices=PRICES[:1],
                show_name=SHOW_NAME,
                organiser=ORGANISER,
                time=SHOW_TIME,
                end_of_sale=END_OF_SALE,
            )

        assert len(deployed_host.notification_log) == log_before
        assert deployed_host.get_sale_overview().phase is SalePhase.INACTIVE

    def test_forbidden_release_keeps_ticket(self, sale_host, seat_1a_id):
        sale_host.reserve(caller=BUYER, seat_id=seat_1a_id, value=PRICE_1A)

        with pytest.raises(ForbiddenError):
            sale_host.release_ticket(caller=ANOTHER_BUYER, seat_id=seat_1a_id)

        assert sale_host.check_reservation(seat_id=seat_1a_id, address=BUYER).owns_ticket


class TestValueConservation:
    def test_contract_holds_exactly_the_price_of_held_tickets(
        self, sale_host, seat_1a_id, seat_2b_id
    ):
        sale_host.reserve(caller=BUYER, seat_id=seat_1a_id, value=130)
        sale_host.reserve(caller=ANOTHER_BUYER, seat_id=seat_1a_id, value=100)
        sale_host.reserve(caller=ANOTHER_BUYER, seat_id=seat_2b_id, value=199)
        sale_host.reserve(caller=ANOTHER_BUYER, seat_id=seat_2b_id, value=200)

        ledger = sale_host.value_ledger
        assert ledger.balance_of(CONTRACT_ADDRESS) == PRICE_1A + PRICE_2B
        assert ledger.balance_of(BUYER) + ledger.balance_of(ANOTHER_BUYER) + ledger.balance_of(
            CONTRACT_ADDRESS
        ) == 2 * BUYER_FUNDS

    def test_release_keeps_the_fee(self, sale_host, seat_1a_id):
        sale_host.reserve(caller=BUYER, seat_id=seat_1a_id, value=PRICE_1A)
        sale_host.release_ticket(caller=BUYER, seat_id=seat_1a_id)

        assert sale_host.value_ledger.balance_of(CONTRACT_ADDRESS) == 10
        assert sale_host.value_ledger.balance_of(BUYER) == BUYER_FUNDS - 10


class TestHostRules:
    def test_zero_caller_is_rejected(self, deployed_host):
        with pytest.raises(DomainError, match='Invalid caller address'):
            deployed_host.end_sale(caller=ZERO_ADDRESS)

    def test_malformed_caller_is_rejected(self, deployed_host):
        with pytest.raises(DomainError, match='Invalid address'):
            deployed_host.end_sale(caller='not-an-address')

    def test_calls_before_deploy_are_rejected(self, ledger_host, seat_1a_id):
        with pytest.raises(ConflictError, match='Contract not deployed'):
            ledger_host.end_sale(caller=OWNER)
        with pytest.raises(ConflictError, match='Contract not deployed'):
            ledger_host.get_sale_overview()

    def test_redeploy_is_rejected(self, deployed_host, seats):
        with pytest.raises(ConflictError, match='Contract already created'):
            deployed_host.deploy(caller=BUYER, seats=seats, venue_name='Other')

        assert deployed_host.get_sale_overview().owner == OWNER

    def test_unfunded_payment_is_rejected(self, sale_host, seat_1a_id):
        with pytest.raises(PaymentError):
            sale_host.reserve(caller=BUYER, seat_id=seat_1a_id, value=BUYER_FUNDS + 1)

        assert sale_host.value_ledger.balance_of(BUYER) == BUYER_FUNDS

    def test_reentrant_invocation_is_rejected(self, sale_host, seat_1a_id, monkeypatch):
        nested_errors = []
        original_reserve = sale_host.reserve_ticket_use_case.reserve

        def reserve_and_reenter(**kwargs):
            try:
                sale_host.end_sale(caller=OWNER)
            except ConflictError as e:
                nested_errors.append(e.message)
            return original_reserve(**kwargs)

        monkeypatch.setattr(sale_host.reserve_ticket_use_case, 'reserve', reserve_and_reenter)

        receipt = sale_host.reserve(caller=BUYER, seat_id=seat_1a_id, value=PRICE_1A)

        assert nested_errors == ['Reentrant invocation rejected']
        assert receipt.return_value is True

    def test_queries_never_commit(self, sale_host, seat_1a_id):
        before = sale_host.state_store.snapshot()

        sale_host.check_availability(seat_id=seat_1a_id)
        sale_host.get_sale_overview()

        assert sale_host.state_store.snapshot() == before
        assert sale_host.state_store.raw_entry(StateKey.END_OF_SALE) is not None

    def test_mine_blocks_moves_height(self, ledger_host):
        assert ledger_host.mine_blocks() == 1
        assert ledger_host.mine_blocks(9) == 10
        with pytest.raises(DomainError):
            ledger_host.mine_blocks(0)
