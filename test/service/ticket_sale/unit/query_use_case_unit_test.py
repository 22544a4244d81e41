import pytest

from src.platform.exception.exceptions import ConflictError, DomainError, NotFoundError
from src.service.ticket_sale.app.query.check_availability_use_case import (
    CheckAvailabilityUseCase,
)
from src.service.ticket_sale.app.query.check_reservation_use_case import (
    CheckReservationUseCase,
)
from src.service.ticket_sale.app.query.get_sale_overview_use_case import GetSaleOverviewUseCase
from src.service.ticket_sale.domain.enum.sale_phase import SalePhase
from src.service.ticket_sale.domain.enum.state_key import StateKey
from src.service.ticket_sale.domain.value_object.address import ZERO_ADDRESS
from test.constants import (
    ANOTHER_BUYER,
    BUYER,
    END_OF_SALE,
    OWNER,
    PRICE_1A,
    SEAT_1A,
    SEAT_2B,
    UNKNOWN_SEAT,
)


pytestmark = pytest.mark.unit


@pytest.fixture
def held_store(open_sale_store):
    """1A held by BUYER under identifier 'alice'"""
    tickets = open_sale_store.get_tickets(StateKey.TICKETS)
    tickets[0].owner = BUYER
    tickets[0].customer_identifier = 'alice'
    open_sale_store.set_tickets(StateKey.TICKETS, tickets)
    return open_sale_store


class TestCheckAvailability:
    def test_reports_free_and_taken_seats(self, held_store, make_context):
        use_case = CheckAvailabilityUseCase(state_store=held_store)

        assert use_case.check_availability(context=make_context(), seat=SEAT_1A) is False
        assert use_case.check_availability(context=make_context(), seat=SEAT_2B) is True

    def test_requires_open_sale(self, deployed_store, make_context):
        with pytest.raises(ConflictError, match='Sale not open'):
            CheckAvailabilityUseCase(state_store=deployed_store).check_availability(
                context=make_context(), seat=SEAT_1A
            )

    def test_after_sale_end(self, held_store, make_context):
        with pytest.raises(ConflictError, match='Sale not open'):
            CheckAvailabilityUseCase(state_store=held_store).check_availability(
                context=make_context(current_height=END_OF_SALE), seat=SEAT_2B
            )

    def test_unknown_seat(self, held_store, make_context):
        with pytest.raises(NotFoundError):
            CheckAvailabilityUseCase(state_store=held_store).check_availability(
                context=make_context(), seat=UNKNOWN_SEAT
            )


class TestCheckReservation:
    def test_holder_owns_ticket(self, held_store):
        result = CheckReservationUseCase(state_store=held_store).check_reservation(
            seat=SEAT_1A, address=BUYER
        )

        assert result.owns_ticket is True
        assert result.customer_identifier == 'alice'

    def test_other_address_sees_identifier_but_not_ownership(self, held_store):
        result = CheckReservationUseCase(state_store=held_store).check_reservation(
            seat=SEAT_1A, address=ANOTHER_BUYER
        )

        assert result.owns_ticket is False
        assert result.customer_identifier == 'alice'

    def test_zero_address_is_rejected(self, held_store):
        with pytest.raises(DomainError, match='Invalid address'):
            CheckReservationUseCase(state_store=held_store).check_reservation(
                seat=SEAT_1A, address=ZERO_ADDRESS
            )

    def test_unknown_seat(self, held_store):
        with pytest.raises(NotFoundError):
            CheckReservationUseCase(state_store=held_store).check_reservation(
                seat=UNKNOWN_SEAT, address=BUYER
            )


class TestGetSaleOverview:
    def test_overview_of_open_sale(self, held_store, make_context):
        held_store.set_uint64(StateKey.RELEASE_FEE, 10)

        overview = GetSaleOverviewUseCase(state_store=held_store).get_sale_overview(
            context=make_context()
        )

        assert overview.owner == OWNER
        assert overview.phase is SalePhase.OPEN
        assert overview.end_of_sale == END_OF_SALE
        assert overview.release_fee == 10
        assert overview.no_refund_block_count == 0
        assert overview.tickets[0].price == PRICE_1A
        assert overview.available_count == 1

    def test_overview_without_sale(self, deployed_store, make_context):
        overview = GetSaleOverviewUseCase(state_store=deployed_store).get_sale_overview(
            context=make_context()
        )

        assert overview.phase is SalePhase.INACTIVE
        assert overview.available_count == 2
