"""
Ticket sale fixtures for use case unit tests

State is seeded straight into an in-memory state store; outgoing transfers go to a Mock
so each test can assert exactly what left the contract.
"""

from typing import Callable
from unittest.mock import Mock

import pytest

from src.service.ticket_sale.app.interface.i_value_transfer import IValueTransfer
from src.service.ticket_sale.domain.entity.ticket_entity import Ticket
from src.service.ticket_sale.domain.enum.state_key import StateKey
from src.service.ticket_sale.domain.value_object.address import Address
from src.service.ticket_sale.domain.value_object.invocation_context import InvocationContext
from src.service.ticket_sale.driven_adapter.state.in_memory_contract_state_store_impl import (
    InMemoryContractStateStoreImpl,
)
from test.constants import END_OF_SALE, OWNER, PRICE_1A, PRICE_2B, SEAT_1A, SEAT_2B


ContextFactory = Callable[..., InvocationContext]


@pytest.fixture
def make_context() -> ContextFactory:
    def _create(
        caller: Address = OWNER, current_height: int = 10, attached_value: int = 0
    ) -> InvocationContext:
        return InvocationContext(
            caller=caller, current_height=current_height, attached_value=attached_value
        )

    return _create


@pytest.fixture
def value_transfer() -> Mock:
    transfer = Mock(spec=IValueTransfer)
    transfer.transfer.return_value = True
    return transfer


@pytest.fixture
def deployed_store(state_store: InMemoryContractStateStoreImpl) -> InMemoryContractStateStoreImpl:
    """Contract created by OWNER with seats 1A and 2B, no sale yet"""
    state_store.set_address(StateKey.OWNER, OWNER)
    state_store.set_tickets(StateKey.TICKETS, [Ticket(seat=SEAT_1A), Ticket(seat=SEAT_2B)])
    return state_store


@pytest.fixture
def open_sale_store(
    deployed_store: InMemoryContractStateStoreImpl,
) -> InMemoryContractStateStoreImpl:
    """Sale open until END_OF_SALE with 1A at PRICE_1A and 2B at PRICE_2B"""
    deployed_store.set_tickets(
        StateKey.TICKETS,
        [Ticket(seat=SEAT_1A, price=PRICE_1A), Ticket(seat=SEAT_2B, price=PRICE_2B)],
    )
    deployed_store.set_uint64(StateKey.END_OF_SALE, END_OF_SALE)
    return deployed_store
