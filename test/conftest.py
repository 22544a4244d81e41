"""
Test Configuration and Fixtures

This module provides:
- Test log directory setup (before settings and loguru are imported)
- Shared addresses and a seat catalog
- In-memory adapters and a ledger host per test

Architecture:
- Unit tests: use case tests build their own state store and Mock value transfer
- Integration tests: drive the LedgerHost or the FastAPI app end to end
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# loguru_io_config reads TEST_LOG_DIR at import time
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)
    os.environ.setdefault('DEPLOY_ENV', 'test')


_early_setup_test_environment()

import pytest  # noqa: E402

from src.service.ticket_sale.app.codec.ticket_codec import encode_seat  # noqa: E402
from src.service.ticket_sale.domain.value_object.address import Address  # noqa: E402
from src.service.ticket_sale.domain.value_object.seat import Seat  # noqa: E402
from src.service.ticket_sale.driven_adapter.ledger.in_memory_value_ledger_impl import (  # noqa: E402
    InMemoryValueLedgerImpl,
)
from src.service.ticket_sale.driven_adapter.notification.notification_log_impl import (  # noqa: E402
    NotificationLogImpl,
)
from src.service.ticket_sale.driven_adapter.state.in_memory_contract_state_store_impl import (  # noqa: E402
    InMemoryContractStateStoreImpl,
)
from src.service.ticket_sale.driving_adapter.ledger_host import LedgerHost  # noqa: E402
from test.constants import (  # noqa: E402
    CONTRACT_ADDRESS,
    SEAT_1A,
    SEAT_2B,
)


@pytest.fixture
def seats() -> list[Seat]:
    return [SEAT_1A, SEAT_2B]


@pytest.fixture
def seat_1a_id() -> bytes:
    return encode_seat(SEAT_1A)


@pytest.fixture
def seat_2b_id() -> bytes:
    return encode_seat(SEAT_2B)


@pytest.fixture
def state_store() -> InMemoryContractStateStoreImpl:
    return InMemoryContractStateStoreImpl()


@pytest.fixture
def value_ledger() -> InMemoryValueLedgerImpl:
    return InMemoryValueLedgerImpl(contract_address=Address(CONTRACT_ADDRESS))


@pytest.fixture
def notification_log() -> NotificationLogImpl:
    return NotificationLogImpl()


@pytest.fixture
def ledger_host(
    state_store: InMemoryContractStateStoreImpl,
    value_ledger: InMemoryValueLedgerImpl,
    notification_log: NotificationLogImpl,
) -> LedgerHost:
    return LedgerHost(
        state_store=state_store,
        value_ledger=value_ledger,
        notification_log=notification_log,
        initial_height=0,
        max_customer_identifier_length=64,
    )
