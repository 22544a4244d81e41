"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.service.ticket_sale.domain.value_object.address import parse_address
from src.service.ticket_sale.driven_adapter.ledger.in_memory_value_ledger_impl import (
    InMemoryValueLedgerImpl,
)
from src.service.ticket_sale.driven_adapter.notification.notification_log_impl import (
    NotificationLogImpl,
)
from src.service.ticket_sale.driven_adapter.state.in_memory_contract_state_store_impl import (
    InMemoryContractStateStoreImpl,
)
from src.service.ticket_sale.driving_adapter.ledger_host import LedgerHost


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Driven adapters (process-wide in-memory ledger)
    state_store = providers.Singleton(InMemoryContractStateStoreImpl)
    value_ledger = providers.Singleton(
        InMemoryValueLedgerImpl,
        contract_address=providers.Callable(
            parse_address, config_service.provided.CONTRACT_ADDRESS
        ),
    )
    notification_log = providers.Singleton(NotificationLogImpl)

    # Driving adapter - every invocation goes through the host
    ledger_host = providers.Singleton(
        LedgerHost,
        state_store=state_store,
        value_ledger=value_ledger,
        notification_log=notification_log,
        initial_height=config_service.provided.INITIAL_BLOCK_HEIGHT,
        max_customer_identifier_length=config_service.provided.MAX_CUSTOMER_IDENTIFIER_LENGTH,
    )


container = Container()


def setup() -> None:
    container.config_service()
    container.ledger_host()


def cleanup() -> None:
    container.reset_singletons()
