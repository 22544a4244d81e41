"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.ticket_sale.driving_adapter.http_controller import ticket_contract_controller


WIRE_MODULES: list[ModuleType] = [
    ticket_contract_controller,
]
