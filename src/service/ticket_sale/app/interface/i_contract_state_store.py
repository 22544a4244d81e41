"""
Contract State Store Interface

Typed key-value access to the persisted contract state.

[Design Principles]
- One entry per StateKey, read and written independently
- Missing entries read as their zero value (0, ZERO_ADDRESS, empty ticket list)
- Reads return fresh objects; mutating them has no effect until written back
"""

from abc import ABC, abstractmethod
from typing import List, Sequence

from src.service.ticket_sale.domain.entity.ticket_entity import Ticket
from src.service.ticket_sale.domain.enum.state_key import StateKey
from src.service.ticket_sale.domain.value_object.address import Address


class IContractStateStore(ABC):
    @abstractmethod
    def get_uint64(self, key: StateKey) -> int:
        pass

    @abstractmethod
    def set_uint64(self, key: StateKey, value: int) -> None:
        pass

    @abstractmethod
    def get_address(self, key: StateKey) -> Address:
        pass

    @abstractmethod
    def set_address(self, key: StateKey, value: Address) -> None:
        pass

    @abstractmethod
    def get_tickets(self, key: StateKey) -> List[Ticket]:
        pass

    @abstractmethod
    def set_tickets(self, key: StateKey, value: Sequence[Ticket]) -> None:
        pass
