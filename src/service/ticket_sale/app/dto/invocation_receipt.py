from typing import Generic, Tuple, TypeVar

import attrs

from src.service.ticket_sale.domain.domain_event.ticket_sale_events import ContractNotification
from src.service.ticket_sale.domain.value_object.address import Address


T = TypeVar('T')


@attrs.define(frozen=True)
class ValueTransfer:
    sender: Address
    recipient: Address
    amount: int


@attrs.define(frozen=True)
class InvocationReceipt(Generic[T]):
    """What a committed invocation returned, paid out and announced"""

    return_value: T
    block_height: int
    transfers: Tuple[ValueTransfer, ...] = ()
    notifications: Tuple[ContractNotification, ...] = ()

    def total_sent_to(self, recipient: Address) -> int:
        return sum(t.amount for t in self.transfers if t.recipient == recipient)
