"""
Invocation Context

Everything the host ledger knows about the message being processed, handed explicitly
to every contract operation, plus the ordered list the operation appends its
notifications to.
"""

from typing import List

import attrs

from src.service.ticket_sale.domain.domain_event.ticket_sale_events import ContractNotification
from src.service.ticket_sale.domain.value_object.address import Address


@attrs.define
class InvocationContext:
    caller: Address
    current_height: int
    attached_value: int = 0
    notifications: List[ContractNotification] = attrs.field(factory=list)

    def emit(self, notification: ContractNotification) -> None:
        self.notifications.append(notification)
