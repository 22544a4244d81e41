"""
Ticket Sale Notifications

Write-only records emitted on state transitions, appended in order to the
invocation's output list and published by the ledger host once the invocation succeeds.
"""

from typing import Any, ClassVar, Union

import attrs


@attrs.define(frozen=True)
class Venue:
    """Emitted once, when the contract is created"""

    event_type: ClassVar[str] = 'Venue'

    name: str


@attrs.define(frozen=True)
class Show:
    """Emitted when a sale begins"""

    event_type: ClassVar[str] = 'Show'

    name: str
    organiser: str
    time: int  # unix time of the show
    end_of_sale: int  # block height at which the sale closes


@attrs.define(frozen=True)
class TicketReleaseFee:
    """Emitted whenever the owner sets the release fee"""

    event_type: ClassVar[str] = 'TicketReleaseFee'

    amount: int


@attrs.define(frozen=True)
class NoRefundBlocks:
    """Emitted whenever the owner sets the no-refund block count"""

    event_type: ClassVar[str] = 'NoRefundBlocks'

    count: int


ContractNotification = Union[Venue, Show, TicketReleaseFee, NoRefundBlocks]

NOTIFICATION_TYPES: dict[str, type] = {
    cls.event_type: cls for cls in (Venue, Show, TicketReleaseFee, NoRefundBlocks)
}


def notification_to_dict(notification: ContractNotification) -> dict[str, Any]:
    return {'event_type': notification.event_type, **attrs.asdict(notification)}


def notification_from_dict(data: dict[str, Any]) -> ContractNotification:
    fields = dict(data)
    notification_cls = NOTIFICATION_TYPES.get(fields.pop('event_type', ''))
    if notification_cls is None:
        raise ValueError(f'Unknown notification type in {data!r}')
    return notification_cls(**fields)
