"""
Notification Log

Append-only, msgpack-encoded record of every notification published by a committed
invocation, in emission order.
"""

from typing import List, Sequence

import msgpack
from msgpack.exceptions import UnpackException

from src.platform.exception.exceptions import DecodeError
from src.platform.logging.loguru_io import Logger
from src.service.ticket_sale.app.interface.i_notification_sink import INotificationSink
from src.service.ticket_sale.domain.domain_event.ticket_sale_events import (
    ContractNotification,
    notification_from_dict,
    notification_to_dict,
)


class NotificationLogImpl(INotificationSink):
    def __init__(self) -> None:
        self._records: List[bytes] = []

    @staticmethod
    def encode(notification: ContractNotification) -> bytes:
        return msgpack.packb(notification_to_dict(notification))  # type: ignore

    @staticmethod
    def decode(record: bytes) -> ContractNotification:
        try:
            return notification_from_dict(msgpack.unpackb(record, raw=False))
        except (ValueError, TypeError, UnpackException) as e:
            raise DecodeError(f'Failed to decode notification record: {e}')

    def publish(self, notifications: Sequence[ContractNotification]) -> None:
        for notification in notifications:
            self._records.append(self.encode(notification))
            Logger.base.info(f'📣 [NOTIFY] {notification.event_type}: {notification}')

    def read_all(self) -> list[ContractNotification]:
        return [self.decode(record) for record in self._records]

    def raw_records(self) -> tuple[bytes, ...]:
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    # Snapshotable
    def snapshot(self) -> int:
        return len(self._records)

    def restore(self, snapshot: int) -> None:
        del self._records[snapshot:]
