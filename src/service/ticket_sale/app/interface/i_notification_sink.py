from abc import ABC, abstractmethod
from typing import Sequence

from src.service.ticket_sale.domain.domain_event.ticket_sale_events import ContractNotification


class INotificationSink(ABC):
    """Append-only log that successful invocations publish their notifications to"""

    @abstractmethod
    def publish(self, notifications: Sequence[ContractNotification]) -> None:
        pass

    @abstractmethod
    def read_all(self) -> list[ContractNotification]:
        pass
