from abc import ABC, abstractmethod

from src.service.ticket_sale.domain.value_object.address import Address


class IValueTransfer(ABC):
    """Outgoing value transfers from the contract account"""

    @abstractmethod
    def transfer(self, recipient: Address, amount: int) -> bool:
        """
        Send `amount` from the contract to `recipient`.

        Returns:
            Whether the host executed the transfer
        """
        pass
