"""
In-Memory Value Ledger

Account balances of the simulated host ledger. The contract account is one of them;
outgoing contract transfers (refunds, release payouts) go through `transfer`.
"""

from typing import Dict, List

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.ticket_sale.app.dto.invocation_receipt import ValueTransfer
from src.service.ticket_sale.app.interface.i_value_transfer import IValueTransfer
from src.service.ticket_sale.domain.value_object.address import Address, is_zero_address
from src.service.ticket_sale.domain.value_object.uint64 import UINT64_MAX, require_uint64


class InMemoryValueLedgerImpl(IValueTransfer):
    def __init__(self, *, contract_address: Address) -> None:
        self.contract_address = contract_address
        self._balances: Dict[Address, int] = {}
        self.transfer_log: List[ValueTransfer] = []

    def balance_of(self, address: Address) -> int:
        return self._balances.get(address, 0)

    def mint(self, address: Address, amount: int) -> int:
        """Faucet for development and tests; returns the new balance."""
        require_uint64(amount, name='Mint amount')
        if self.balance_of(address) + amount > UINT64_MAX:
            raise DomainError(f'Balance of {address} would exceed an unsigned 64-bit integer')
        self._balances[address] = self.balance_of(address) + amount
        Logger.base.info(f'🪙 [LEDGER] Minted {amount} to {address}')
        return self._balances[address]

    def transfer_between(self, *, sender: Address, recipient: Address, amount: int) -> bool:
        if amount < 0 or is_zero_address(recipient):
            return False
        if amount == 0:
            return True
        if self.balance_of(sender) < amount:
            return False
        if self.balance_of(recipient) + amount > UINT64_MAX:
            return False

        self._balances[sender] = self.balance_of(sender) - amount
        self._balances[recipient] = self.balance_of(recipient) + amount
        self.transfer_log.append(ValueTransfer(sender=sender, recipient=recipient, amount=amount))
        return True

    def transfer(self, recipient: Address, amount: int) -> bool:
        return self.transfer_between(
            sender=self.contract_address, recipient=recipient, amount=amount
        )

    # Snapshotable
    def snapshot(self) -> tuple[Dict[Address, int], int]:
        return dict(self._balances), len(self.transfer_log)

    def restore(self, snapshot: tuple[Dict[Address, int], int]) -> None:
        balances, log_length = snapshot
        self._balances = dict(balances)
        del self.transfer_log[log_length:]
