"""
In-Memory Contract State Store

Holds every entry as encoded bytes, the same way a ledger's persistent state would,
so each read decodes a fresh copy and nothing can alias stored tickets.
"""

from typing import Dict, List, Sequence

from src.service.ticket_sale.app.codec.ticket_codec import (
    decode_address,
    decode_tickets,
    decode_uint64,
    encode_address,
    encode_tickets,
    encode_uint64,
)
from src.service.ticket_sale.app.interface.i_contract_state_store import IContractStateStore
from src.service.ticket_sale.domain.entity.ticket_entity import Ticket
from src.service.ticket_sale.domain.enum.state_key import StateKey
from src.service.ticket_sale.domain.value_object.address import ZERO_ADDRESS, Address


class InMemoryContractStateStoreImpl(IContractStateStore):
    def __init__(self) -> None:
        self._entries: Dict[str, bytes] = {}

    def get_uint64(self, key: StateKey) -> int:
        raw = self._entries.get(key)
        return 0 if raw is None else decode_uint64(raw)

    def set_uint64(self, key: StateKey, value: int) -> None:
        self._entries[key] = encode_uint64(value)

    def get_address(self, key: StateKey) -> Address:
        raw = self._entries.get(key)
        return ZERO_ADDRESS if raw is None else decode_address(raw)

    def set_address(self, key: StateKey, value: Address) -> None:
        self._entries[key] = encode_address(value)

    def get_tickets(self, key: StateKey) -> List[Ticket]:
        raw = self._entries.get(key)
        return [] if raw is None else decode_tickets(raw)

    def set_tickets(self, key: StateKey, value: Sequence[Ticket]) -> None:
        self._entries[key] = encode_tickets(value)

    def raw_entry(self, key: StateKey) -> bytes | None:
        return self._entries.get(key)

    # Snapshotable - bytes are immutable, a shallow copy is a full snapshot
    def snapshot(self) -> Dict[str, bytes]:
        return dict(self._entries)

    def restore(self, snapshot: Dict[str, bytes]) -> None:
        self._entries = dict(snapshot)
