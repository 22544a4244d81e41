"""
Ticket Codec - fixed binary layouts for seats, tickets and state values

All integers are little endian.

    seat          6 bytes   int32 number | uint16 letter (UTF-16 code unit)
    uint64        8 bytes
    address      20 bytes
    ticket       36 + n     seat | uint64 price | address owner | uint16 n | utf-8 customer identifier
    ticket array  4 + ...   uint32 count | ticket * count

Decoding anything that does not match exactly raises DecodeError.
"""

import struct
from typing import List, Sequence

from src.platform.exception.exceptions import DecodeError
from src.service.ticket_sale.domain.entity.ticket_entity import Ticket
from src.service.ticket_sale.domain.value_object.address import (
    ADDRESS_BYTE_LENGTH,
    Address,
)
from src.service.ticket_sale.domain.value_object.seat import Seat


_SEAT = struct.Struct('<iH')
_UINT64 = struct.Struct('<Q')
_UINT32 = struct.Struct('<I')
_UINT16 = struct.Struct('<H')

SEAT_BYTE_LENGTH = _SEAT.size


# ============================================================================
# Seat
# ============================================================================


def encode_seat(seat: Seat) -> bytes:
    return _SEAT.pack(seat.number, ord(seat.letter))


def decode_seat(data: bytes) -> Seat:
    if not isinstance(data, (bytes, bytearray)) or len(data) != SEAT_BYTE_LENGTH:
        raise DecodeError(f'Seat identifier must be exactly {SEAT_BYTE_LENGTH} bytes')
    number, letter_code = _SEAT.unpack(data)
    return Seat(number=number, letter=chr(letter_code))


def seat_bytes_from_hex(seat_id: str) -> bytes:
    """Hex form of the seat wire bytes, as used in URLs and JSON bodies."""
    try:
        return bytes.fromhex(seat_id)
    except ValueError:
        raise DecodeError(f'Seat identifier is not valid hex: {seat_id!r}')


def decode_seat_hex(seat_id: str) -> Seat:
    return decode_seat(seat_bytes_from_hex(seat_id))


# ============================================================================
# Scalars
# ============================================================================


def encode_uint64(value: int) -> bytes:
    try:
        return _UINT64.pack(value)
    except struct.error as e:
        raise ValueError(f'{value!r} does not fit in an unsigned 64-bit integer') from e


def decode_uint64(data: bytes) -> int:
    if len(data) != _UINT64.size:
        raise DecodeError('uint64 value must be exactly 8 bytes')
    return _UINT64.unpack(data)[0]


def encode_address(address: Address) -> bytes:
    raw = bytes.fromhex(address[2:])
    if len(raw) != ADDRESS_BYTE_LENGTH:
        raise ValueError(f'Address must be {ADDRESS_BYTE_LENGTH} bytes: {address!r}')
    return raw


def decode_address(data: bytes) -> Address:
    if len(data) != ADDRESS_BYTE_LENGTH:
        raise DecodeError(f'Address must be exactly {ADDRESS_BYTE_LENGTH} bytes')
    return Address('0x' + data.hex())


# ============================================================================
# Tickets
# ============================================================================


def encode_ticket(ticket: Ticket) -> bytes:
    customer_identifier = ticket.customer_identifier.encode('utf-8')
    if len(customer_identifier) > 0xFFFF:
        raise ValueError('Customer identifier does not fit the uint16 length prefix')
    return b''.join(
        (
            encode_seat(ticket.seat),
            encode_uint64(ticket.price),
            encode_address(ticket.owner),
            _UINT16.pack(len(customer_identifier)),
            customer_identifier,
        )
    )


def _decode_ticket_at(data: bytes, offset: int) -> tuple[Ticket, int]:
    fixed_length = SEAT_BYTE_LENGTH + _UINT64.size + ADDRESS_BYTE_LENGTH + _UINT16.size
    if len(data) - offset < fixed_length:
        raise DecodeError('Ticket record is truncated')

    seat = decode_seat(data[offset : offset + SEAT_BYTE_LENGTH])
    offset += SEAT_BYTE_LENGTH
    price = decode_uint64(data[offset : offset + _UINT64.size])
    offset += _UINT64.size
    owner = decode_address(data[offset : offset + ADDRESS_BYTE_LENGTH])
    offset += ADDRESS_BYTE_LENGTH
    (identifier_length,) = _UINT16.unpack_from(data, offset)
    offset += _UINT16.size

    if len(data) - offset < identifier_length:
        raise DecodeError('Ticket customer identifier is truncated')
    try:
        customer_identifier = data[offset : offset + identifier_length].decode('utf-8')
    except UnicodeDecodeError as e:
        raise DecodeError(f'Ticket customer identifier is not utf-8: {e}')
    offset += identifier_length

    ticket = Ticket(
        seat=seat, price=price, owner=owner, customer_identifier=customer_identifier
    )
    return ticket, offset


def decode_ticket(data: bytes) -> Ticket:
    ticket, offset = _decode_ticket_at(data, 0)
    if offset != len(data):
        raise DecodeError('Trailing bytes after ticket record')
    return ticket


def encode_tickets(tickets: Sequence[Ticket]) -> bytes:
    return _UINT32.pack(len(tickets)) + b''.join(encode_ticket(ticket) for ticket in tickets)


def decode_tickets(data: bytes) -> List[Ticket]:
    if len(data) < _UINT32.size:
        raise DecodeError('Ticket array is missing its count')
    (count,) = _UINT32.unpack_from(data, 0)
    offset = _UINT32.size

    tickets: List[Ticket] = []
    for _ in range(count):
        ticket, offset = _decode_ticket_at(data, offset)
        tickets.append(ticket)

    if offset != len(data):
        raise DecodeError('Trailing bytes after ticket array')
    return tickets
