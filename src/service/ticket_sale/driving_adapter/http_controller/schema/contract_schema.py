from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# ============================================================================
# Requests
# ============================================================================


class SeatSchema(BaseModel):
    number: int
    letter: str = Field(min_length=1, max_length=1)


class SeatPriceSchema(SeatSchema):
    price: int = Field(ge=0)


class DeployContractRequest(BaseModel):
    caller: str
    venue_name: str
    seats: List[SeatSchema]

    class Config:
        json_schema_extra = {
            'example': {
                'caller': '0x' + '11' * 20,
                'venue_name': 'Taipei Arena',
                'seats': [{'number': 1, 'letter': 'A'}, {'number': 2, 'letter': 'A'}],
            }
        }


class BeginSaleRequest(BaseModel):
    caller: str
    show_name: str
    organiser: str
    time: int
    end_of_sale: int
    prices: List[SeatPriceSchema]

    class Config:
        json_schema_extra = {
            'example': {
                'caller': '0x' + '11' * 20,
                'show_name': 'Evening Concert',
                'organiser': 'Live Nation',
                'time': 1767225600,
                'end_of_sale': 100,
                'prices': [
                    {'number': 1, 'letter': 'A', 'price': 2000},
                    {'number': 2, 'letter': 'A', 'price': 1500},
                ],
            }
        }


class CallerRequest(BaseModel):
    caller: str


class ReserveTicketRequest(BaseModel):
    caller: str
    seat_id: str  # hex of the 6 seat wire bytes
    value: int = 0
    customer_identifier: str = ''

    class Config:
        json_schema_extra = {
            'example': {
                'caller': '0x' + '22' * 20,
                'seat_id': '010000004100',
                'value': 2000,
                'customer_identifier': 'alice@example.com',
            }
        }


class ReleaseTicketRequest(BaseModel):
    caller: str
    seat_id: str


class ReleaseFeeRequest(BaseModel):
    caller: str
    release_fee: int


class NoReleaseBlocksRequest(BaseModel):
    caller: str
    no_release_blocks: int


class MineBlocksRequest(BaseModel):
    count: int = 1


class FundAccountRequest(BaseModel):
    amount: int


# ============================================================================
# Responses
# ============================================================================


class TransferResponse(BaseModel):
    sender: str
    recipient: str
    amount: int


class InvocationReceiptResponse(BaseModel):
    return_value: Optional[Any] = None
    block_height: int
    transfers: List[TransferResponse] = []
    notifications: List[Dict[str, Any]] = []


class TicketResponse(BaseModel):
    seat_id: str
    number: int
    letter: str
    price: int
    owner: str
    customer_identifier: str


class SaleOverviewResponse(BaseModel):
    contract_address: str
    owner: str
    phase: str
    block_height: int
    end_of_sale: int
    release_fee: int
    no_refund_block_count: int
    available_count: int
    tickets: List[TicketResponse]


class AvailabilityResponse(BaseModel):
    seat_id: str
    available: bool


class ReservationResponse(BaseModel):
    seat_id: str
    address: str
    owns_ticket: bool
    customer_identifier: str


class BlockHeightResponse(BaseModel):
    block_height: int


class BalanceResponse(BaseModel):
    address: str
    balance: int
