from typing import Any, List

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, status

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.ticket_sale.app.codec.ticket_codec import encode_seat, seat_bytes_from_hex
from src.service.ticket_sale.app.dto.invocation_receipt import InvocationReceipt
from src.service.ticket_sale.domain.domain_event.ticket_sale_events import notification_to_dict
from src.service.ticket_sale.domain.value_object.address import parse_address
from src.service.ticket_sale.domain.value_object.seat import Seat, SeatPrice
from src.service.ticket_sale.driving_adapter.http_controller.schema.contract_schema import (
    AvailabilityResponse,
    BalanceResponse,
    BeginSaleRequest,
    BlockHeightResponse,
    CallerRequest,
    DeployContractRequest,
    FundAccountRequest,
    InvocationReceiptResponse,
    MineBlocksRequest,
    NoReleaseBlocksRequest,
    ReleaseFeeRequest,
    ReleaseTicketRequest,
    ReservationResponse,
    ReserveTicketRequest,
    SaleOverviewResponse,
    TicketResponse,
    TransferResponse,
)
from src.service.ticket_sale.driving_adapter.ledger_host import LedgerHost


router = APIRouter()
chain_router = APIRouter()


def _receipt_response(receipt: InvocationReceipt[Any]) -> InvocationReceiptResponse:
    return InvocationReceiptResponse(
        return_value=receipt.return_value,
        block_height=receipt.block_height,
        transfers=[
            TransferResponse(sender=t.sender, recipient=t.recipient, amount=t.amount)
            for t in receipt.transfers
        ],
        notifications=[notification_to_dict(n) for n in receipt.notifications],
    )


# ============================ Contract Invocations ============================


@router.post('/deploy', status_code=status.HTTP_201_CREATED)
@Logger.io
@inject
async def deploy_contract(
    request: DeployContractRequest,
    ledger_host: LedgerHost = Depends(Provide[Container.ledger_host]),
) -> InvocationReceiptResponse:
    receipt = ledger_host.deploy(
        caller=request.caller,
        seats=[Seat(number=s.number, letter=s.letter) for s in request.seats],
        venue_name=request.venue_name,
    )
    return _receipt_response(receipt)


@router.post('/begin-sale', status_code=status.HTTP_200_OK)
@Logger.io
@inject
async def begin_sale(
    request: BeginSaleRequest,
    ledger_host: LedgerHost = Depends(Provide[Container.ledger_host]),
) -> InvocationReceiptResponse:
    receipt = ledger_host.begin_sale(
        caller=request.caller,
        prices=[
            SeatPrice(seat=Seat(number=p.number, letter=p.letter), price=p.price)
            for p in request.prices
        ],
        show_name=request.show_name,
        organiser=request.organiser,
        time=request.time,
        end_of_sale=request.end_of_sale,
    )
    return _receipt_response(receipt)


@router.post('/end-sale', status_code=status.HTTP_200_OK)
@Logger.io
@inject
async def end_sale(
    request: CallerRequest,
    ledger_host: LedgerHost = Depends(Provide[Container.ledger_host]),
) -> InvocationReceiptResponse:
    return _receipt_response(ledger_host.end_sale(caller=request.caller))


@router.post('/reserve', status_code=status.HTTP_200_OK)
@Logger.io
@inject
async def reserve_ticket(
    request: ReserveTicketRequest,
    ledger_host: LedgerHost = Depends(Provide[Container.ledger_host]),
) -> InvocationReceiptResponse:
    """`return_value` is false when the seat was taken or underpaid; the value is refunded."""
    receipt = ledger_host.reserve(
        caller=request.caller,
        seat_id=seat_bytes_from_hex(request.seat_id),
        value=request.value,
        customer_identifier=request.customer_identifier,
    )
    return _receipt_response(receipt)


@router.post('/release', status_code=status.HTTP_200_OK)
@Logger.io
@inject
async def release_ticket(
    request: ReleaseTicketRequest,
    ledger_host: LedgerHost = Depends(Provide[Container.ledger_host]),
) -> InvocationReceiptResponse:
    receipt = ledger_host.release_ticket(
        caller=request.caller, seat_id=seat_bytes_from_hex(request.seat_id)
    )
    return _receipt_response(receipt)


@router.post('/release-fee', status_code=status.HTTP_200_OK)
@Logger.io
@inject
async def set_ticket_release_fee(
    request: ReleaseFeeRequest,
    ledger_host: LedgerHost = Depends(Provide[Container.ledger_host]),
) -> InvocationReceiptResponse:
    receipt = ledger_host.set_ticket_release_fee(
        caller=request.caller, release_fee=request.release_fee
    )
    return _receipt_response(receipt)


@router.post('/no-release-blocks', status_code=status.HTTP_200_OK)
@Logger.io
@inject
async def set_no_release_blocks(
    request: NoReleaseBlocksRequest,
    ledger_host: LedgerHost = Depends(Provide[Container.ledger_host]),
) -> InvocationReceiptResponse:
    receipt = ledger_host.set_no_release_blocks(
        caller=request.caller, no_release_blocks=request.no_release_blocks
    )
    return _receipt_response(receipt)


# ============================ Contract Queries ============================


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
@inject
async def get_sale_overview(
    ledger_host: LedgerHost = Depends(Provide[Container.ledger_host]),
) -> SaleOverviewResponse:
    overview = ledger_host.get_sale_overview()
    return SaleOverviewResponse(
        contract_address=ledger_host.contract_address,
        owner=overview.owner,
        phase=overview.phase.value,
        block_height=ledger_host.height,
        end_of_sale=overview.end_of_sale,
        release_fee=overview.release_fee,
        no_refund_block_count=overview.no_refund_block_count,
        available_count=overview.available_count,
        tickets=[
            TicketResponse(
                seat_id=encode_seat(ticket.seat).hex(),
                number=ticket.seat.number,
                letter=ticket.seat.letter,
                price=ticket.price,
                owner=ticket.owner,
                customer_identifier=ticket.customer_identifier,
            )
            for ticket in overview.tickets
        ],
    )


@router.get('/seats/{seat_id}/availability', status_code=status.HTTP_200_OK)
@Logger.io
@inject
async def check_availability(
    seat_id: str,
    ledger_host: LedgerHost = Depends(Provide[Container.ledger_host]),
) -> AvailabilityResponse:
    available = ledger_host.check_availability(seat_id=seat_bytes_from_hex(seat_id))
    return AvailabilityResponse(seat_id=seat_id, available=available)


@router.get('/seats/{seat_id}/reservation', status_code=status.HTTP_200_OK)
@Logger.io
@inject
async def check_reservation(
    seat_id: str,
    address: str,
    ledger_host: LedgerHost = Depends(Provide[Container.ledger_host]),
) -> ReservationResponse:
    result = ledger_host.check_reservation(
        seat_id=seat_bytes_from_hex(seat_id), address=address
    )
    return ReservationResponse(
        seat_id=seat_id,
        address=parse_address(address),
        owns_ticket=result.owns_ticket,
        customer_identifier=result.customer_identifier,
    )


@router.get('/notifications', status_code=status.HTTP_200_OK)
@Logger.io
@inject
async def list_notifications(
    ledger_host: LedgerHost = Depends(Provide[Container.ledger_host]),
) -> List[dict]:
    return [notification_to_dict(n) for n in ledger_host.notification_log.read_all()]


# ============================ Simulated Chain ============================


@chain_router.post('/blocks', status_code=status.HTTP_200_OK)
@Logger.io
@inject
async def mine_blocks(
    request: MineBlocksRequest,
    ledger_host: LedgerHost = Depends(Provide[Container.ledger_host]),
) -> BlockHeightResponse:
    return BlockHeightResponse(block_height=ledger_host.mine_blocks(request.count))


@chain_router.post('/accounts/{address}/fund', status_code=status.HTTP_200_OK)
@Logger.io
@inject
async def fund_account(
    address: str,
    request: FundAccountRequest,
    ledger_host: LedgerHost = Depends(Provide[Container.ledger_host]),
) -> BalanceResponse:
    account = parse_address(address)
    balance = ledger_host.value_ledger.mint(account, request.amount)
    return BalanceResponse(address=account, balance=balance)


@chain_router.get('/accounts/{address}/balance', status_code=status.HTTP_200_OK)
@Logger.io
@inject
async def get_balance(
    address: str,
    ledger_host: LedgerHost = Depends(Provide[Container.ledger_host]),
) -> BalanceResponse:
    account = parse_address(address)
    return BalanceResponse(address=account, balance=ledger_host.value_ledger.balance_of(account))
