"""Ticket Sale DTOs"""

from src.service.ticket_sale.app.dto.invocation_receipt import InvocationReceipt, ValueTransfer
from src.service.ticket_sale.app.dto.reservation_query_result import ReservationQueryResult
from src.service.ticket_sale.app.dto.sale_overview import SaleOverview

__all__ = ['InvocationReceipt', 'ReservationQueryResult', 'SaleOverview', 'ValueTransfer']
