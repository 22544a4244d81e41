from enum import StrEnum


class StateKey(StrEnum):
    """Names of the persisted contract state entries"""

    OWNER = 'Owner'
    TICKETS = 'Tickets'
    END_OF_SALE = 'EndOfSale'
    RELEASE_FEE = 'ReleaseFee'
    NO_REFUND_BLOCK_COUNT = 'NoRefundBlockCount'
