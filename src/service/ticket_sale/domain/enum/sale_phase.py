"""
Sale Phase Enum

The phase is never stored; it is derived from EndOfSale and the current block height:

    INACTIVE        EndOfSale == 0
    OPEN            EndOfSale != 0 and height <  EndOfSale
    AWAITING_CLOSE  EndOfSale != 0 and height >= EndOfSale
"""

from enum import Enum


NO_SALE = 0


class SalePhase(Enum):
    INACTIVE = 'inactive'
    OPEN = 'open'
    AWAITING_CLOSE = 'awaiting_close'

    @classmethod
    def at(cls, *, end_of_sale: int, current_height: int) -> 'SalePhase':
        if end_of_sale == NO_SALE:
            return cls.INACTIVE
        if current_height < end_of_sale:
            return cls.OPEN
        return cls.AWAITING_CLOSE

    @property
    def is_open(self) -> bool:
        return self is SalePhase.OPEN
