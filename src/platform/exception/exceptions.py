class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io

    Raising one of these inside a contract invocation is a hard abort: the ledger host
    discards every effect of the invocation and re-raises.
    """

    def __init__(self, message: str, status_code: int = 500) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class DecodeError(CustomBaseError):
    """Bytes handed to a codec do not match the documented layout."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class PaymentError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 402)


class ForbiddenError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)
