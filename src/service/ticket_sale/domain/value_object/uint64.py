from src.platform.exception.exceptions import DomainError


UINT64_MAX = 2**64 - 1


def require_uint64(value: int, *, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= UINT64_MAX:
        raise DomainError(f'{name} must be an unsigned 64-bit integer')
    return value
