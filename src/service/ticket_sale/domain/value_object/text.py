from src.platform.exception.exceptions import DomainError


def is_utf8_text(value: str) -> bool:
    """Lone surrogates are valid `str` content but cannot be stored or emitted."""
    try:
        value.encode('utf-8')
    except UnicodeEncodeError:
        return False
    return True


def require_utf8_text(value: str, *, name: str) -> str:
    if not isinstance(value, str) or not is_utf8_text(value):
        raise DomainError(f'{name} must be valid UTF-8 text')
    return value
