import math


DEFAULT_LIMIT = 5
DEFAULT_OFFSET = 0


def _as_number(value):
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def normalize_limit(value, default: int = DEFAULT_LIMIT) -> int:
    number = _as_number(value)
    if number is None or number <= 0:
        return default
    return math.floor(number)


def normalize_offset(value, default: int = DEFAULT_OFFSET) -> int:
    number = _as_number(value)
    if number is None or number < 0:
        return default
    return math.floor(number)
