from bonding_engine.common.errors import Overflow, InvalidAmount


MAX_U64 = 2 ** 64 - 1
BASIS_POINTS = 10_000


def require_uint(value: int, name: str = "value", limit: int = MAX_U64) -> int:
    """
    Ensures 'value' is a plain integer in [0, limit].

    :raises TypeError: for floats, Decimals, bools, etc.
    :raises Overflow: if the value is outside the representable range
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"'{name}' must be an int, got {type(value).__name__}")
    if value < 0 or value > limit:
        raise Overflow(f"{name}={value} outside [0, {limit}]")
    return value


def checked_add(a: int, b: int, limit: int = MAX_U64) -> int:
    result = a + b
    if result > limit:
        raise Overflow(f"{a} + {b}")
    return result


def checked_sub(a: int, b: int) -> int:
    result = a - b
    if result < 0:
        raise Overflow(f"{a} - {b}")
    return result


def checked_mul(a: int, b: int, limit: int = MAX_U64) -> int:
    result = a * b
    if result > limit:
        raise Overflow(f"{a} * {b}")
    return result


def checked_div(a: int, b: int) -> int:
    """Integer division truncating toward zero; operands are non-negative."""
    if b == 0:
        raise Overflow(f"{a} / 0")
    return a // b


def mul_bps(value: int, bps: int) -> int:
    """
    Applies a basis-point fraction: value * bps / 10000, truncated.
    The intermediate product is checked like every other multiply.
    """
    if bps > BASIS_POINTS:
        raise InvalidAmount(f"basis points {bps} > {BASIS_POINTS}")
    return checked_div(checked_mul(value, bps), BASIS_POINTS)
