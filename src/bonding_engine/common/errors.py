from typing import Optional

from bonding_engine.common.enums import ErrorCode


class CurveError(ValueError):
    """Base class for every rejection raised by a curve operation."""
    code: ErrorCode = None

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail
        message = self.code.message if self.code else "Curve operation failed"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class InvalidAmount(CurveError):
    code = ErrorCode.INVALID_AMOUNT


class InsufficientSupply(CurveError):
    code = ErrorCode.INSUFFICIENT_SUPPLY


class InsufficientReserve(CurveError):
    code = ErrorCode.INSUFFICIENT_RESERVE


class InsufficientFees(CurveError):
    code = ErrorCode.INSUFFICIENT_FEES


class Unauthorized(CurveError):
    code = ErrorCode.UNAUTHORIZED


class Overflow(CurveError):
    code = ErrorCode.OVERFLOW
