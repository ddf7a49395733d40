from enum import Enum


class OrderSide(Enum):
    BUY = "BUY"
    SELL = "SELL"

    @classmethod
    def from_str(cls, side_str):
        if side_str.upper() == OrderSide.BUY.name:
            return OrderSide.BUY
        elif side_str.upper() == OrderSide.SELL.name:
            return OrderSide.SELL
        else:
            raise NotImplementedError(f"No order side enum for {side_str}")

    def __str__(self):
        return self.name

    def __repr__(self):
        return self.__str__()


class CurveEventType(Enum):
    TOKEN_PURCHASED = "TOKEN_PURCHASED"
    TOKEN_SOLD = "TOKEN_SOLD"
    FEES_WITHDRAWN = "FEES_WITHDRAWN"

    def __str__(self):
        return self.name

    def __repr__(self):
        return self.__str__()


class ErrorCode(Enum):
    INVALID_AMOUNT = "Invalid amount provided"
    INSUFFICIENT_SUPPLY = "Insufficient token supply"
    INSUFFICIENT_RESERVE = "Insufficient reserve balance"
    INSUFFICIENT_FEES = "Insufficient fees available"
    UNAUTHORIZED = "Unauthorized access"
    OVERFLOW = "Arithmetic overflow"

    @property
    def message(self) -> str:
        return self.value

    def __str__(self):
        return self.name

    def __repr__(self):
        return self.__str__()
