from dataclasses import dataclass, asdict, field
from datetime import datetime
from typing import Any, Dict, Hashable, Optional

from bonding_engine.common.enums import CurveEventType, OrderSide
from bonding_engine.common.errors import Overflow
from bonding_engine.common.math import BASIS_POINTS, MAX_U64


@dataclass(frozen=True)
class CurveParams:
    """Fixed parameters of a linear curve: price(s) = initial_price + slope * s."""
    slope: int = 0
    initial_price: int = 0
    reserve_ratio: int = BASIS_POINTS

    def __post_init__(self):
        for name in ("slope", "initial_price", "reserve_ratio"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"'{name}' must be an integer.")
        if self.slope < 0:
            raise ValueError("Slope must be non-negative.")
        if self.initial_price < 0:
            raise ValueError("Initial price must be non-negative.")
        if self.slope > MAX_U64 or self.initial_price > MAX_U64:
            raise ValueError("Curve parameters must fit in 64 bits.")
        if not 0 <= self.reserve_ratio <= BASIS_POINTS:
            raise ValueError(f"Reserve ratio must be within [0, {BASIS_POINTS}] basis points.")


@dataclass(frozen=True)
class CurveState:
    """
    The persisted record of one curve instance.

    Identity fields are opaque handles owned by the host environment; the engine
    only compares 'creator' for equality when authorizing fee withdrawals.
    """
    creator: Hashable
    creator_id: int
    slope: int
    initial_price: int
    reserve_ratio: int
    current_supply: int = 0
    total_reserve: int = 0
    token_mint: Optional[Hashable] = None
    reserve_vault: Optional[Hashable] = None

    def __post_init__(self):
        # Raises ValueError for out-of-range curve parameters.
        CurveParams(self.slope, self.initial_price, self.reserve_ratio)
        for name in ("creator_id", "current_supply", "total_reserve"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"'{name}' must be an integer.")
            if value < 0:
                raise ValueError(f"'{name}' must be non-negative.")
            if value > MAX_U64:
                raise Overflow(f"{name}={value} exceeds {MAX_U64}")

    @property
    def params(self) -> CurveParams:
        return CurveParams(self.slope, self.initial_price, self.reserve_ratio)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class TokenPurchased:
    buyer: Hashable
    amount: int
    cost: int
    new_supply: int
    event_type: CurveEventType = field(default=CurveEventType.TOKEN_PURCHASED, init=False)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["event_type"] = str(self.event_type)
        return data


@dataclass(frozen=True)
class TokenSold:
    seller: Hashable
    amount: int
    refund: int
    new_supply: int
    event_type: CurveEventType = field(default=CurveEventType.TOKEN_SOLD, init=False)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["event_type"] = str(self.event_type)
        return data


@dataclass(frozen=True)
class FeesWithdrawn:
    creator: Hashable
    amount: int
    event_type: CurveEventType = field(default=CurveEventType.FEES_WITHDRAWN, init=False)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["event_type"] = str(self.event_type)
        return data


@dataclass(frozen=True)
class TransitionResult:
    """Outcome of a pure transition: the replacement state plus the settlement amount."""
    state: CurveState
    amount: int
    event: Any


@dataclass
class TransactionRequest:
    """Represents a discrete purchase or sale request."""
    order_type: OrderSide
    amount: int = 0
    user_id: Optional[Hashable] = None


@dataclass
class TransactionResult:
    """Outcome of a transaction applied to a LinearBondingCurve."""
    executed_amount: int
    total_cost: int
    new_supply: int
    new_reserve: int
    timestamp: datetime
