"""
Pure state transitions over a CurveState.

Each operation validates every amount and runs every checked computation before
building the replacement state, so a raised CurveError always leaves the input
state as the current one. The caller moves value, mints/burns units and
persists the returned state.
"""
import logging
from dataclasses import replace
from typing import Hashable, Optional

from bonding_engine.common.errors import InsufficientFees, InsufficientReserve, InvalidAmount, Unauthorized
from bonding_engine.common.math import checked_add, checked_sub, require_uint
from bonding_engine.common.model import (
    CurveState,
    FeesWithdrawn,
    TokenPurchased,
    TokenSold,
    TransitionResult,
)
from bonding_engine.curves.utils.linear_curve_helper import LinearCurveHelper as helper

logger = logging.getLogger(__name__)


def _require_positive(amount: int) -> int:
    require_uint(amount, "amount")
    if amount == 0:
        raise InvalidAmount("amount must be greater than zero")
    return amount


def initialize_curve(
    creator: Hashable,
    creator_id: int,
    slope: int,
    initial_price: int,
    reserve_ratio: int,
    token_mint: Optional[Hashable] = None,
    reserve_vault: Optional[Hashable] = None,
) -> CurveState:
    """Creates a curve with zero supply and zero reserve."""
    state = CurveState(
        creator=creator,
        creator_id=creator_id,
        slope=slope,
        initial_price=initial_price,
        reserve_ratio=reserve_ratio,
        token_mint=token_mint,
        reserve_vault=reserve_vault,
    )
    logger.info(
        "Curve %s initialized: initial_price=%s slope=%s reserve_ratio=%s",
        creator_id, initial_price, slope, reserve_ratio,
    )
    return state


def quote_buy(state: CurveState, amount: int) -> int:
    """Cost of minting 'amount' units at the current supply."""
    _require_positive(amount)
    return helper.price_integral(amount, state.current_supply, state.initial_price, state.slope)


def quote_sell(state: CurveState, amount: int) -> int:
    """Net refund (after the reserve ratio) for burning 'amount' units."""
    _require_positive(amount)
    gross_refund = helper.sell_refund(amount, state.current_supply, state.initial_price, state.slope)
    net_refund = helper.apply_reserve_ratio(gross_refund, state.reserve_ratio)
    if net_refund > state.total_reserve:
        raise InsufficientReserve(f"refund {net_refund} exceeds reserve {state.total_reserve}")
    return net_refund


def available_fees(state: CurveState) -> int:
    return helper.available_fees(state.total_reserve, state.current_supply, state.initial_price, state.slope)


def buy(state: CurveState, amount: int, buyer: Optional[Hashable] = None) -> TransitionResult:
    """
    Mints 'amount' units. The returned amount is the cost the buyer must deposit
    into the reserve.
    """
    cost = quote_buy(state, amount)
    new_supply = checked_add(state.current_supply, amount)
    new_reserve = checked_add(state.total_reserve, cost)

    new_state = replace(state, current_supply=new_supply, total_reserve=new_reserve)
    logger.info("Curve %s buy: amount=%s cost=%s new_supply=%s", state.creator_id, amount, cost, new_supply)
    return TransitionResult(
        state=new_state,
        amount=cost,
        event=TokenPurchased(buyer=buyer, amount=amount, cost=cost, new_supply=new_supply),
    )


def sell(state: CurveState, amount: int, seller: Optional[Hashable] = None) -> TransitionResult:
    """
    Burns 'amount' units. The returned amount is the net refund to pay out; the
    reserve-ratio complement of the gross refund stays in the reserve as fees.
    """
    net_refund = quote_sell(state, amount)
    new_supply = state.current_supply - amount
    new_reserve = checked_sub(state.total_reserve, net_refund)

    new_state = replace(state, current_supply=new_supply, total_reserve=new_reserve)
    logger.info("Curve %s sell: amount=%s refund=%s new_supply=%s", state.creator_id, amount, net_refund, new_supply)
    return TransitionResult(
        state=new_state,
        amount=net_refund,
        event=TokenSold(seller=seller, amount=amount, refund=net_refund, new_supply=new_supply),
    )


def withdraw_fees(state: CurveState, caller: Hashable, amount: int) -> TransitionResult:
    """
    Releases 'amount' of accumulated fees to the creator. Only reserve above the
    minimum reserve of the current supply can be withdrawn.
    """
    if caller != state.creator:
        raise Unauthorized(f"{caller!r} is not the curve creator")
    require_uint(amount, "amount")

    fees = available_fees(state)
    if amount > fees:
        raise InsufficientFees(f"requested {amount}, available {fees}")

    new_state = replace(state, total_reserve=checked_sub(state.total_reserve, amount))
    logger.info("Curve %s fees withdrawn: amount=%s remaining=%s", state.creator_id, amount, fees - amount)
    return TransitionResult(
        state=new_state,
        amount=amount,
        event=FeesWithdrawn(creator=caller, amount=amount),
    )
