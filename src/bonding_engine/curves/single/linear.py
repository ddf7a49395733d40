import logging
from datetime import datetime
from typing import Hashable

from bonding_engine.common.enums import OrderSide
from bonding_engine.common.errors import CurveError
from bonding_engine.common.model import TransactionRequest, TransactionResult
from bonding_engine.curves import transitions
from bonding_engine.curves.single.base import BondingCurve
from bonding_engine.curves.utils.linear_curve_helper import LinearCurveHelper as helper

logger = logging.getLogger(__name__)


class LinearBondingCurve(BondingCurve):
    """
        A linear bonding curve over integer supply and integer currency units.

        The base formula for price is:
          price(s) = initial_price + slope * s

        The cost of minting 'a' units starting at supply s is the discrete sum:
          cost(a) = initial_price*a + slope*(s*a + a*(a-1)/2)

        Sells refund the same sum based at the post-burn supply, scaled by
        reserve_ratio / 10000. The unpaid part accrues as fees for the creator.

        The curve holds one CurveState and replaces it only after an operation has
        fully succeeded; a rejected operation leaves the held state untouched.
    """

    def get_spot_price(self, supply: int) -> int:
        return helper.spot_price(supply, self._state.initial_price, self._state.slope)

    def calculate_purchase_cost(self, amount: int) -> int:
        """
        Sums price from current_supply to current_supply + amount - 1.
        """
        return transitions.quote_buy(self._state, amount)

    def calculate_sale_return(self, amount: int) -> int:
        """
        Sums price from (current_supply - amount) to current_supply - 1, after the reserve ratio.
        """
        return transitions.quote_sell(self._state, amount)

    def minimum_reserve(self) -> int:
        return helper.minimum_reserve(self._state.current_supply, self._state.initial_price, self._state.slope)

    def available_fees(self) -> int:
        return transitions.available_fees(self._state)

    def buy(self, request: TransactionRequest) -> TransactionResult:
        """
        Buys 'request.amount' tokens. The result's total_cost is what the buyer owes the reserve.
        """
        if request.order_type != OrderSide.BUY:
            raise ValueError(f"Expected a BUY request, got {request.order_type}.")

        try:
            outcome = transitions.buy(self._state, request.amount, buyer=request.user_id)
        except CurveError as e:
            logger.warning("Curve %s buy rejected [%s]: %s", self._state.creator_id, e.code, e)
            raise

        self._commit(outcome.state, outcome.event)
        return TransactionResult(
            executed_amount=request.amount,
            total_cost=outcome.amount,
            new_supply=outcome.state.current_supply,
            new_reserve=outcome.state.total_reserve,
            timestamp=datetime.now()
        )

    def sell(self, request: TransactionRequest) -> TransactionResult:
        """
        Sells 'request.amount' tokens. The result's total_cost is the net refund paid to the seller.
        """
        if request.order_type != OrderSide.SELL:
            raise ValueError(f"Expected a SELL request, got {request.order_type}.")

        try:
            outcome = transitions.sell(self._state, request.amount, seller=request.user_id)
        except CurveError as e:
            logger.warning("Curve %s sell rejected [%s]: %s", self._state.creator_id, e.code, e)
            raise

        self._commit(outcome.state, outcome.event)
        return TransactionResult(
            executed_amount=request.amount,
            total_cost=outcome.amount,  # the refund, following the buy-side field name
            new_supply=outcome.state.current_supply,
            new_reserve=outcome.state.total_reserve,
            timestamp=datetime.now()
        )

    def withdraw_fees(self, caller: Hashable, amount: int) -> int:
        try:
            outcome = transitions.withdraw_fees(self._state, caller, amount)
        except CurveError as e:
            logger.warning("Curve %s fee withdrawal rejected [%s]: %s", self._state.creator_id, e.code, e)
            raise

        self._commit(outcome.state, outcome.event)
        return outcome.amount

    def execute(self, request: TransactionRequest) -> TransactionResult:
        """Dispatches a request to buy or sell based on its order side."""
        if request.order_type == OrderSide.BUY:
            return self.buy(request)
        return self.sell(request)
