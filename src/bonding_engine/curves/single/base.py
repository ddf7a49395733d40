import logging
from abc import ABC, abstractmethod
from typing import Callable, Hashable, Iterable, List, Optional

from bonding_engine.common.model import CurveParams, CurveState, TransactionRequest, TransactionResult

logger = logging.getLogger(__name__)


class BondingCurve(ABC):
    """Abstract base class defining the interface for any bonding curve implementation."""
    def __init__(self, state: 'CurveState', listeners: Optional[Iterable[Callable]] = None):
        """
        Wraps a single curve instance.

        :param state: CurveState - the persisted record to operate on
        :param listeners: callables receiving each event emitted after a successful operation
        """
        self._state = state
        self._listeners: List[Callable] = list(listeners or [])

    @property
    def state(self) -> 'CurveState':
        """Returns the current (immutable) curve state."""
        return self._state

    @property
    def params(self) -> 'CurveParams':
        """Returns the bonding curve parameters."""
        return self._state.params

    @property
    def current_supply(self) -> int:
        """Returns the current supply from the state."""
        return self._state.current_supply

    @property
    def total_reserve(self) -> int:
        """Returns the reserve held against the current supply."""
        return self._state.total_reserve

    def add_listener(self, listener: Callable):
        self._listeners.append(listener)

    @abstractmethod
    def get_spot_price(self, supply: int) -> int:
        """
        Returns the spot price for a given supply.

        :param supply: int - Supply of tokens.
        :return: int: The price of the next unit at given supply.
        """
        pass

    @abstractmethod
    def calculate_purchase_cost(self, amount: int) -> int:
        """
        Calculates how much it costs to buy a specified 'amount' of tokens from the current state of the bonding curve.

        :param amount: int - Number of tokens the user wants to purchase.
        :return: Total cost to purchase 'amount' of tokens.
        """
        pass

    @abstractmethod
    def calculate_sale_return(self, amount: int) -> int:
        """
        Calculates how much capital is returned if a user sells a specified 'amount' of tokens
        back into the bonding curve.

        :param amount: int - Number of tokens the user wants to sell.
        :return: Total return for selling 'amount' of tokens.
        """
        pass

    @abstractmethod
    def buy(self, request: 'TransactionRequest') -> 'TransactionResult':
        """
        Executes a buy operation along the bonding curve, updating the internal state,
        and returns a TransactionResult.

        :param request: TransactionRequest
        :return: A TransactionResult detailing executed amount, total cost, new supply, etc.
        """
        pass

    @abstractmethod
    def sell(self, request: 'TransactionRequest') -> 'TransactionResult':
        """
        Executes a sell operation along the bonding curve, updating the internal state,
        and returns a TransactionResult.

        :param request: TransactionRequest
        :return: A TransactionResult detailing executed amount, total return, new supply, etc.
        """
        pass

    @abstractmethod
    def withdraw_fees(self, caller: Hashable, amount: int) -> int:
        """
        Withdraws accumulated fees for the curve creator.

        :param caller: identity of the requester, compared against the creator
        :param amount: int - Amount of reserve to release.
        :return: The withdrawn amount.
        """
        pass

    def _commit(self, new_state: 'CurveState', event):
        """
        Swaps in the new state and notifies listeners.

        The transition is already committed when listeners run, so a failing
        listener is logged and skipped instead of surfacing to the caller.
        """
        self._state = new_state
        for listener in self._listeners:
            try:
                listener(event)
            except Exception:
                logger.exception("Listener %r failed on %s", listener, event.event_type)
