from typing import Any, Dict, List

from bonding_engine.common.enums import OrderSide
from bonding_engine.common.errors import CurveError, Overflow
from bonding_engine.common.math import BASIS_POINTS, MAX_U64
from bonding_engine.common.model import CurveParams, CurveState, TransactionRequest
from bonding_engine.curves.single.linear import LinearBondingCurve
from bonding_engine.curves.utils.linear_curve_helper import LinearCurveHelper as helper


class LinearCurveValidator:
    """
    Specialized validator for the LinearBondingCurve.
    Performs:
      1) Param checks (initial_price, slope, reserve_ratio)
      2) Invariant checks on a CurveState (reserve backs the supply)
      3) Boundary tests (zero quotes, overflow at the top of the range)
      4) Scenario tests (small buy/sell sequence on a scratch copy)

    Each step returns a dict with:
      {
        "errors": [str...],
        "warnings": [str...],
        "info": {...}
      }
    and 'run_all_validations' aggregates them into a single result.
    """

    @staticmethod
    def validate_params(curve_params: 'CurveParams') -> Dict[str, Any]:
        """
        Checks that the linear curve's parameters are usable:
          - initial_price, slope within [0, MAX_U64]
          - reserve_ratio within [0, 10000]
        Degenerate but legal settings are reported as warnings.
        """
        errors: List[str] = []
        warnings: List[str] = []
        info: Dict[str, Any] = {}

        initial_price = getattr(curve_params, "initial_price", None)
        if initial_price is None or initial_price < 0 or initial_price > MAX_U64:
            errors.append("LinearCurve: 'initial_price' must be within [0, MAX_U64].")

        slope = getattr(curve_params, "slope", None)
        if slope is None or slope < 0 or slope > MAX_U64:
            errors.append("LinearCurve: 'slope' must be within [0, MAX_U64].")

        reserve_ratio = getattr(curve_params, "reserve_ratio", None)
        if reserve_ratio is None or reserve_ratio < 0 or reserve_ratio > BASIS_POINTS:
            errors.append(f"LinearCurve: 'reserve_ratio' must be within [0, {BASIS_POINTS}].")
        elif reserve_ratio == 0:
            warnings.append("LinearCurve: 'reserve_ratio' is 0; sellers receive nothing.")

        if initial_price == 0 and slope == 0:
            warnings.append("LinearCurve: 'initial_price' and 'slope' are both 0; tokens are free.")

        info["param_summary"] = {
            "initial_price": str(initial_price),
            "slope": str(slope),
            "reserve_ratio": str(reserve_ratio),
        }

        return {
            "errors": errors,
            "warnings": warnings,
            "info": info
        }

    @staticmethod
    def check_invariants(state: 'CurveState') -> Dict[str, Any]:
        """
        Verifies the reserve invariants of a state:
          - supply and reserve are non-negative and fit in 64 bits
          - total_reserve >= minimum_reserve(current_supply)
        """
        errors: List[str] = []
        warnings: List[str] = []
        info: Dict[str, Any] = {}

        for name in ("current_supply", "total_reserve"):
            value = getattr(state, name)
            if value < 0:
                errors.append(f"'{name}' is negative: {value}.")
            elif value > MAX_U64:
                errors.append(f"'{name}' exceeds MAX_U64: {value}.")

        if not errors:
            try:
                minimum = helper.minimum_reserve(state.current_supply, state.initial_price, state.slope)
            except Overflow:
                errors.append("Minimum reserve for the current supply overflows.")
            else:
                info["minimum_reserve"] = str(minimum)
                if state.total_reserve < minimum:
                    errors.append(
                        f"Reserve {state.total_reserve} is below the minimum reserve {minimum}."
                    )
                else:
                    info["available_fees"] = str(state.total_reserve - minimum)

        return {
            "errors": errors,
            "warnings": warnings,
            "info": info
        }

    @staticmethod
    def boundary_tests(curve: 'LinearBondingCurve') -> Dict[str, Any]:
        """
        Calls a few boundary conditions on the linear curve:
          - get_spot_price(current_supply)
          - price_integral of 0 units at the current supply
          - a MAX_U64 purchase, which must be rejected as Overflow

        Returns a dict of errors/warnings/info.
        """
        errors: List[str] = []
        warnings: List[str] = []
        info: Dict[str, Any] = {}
        state = curve.state

        # 1) Spot price at the current supply
        try:
            info["spot_price"] = str(curve.get_spot_price(state.current_supply))
        except Overflow:
            warnings.append("Spot price at the current supply overflows.")

        # 2) Cost of 0 tokens => must be 0
        cost_zero = helper.price_integral(0, state.current_supply, state.initial_price, state.slope)
        if cost_zero != 0:
            errors.append(f"Cost to buy 0 tokens is not zero: got {cost_zero}")

        # 3) With a non-zero slope the triangular term of a maximal buy cannot fit
        if state.slope:
            try:
                curve.calculate_purchase_cost(MAX_U64)
                errors.append("Buying MAX_U64 tokens did not overflow.")
            except Overflow:
                pass

        info["boundary_tests_run"] = True
        return {
            "errors": errors,
            "warnings": warnings,
            "info": info
        }

    @staticmethod
    def scenario_tests(curve: 'LinearBondingCurve') -> Dict[str, Any]:
        """
        Runs a small scenario on a scratch curve seeded from the current state:
          1) buy(100)
          2) buy(200)
          3) sell(50)
        Checks the reserve invariant after each step. An overflowing step is a warning,
        any other rejection an error. The caller's curve is untouched.
        """
        errors: List[str] = []
        warnings: List[str] = []
        info: Dict[str, Any] = {}

        scratch = LinearBondingCurve(curve.state)
        steps = [
            TransactionRequest(order_type=OrderSide.BUY, amount=100),
            TransactionRequest(order_type=OrderSide.BUY, amount=200),
            TransactionRequest(order_type=OrderSide.SELL, amount=50),
        ]

        for request in steps:
            label = f"{request.order_type.name.lower()}({request.amount})"
            try:
                scratch.execute(request)
            except Overflow as e:
                # A curve near the top of the u64 range cannot absorb the fixed steps.
                warnings.append(f"Scenario step {label} overflows: {e}")
                break
            except CurveError as e:
                errors.append(f"Exception in scenario step {label}: {e}")
                break

            invariants = LinearCurveValidator.check_invariants(scratch.state)
            for err in invariants["errors"]:
                errors.append(f"After {label}: {err}")

        info["final_supply_after_scenario"] = str(scratch.current_supply)
        info["final_reserve_after_scenario"] = str(scratch.total_reserve)

        return {
            "errors": errors,
            "warnings": warnings,
            "info": info
        }

    @staticmethod
    def run_all_validations(curve: 'LinearBondingCurve') -> Dict[str, Any]:
        """
        Aggregates:
          - param check
          - invariant check
          - boundary tests
          - scenario tests
        Returns a dict with keys: errors, warnings, info
        """
        if not isinstance(curve, LinearBondingCurve):
            raise ValueError("Invalid curve type for LinearCurveValidator.")

        results = {
            "errors": [],
            "warnings": [],
            "info": {}
        }

        checks = [
            LinearCurveValidator.validate_params(curve.params),
            LinearCurveValidator.check_invariants(curve.state),
            LinearCurveValidator.boundary_tests(curve),
            LinearCurveValidator.scenario_tests(curve),
        ]
        for check in checks:
            results["errors"].extend(check["errors"])
            results["warnings"].extend(check["warnings"])
            results["info"].update(check["info"])

        return results
