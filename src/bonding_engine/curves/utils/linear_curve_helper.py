from bonding_engine.common.errors import InsufficientReserve, InsufficientSupply, Overflow
from bonding_engine.common.math import checked_add, checked_mul, checked_sub, mul_bps


class LinearCurveHelper:
    """
    Integer pricing math for the linear curve price(s) = initial_price + slope * s.

    Every quantity is an exact integer; each multiply and add is checked against
    the u64 range and raises Overflow instead of wrapping.
    """

    @staticmethod
    def spot_price(supply: int, initial_price: int, slope: int) -> int:
        """Price of the next unit minted at 'supply'."""
        return checked_add(initial_price, checked_mul(slope, supply))

    @staticmethod
    def price_integral(amount: int, base_supply: int, initial_price: int, slope: int) -> int:
        """
        Sum of price(base_supply) ... price(base_supply + amount - 1):
            initial_price*amount + slope*(base_supply*amount + amount*(amount-1)/2)

        amount*(amount-1) is always even, so the halving is exact.
        """
        if amount == 0:
            return 0

        base_cost = checked_mul(initial_price, amount)
        linear_term = checked_mul(checked_mul(slope, base_supply), amount)
        quadratic_term = 0
        if slope:
            triangle = checked_mul(amount, amount - 1) // 2
            quadratic_term = checked_mul(slope, triangle)

        return checked_add(checked_add(base_cost, linear_term), quadratic_term)

    @staticmethod
    def minimum_reserve(supply: int, initial_price: int, slope: int) -> int:
        """Reserve needed to redeem all of 'supply' at the curve's own prices."""
        return LinearCurveHelper.price_integral(supply, 0, initial_price, slope)

    @staticmethod
    def sell_refund(amount: int, current_supply: int, initial_price: int, slope: int) -> int:
        """
        Gross refund for burning the top 'amount' units, i.e. the integral based at
        the post-burn supply. Mirrors price_integral for the purchase of the same block.
        """
        if amount > current_supply:
            raise InsufficientSupply(f"requested {amount}, supply {current_supply}")
        return LinearCurveHelper.price_integral(amount, current_supply - amount, initial_price, slope)

    @staticmethod
    def apply_reserve_ratio(gross_refund: int, reserve_ratio: int) -> int:
        """Portion of a gross refund actually paid out; the rest stays in reserve."""
        return mul_bps(gross_refund, reserve_ratio)

    @staticmethod
    def available_fees(total_reserve: int, current_supply: int, initial_price: int, slope: int) -> int:
        """
        Reserve in excess of the minimum reserve.

        A negative result means the reserve invariant is already broken, which is
        reported as InsufficientReserve rather than Overflow.
        """
        required = LinearCurveHelper.minimum_reserve(current_supply, initial_price, slope)
        try:
            return checked_sub(total_reserve, required)
        except Overflow:
            raise InsufficientReserve(f"reserve {total_reserve} below minimum {required}") from None
