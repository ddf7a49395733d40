import pytest

from hypothesis import given, settings, strategies as st

from bonding_engine.common.errors import CurveError, Overflow
from bonding_engine.common.math import MAX_U64
from bonding_engine.curves import transitions
from bonding_engine.curves.utils.linear_curve_helper import LinearCurveHelper as helper


prices = st.integers(min_value=0, max_value=10 ** 6)
slopes = st.integers(min_value=0, max_value=10 ** 4)
ratios = st.integers(min_value=0, max_value=10_000)
supplies = st.integers(min_value=0, max_value=10 ** 6)
amounts = st.integers(min_value=1, max_value=10 ** 5)


@given(supply=supplies, i=prices, m=slopes)
def test_zero_amount_costs_nothing(supply, i, m):
    assert helper.price_integral(0, supply, i, m) == 0


@given(amount=amounts, s1=supplies, s2=supplies, i=prices, m=slopes)
def test_price_never_decreases_with_supply(amount, s1, s2, i, m):
    low, high = sorted((s1, s2))
    assert helper.price_integral(amount, high, i, m) >= helper.price_integral(amount, low, i, m)


@given(a=amounts, b=amounts, base=supplies, i=prices, m=slopes)
def test_integral_is_additive(a, b, base, i, m):
    whole = helper.price_integral(a + b, base, i, m)
    parts = helper.price_integral(a, base, i, m) + helper.price_integral(b, base + a, i, m)
    assert whole == parts


@given(start=supplies, amount=amounts, i=prices, m=slopes)
def test_buy_then_sell_restores_state_at_full_ratio(start, amount, i, m):
    state = transitions.initialize_curve("creator", 1, slope=m, initial_price=i, reserve_ratio=10_000)
    if start:
        state = transitions.buy(state, start).state

    bought = transitions.buy(state, amount)
    sold = transitions.sell(bought.state, amount)

    assert sold.amount == bought.amount
    assert sold.state == state


operations = st.lists(
    st.tuples(st.sampled_from(["buy", "sell", "withdraw"]), st.integers(min_value=0, max_value=10 ** 4)),
    max_size=30,
)


@settings(max_examples=200)
@given(i=prices, m=slopes, ratio=ratios, ops=operations)
def test_reserve_invariant_holds_for_any_sequence(i, m, ratio, ops):
    state = transitions.initialize_curve("creator", 1, slope=m, initial_price=i, reserve_ratio=ratio)

    for op, amount in ops:
        before = state
        try:
            if op == "buy":
                state = transitions.buy(state, amount).state
            elif op == "sell":
                state = transitions.sell(state, amount).state
            else:
                state = transitions.withdraw_fees(state, "creator", amount).state
        except CurveError:
            assert state is before

        minimum = helper.minimum_reserve(state.current_supply, state.initial_price, state.slope)
        assert state.total_reserve >= minimum
        assert state.current_supply >= 0


@given(supply=st.integers(min_value=0, max_value=10 ** 6))
def test_overflowing_buy_leaves_state_unchanged(supply):
    state = transitions.initialize_curve("creator", 1, slope=1, initial_price=1, reserve_ratio=10_000)
    if supply:
        state = transitions.buy(state, supply).state
    with pytest.raises(Overflow):
        transitions.buy(state, MAX_U64 - supply)
    assert state.current_supply == supply
