import math
import unittest

from hypothesis import given
from hypothesis import strategies as st

from clmm.constants import MAX_SQRT_PRICE_X64, MAX_TICK, MIN_SQRT_PRICE_X64, MIN_TICK
from clmm.exceptions import DomainError, InvalidSqrtPrice, InvalidTick
from clmm.utils.big_num import U128
from clmm.utils.tick_math import TICK_RATIO_X64, check_tick_boundary, get_sqrt_price_at_tick, get_tick_at_sqrt_price

ticks = st.integers(min_value=MIN_TICK, max_value=MAX_TICK)
sqrt_prices = st.integers(min_value=MIN_SQRT_PRICE_X64, max_value=MAX_SQRT_PRICE_X64 - 1)

# every 997th tick plus both ends of the domain and the neighbourhood of zero
SAMPLED_TICKS = sorted(
    set(range(MIN_TICK, MAX_TICK + 1, 997))
    | set(range(MIN_TICK, MIN_TICK + 20))
    | set(range(MAX_TICK - 20, MAX_TICK + 1))
    | set(range(-300, 301))
)


class TestGetSqrtPriceAtTick(unittest.TestCase):
    def test_table_size(self):
        self.assertEqual(len(TICK_RATIO_X64), 19)

    def test_boundaries(self):
        self.assertEqual(get_sqrt_price_at_tick(MIN_TICK), MIN_SQRT_PRICE_X64)
        self.assertEqual(get_sqrt_price_at_tick(MAX_TICK), MAX_SQRT_PRICE_X64)
        self.assertEqual(MIN_TICK, -MAX_TICK)

    def test_zero_tick_is_one(self):
        self.assertEqual(get_sqrt_price_at_tick(0), 2**64)

    def test_invalid_tick(self):
        self.assertRaises(InvalidTick, get_sqrt_price_at_tick, MAX_TICK + 1)
        self.assertRaises(InvalidTick, get_sqrt_price_at_tick, MIN_TICK - 1)
        self.assertRaises(InvalidTick, get_sqrt_price_at_tick, 1.5)
        self.assertRaises(DomainError, get_sqrt_price_at_tick, 2**31)
        self.assertRaises(ValueError, check_tick_boundary, MAX_TICK + 1)
        check_tick_boundary(MAX_TICK)

    def test_monotonic(self):
        prev = None
        for tick in SAMPLED_TICKS:
            price = get_sqrt_price_at_tick(tick)
            if prev is not None:
                self.assertLess(prev, price)
            if tick < MAX_TICK:
                self.assertLess(price, get_sqrt_price_at_tick(tick + 1))
            prev = price

    @given(tick=ticks)
    def test_close_to_float(self, tick):
        expected = 1.0001 ** (tick / 2)
        actual = get_sqrt_price_at_tick(tick) / 2**64
        self.assertTrue(math.isclose(actual, expected, rel_tol=1e-8), f"{tick=}: {actual} != {expected}")


class TestGetTickAtSqrtPrice(unittest.TestCase):
    def test_boundaries(self):
        self.assertEqual(get_tick_at_sqrt_price(MIN_SQRT_PRICE_X64), MIN_TICK)
        self.assertEqual(get_tick_at_sqrt_price(MAX_SQRT_PRICE_X64 - 1), MAX_TICK - 1)
        self.assertEqual(get_tick_at_sqrt_price(2**64), 0)
        self.assertEqual(get_tick_at_sqrt_price(2**64 - 1), -1)

    def test_accepts_u128(self):
        self.assertEqual(get_tick_at_sqrt_price(U128(2**64)), 0)

    def test_upper_bound_is_exclusive(self):
        self.assertRaises(InvalidSqrtPrice, get_tick_at_sqrt_price, MAX_SQRT_PRICE_X64)

    def test_invalid_sqrt_price(self):
        self.assertRaises(InvalidSqrtPrice, get_tick_at_sqrt_price, MIN_SQRT_PRICE_X64 - 1)
        self.assertRaises(InvalidSqrtPrice, get_tick_at_sqrt_price, 0)
        self.assertRaises(InvalidSqrtPrice, get_tick_at_sqrt_price, 2**128)
        self.assertRaises(ValueError, get_tick_at_sqrt_price, -5)

    def test_round_trip(self):
        for tick in SAMPLED_TICKS:
            if tick == MAX_TICK:
                continue  # its sqrt price is outside the domain of the inverse
            self.assertEqual(get_tick_at_sqrt_price(get_sqrt_price_at_tick(tick)), tick)

    def test_just_below_a_tick_price(self):
        for tick in (-100000, -1, 1, 2, 100000):
            self.assertEqual(get_tick_at_sqrt_price(get_sqrt_price_at_tick(tick) - 1), tick - 1)

    @given(tick=st.integers(min_value=MIN_TICK, max_value=MAX_TICK - 1))
    def test_round_trip_fuzz(self, tick):
        self.assertEqual(get_tick_at_sqrt_price(get_sqrt_price_at_tick(tick)), tick)

    @given(sqrt_price_x64=sqrt_prices)
    def test_brackets_sqrt_price(self, sqrt_price_x64):
        tick = get_tick_at_sqrt_price(sqrt_price_x64)
        self.assertLessEqual(get_sqrt_price_at_tick(tick), sqrt_price_x64)
        self.assertLess(sqrt_price_x64, get_sqrt_price_at_tick(tick + 1))


if __name__ == "__main__":
    unittest.main()
