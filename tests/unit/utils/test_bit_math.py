import unittest

from hypothesis import given
from hypothesis import strategies as st

from clmm.utils.bit_math import least_significant_bit, leading_zeros, most_significant_bit, trailing_zeros


class TestBitMath(unittest.TestCase):
    def test_most_significant_bit(self):
        self.assertEqual(most_significant_bit(1), 0)
        self.assertEqual(most_significant_bit(2), 1)
        self.assertEqual(most_significant_bit(3), 1)
        self.assertEqual(most_significant_bit(2**127), 127)
        self.assertEqual(most_significant_bit(2**256 - 1), 255)
        self.assertRaises(ValueError, most_significant_bit, 0)

    def test_least_significant_bit(self):
        self.assertEqual(least_significant_bit(1), 0)
        self.assertEqual(least_significant_bit(12), 2)
        self.assertEqual(least_significant_bit(2**63), 63)
        self.assertRaises(ValueError, least_significant_bit, 0)

    def test_zero_counts_at_power_of_two_boundaries(self):
        self.assertEqual(leading_zeros(0, 64), 64)
        self.assertEqual(trailing_zeros(0, 64), 64)
        self.assertEqual(leading_zeros(1, 128), 127)
        self.assertEqual(leading_zeros(2**63, 64), 0)
        self.assertEqual(leading_zeros(2**63 - 1, 64), 1)
        self.assertEqual(trailing_zeros(2**63, 64), 63)

    def test_width_is_checked(self):
        self.assertRaises(ValueError, leading_zeros, 2**64, 64)
        self.assertRaises(ValueError, trailing_zeros, -1, 64)

    @given(x=st.integers(min_value=1, max_value=2**128 - 1))
    def test_msb_lsb_bracket_value(self, x):
        msb = most_significant_bit(x)
        lsb = least_significant_bit(x)
        self.assertTrue(2**msb <= x < 2 ** (msb + 1))
        self.assertEqual(x % (2**lsb), 0)
        self.assertNotEqual((x >> lsb) & 1, 0)
        self.assertEqual(leading_zeros(x, 128), 127 - msb)


if __name__ == "__main__":
    unittest.main()
