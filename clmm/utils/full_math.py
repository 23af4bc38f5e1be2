# The MIT License (MIT)
# Copyright © 2026 clmm-core contributors

# Permission is hereby granted, free of charge, to any person obtaining a copy of this software and associated
# documentation files (the “Software”), to deal in the Software without restriction, including without limitation
# the rights to use, copy, modify, merge, publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so, subject to the following conditions:

# The above copyright notice and this permission notice shall be included in all copies or substantial portions of
# the Software.

# THE SOFTWARE IS PROVIDED “AS IS”, WITHOUT WARRANTY OF ANY KIND, EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO
# THE WARRANTIES OF MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL
# THE AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN ACTION
# OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER
# DEALINGS IN THE SOFTWARE.

"""
Phantom overflow resistant multiply-divide.

`value * num / denom` is evaluated in a type twice as wide as the operands, so the
product may exceed the operand width as long as the quotient does not. Only the
quotient is range checked. Supported operand widths:

- plain int, treated as u64, widened to U128
- U128, widened to U256
- U256, widened to U512

Operands are unsigned. The ceil variant adds `denom - 1` before dividing, which is
only correct for unsigned values.
"""

from clmm.constants import MAX_U64
from clmm.exceptions import ArithmeticOverflow, DivisionByZero
from clmm.utils.big_num import U128, U256, U512

Operand = int | U128 | U256


def _operand_width(value: Operand, num: Operand, denom: Operand) -> type:
    width = type(value)
    for operand in (num, denom):
        if type(operand) is not width:
            raise TypeError(f"mul_div operands must share one width, got {width.__name__} and {type(operand).__name__}")
    if width is int:
        for operand in (value, num, denom):
            if not 0 <= operand <= MAX_U64:
                raise ValueError(f"{operand} is not a u64 operand")
    elif width not in (U128, U256):
        raise TypeError(f"mul_div is not defined for {width.__name__}")
    return width


def _widen(value: Operand) -> U128 | U256 | U512:
    if isinstance(value, int):
        return U128(value)
    if type(value) is U128:
        return value.as_u256()
    return value.as_u512()


def _narrow(result: U128 | U256 | U512, width: type) -> Operand:
    if width is int:
        if result > MAX_U64:
            raise ArithmeticOverflow(f"mul_div result {result} does not fit in u64")
        return result.as_u64()
    if width is U128:
        # high limbs are zero once the quotient is within U128::MAX
        if result > U128.MAX.as_u256():
            raise ArithmeticOverflow(f"mul_div result {result} does not fit in U128")
        return result.truncate_to_u128()
    if result > U256.MAX.as_u512():
        raise ArithmeticOverflow(f"mul_div result {result} does not fit in U256")
    return result.truncate_to_u256()


def mul_div_floor(value: Operand, num: Operand, denom: Operand) -> Operand:
    """
    Calculates `floor(value * num / denom)`.

    Raises DivisionByZero if `denom` is zero and ArithmeticOverflow if the quotient
    does not fit in the operand width.

    >>> mul_div_floor(3, 4, 2)
    6
    >>> mul_div_floor(5, 2, 3)
    3
    """
    width = _operand_width(value, num, denom)
    if not denom:
        raise DivisionByZero("mul_div_floor called with a zero denominator")
    result = (_widen(value) * _widen(num)) // _widen(denom)
    return _narrow(result, width)


def mul_div_ceil(value: Operand, num: Operand, denom: Operand) -> Operand:
    """
    Calculates `ceil(value * num / denom)`.

    Raises DivisionByZero if `denom` is zero and ArithmeticOverflow if the quotient
    does not fit in the operand width.

    >>> mul_div_ceil(3, 4, 2)
    6
    >>> mul_div_ceil(5, 2, 3)
    4
    """
    width = _operand_width(value, num, denom)
    if not denom:
        raise DivisionByZero("mul_div_ceil called with a zero denominator")
    result = (_widen(value) * _widen(num) + _widen(denom - 1)) // _widen(denom)
    return _narrow(result, width)


def to_saturated_narrow(value: Operand) -> int:
    """
    Narrow a value that is bounded in practice to a u64.

    This is a clamp, not a checked cast: anything at or above u64::MAX becomes 0.
    """
    if isinstance(value, int):
        if not 0 <= value <= MAX_U64:
            raise ValueError(f"{value} is not a u64 operand")
        return value
    if type(value) not in (U128, U256):
        raise TypeError(f"to_saturated_narrow is not defined for {type(value).__name__}")
    if value < MAX_U64:
        return value.as_u64()
    return 0
