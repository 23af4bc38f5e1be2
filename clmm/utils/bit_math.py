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

def most_significant_bit(x: int) -> int:
    """Find the most significant bit of x"""
    if x <= 0:
        raise ValueError("x must be greater than 0")
    return x.bit_length() - 1


def least_significant_bit(x: int) -> int:
    """Find the least significant bit of x"""
    if x <= 0:
        raise ValueError("x must be greater than 0")
    return (x & -x).bit_length() - 1


def leading_zeros(x: int, width: int) -> int:
    """
    Count the zero bits above the highest set bit of an unsigned `width`-bit integer.
    Returns `width` for zero.
    """
    if x < 0 or x.bit_length() > width:
        raise ValueError(f"{x} is not a {width} bit unsigned integer")
    return width - x.bit_length()


def trailing_zeros(x: int, width: int) -> int:
    """
    Count the zero bits below the lowest set bit of an unsigned `width`-bit integer.
    Returns `width` for zero.
    """
    if x < 0 or x.bit_length() > width:
        raise ValueError(f"{x} is not a {width} bit unsigned integer")
    if x == 0:
        return width
    return least_significant_bit(x)
