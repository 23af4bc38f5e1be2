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
Q64.64 fixed point helpers.

Prices, fee growth accumulators and reward emission rates all share this format:
an unsigned 128 bit integer whose low 64 bits are the fraction.
"""

from decimal import Decimal, localcontext

Q64 = 2**64
RESOLUTION = 64


def to_x64(value: Decimal | int | str) -> int:
    """Convert a non-negative decimal to Q64.64, rounding down"""
    value = Decimal(value)
    if value < 0:
        raise ValueError("Q64.64 values are unsigned")
    with localcontext() as ctx:
        ctx.prec = 80
        return int(value * Q64)


def from_x64(value_x64: int) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = 80
        return Decimal(value_x64) / Q64


def sqrt_price_x64_to_price(sqrt_price_x64: int, decimals_0: int = 0, decimals_1: int = 0) -> Decimal:
    """
    Convert a Q64.64 sqrt price to a human readable price of token_0 in token_1.

    price = (sqrt_price_x64 / 2^64)^2 * 10^(decimals_0 - decimals_1)
    """
    with localcontext() as ctx:
        ctx.prec = 80
        sqrt_price = Decimal(sqrt_price_x64) / Q64
        return sqrt_price * sqrt_price * Decimal(10) ** (decimals_0 - decimals_1)


def price_to_sqrt_price_x64(price: Decimal | int | str, decimals_0: int = 0, decimals_1: int = 0) -> int:
    """Inverse of sqrt_price_x64_to_price, rounding down"""
    price = Decimal(price)
    if price <= 0:
        raise ValueError("Price must be positive.")
    with localcontext() as ctx:
        ctx.prec = 80
        raw_price = price * Decimal(10) ** (decimals_1 - decimals_0)
        return int(raw_price.sqrt() * Q64)
