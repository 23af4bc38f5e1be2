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

# =========================== TICK <-> SQRT PRICE ===========================

from clmm.constants import (
    BIT_PRECISION,
    LOG_B_2_X32,
    LOG_B_P_ERR_MARGIN_LOWER_X64,
    LOG_B_P_ERR_MARGIN_UPPER_X64,
    MAX_SQRT_PRICE_X64,
    MAX_TICK,
    MIN_SQRT_PRICE_X64,
    MIN_TICK,
)
from clmm.exceptions import InvalidSqrtPrice, InvalidTick
from clmm.utils.big_num import U128
from clmm.utils.bit_math import leading_zeros
from clmm.utils.fixed_point_64 import RESOLUTION

# 2^64 / 1.0001^(2^(i - 1)) for the bit i of |tick|, as Q64.64
TICK_RATIO_X64: tuple[U128, ...] = (
    U128(0xFFFCB933BD6FB800),
    U128(0xFFF97272373D4000),
    U128(0xFFF2E50F5F657000),
    U128(0xFFE5CACA7E10F000),
    U128(0xFFCB9843D60F7000),
    U128(0xFF973B41FA98E800),
    U128(0xFF2EA16466C9B000),
    U128(0xFE5DEE046A9A3800),
    U128(0xFCBE86C7900BB000),
    U128(0xF987A7253AC65800),
    U128(0xF3392B0822BB6000),
    U128(0xE7159475A2CAF000),
    U128(0xD097F3BDFD2F2000),
    U128(0xA9F746462D9F8000),
    U128(0x70D869A156F31C00),
    U128(0x31BE135F97ED3200),
    U128(0x9AA508B5B85A500),
    U128(0x5D6AF8DEDC582C),
    U128(0x2216E584F5FA),
)

ONE_X64 = U128(1 << RESOLUTION)


def get_sqrt_price_at_tick(tick: int) -> int:
    """
    Returns the sqrt price as a Q64.64 for the given tick.
    The sqrt price is computed as sqrt(1.0001)^tick
    """
    if not isinstance(tick, int) or isinstance(tick, bool):
        raise InvalidTick(tick)
    abs_tick = abs(tick)
    if abs_tick > MAX_TICK:
        raise InvalidTick(tick)

    ratio = TICK_RATIO_X64[0] if abs_tick & 0x1 else ONE_X64
    for i in range(1, len(TICK_RATIO_X64)):
        if abs_tick & (1 << i):
            ratio = (ratio * TICK_RATIO_X64[i]) >> RESOLUTION

    # the table is calibrated for negative ticks, invert for positive ones
    if tick > 0:
        ratio = U128.MAX // ratio

    return int(ratio)


def get_tick_at_sqrt_price(sqrt_price_x64: int | U128) -> int:
    """
    Returns the tick corresponding to a given sqrt price, s.t. get_sqrt_price_at_tick(tick) <= sqrt_price_x64
    and get_sqrt_price_at_tick(tick + 1) > sqrt_price_x64
    """
    if isinstance(sqrt_price_x64, U128):
        sqrt_price_x64 = int(sqrt_price_x64)
    if not isinstance(sqrt_price_x64, int) or isinstance(sqrt_price_x64, bool):
        raise InvalidSqrtPrice(sqrt_price_x64)
    # the max tick price itself can never be reached
    if not MIN_SQRT_PRICE_X64 <= sqrt_price_x64 < MAX_SQRT_PRICE_X64:
        raise InvalidSqrtPrice(sqrt_price_x64)

    msb = 128 - leading_zeros(sqrt_price_x64, 128) - 1
    log2p_integer_x32 = (msb - 64) << 32

    # normalize into [2^63, 2^64), i.e. [1, 2) with 63 fractional bits
    r = sqrt_price_x64 >> (msb - 63) if msb >= 64 else sqrt_price_x64 << (63 - msb)

    bit = 0x8000_0000_0000_0000
    log2p_fraction_x64 = 0
    for _ in range(BIT_PRECISION):
        r *= r
        is_r_more_than_two = r >> 127
        r >>= 63 + is_r_more_than_two
        log2p_fraction_x64 += bit * is_r_more_than_two
        bit >>= 1

    log2p_fraction_x32 = log2p_fraction_x64 >> 32
    log2p_x32 = log2p_integer_x32 + log2p_fraction_x32

    # change of base: log2 -> log_sqrt(1.0001)
    log_sqrt_10001_x64 = log2p_x32 * LOG_B_2_X32

    tick_low = (log_sqrt_10001_x64 - LOG_B_P_ERR_MARGIN_LOWER_X64) >> 64
    tick_high = (log_sqrt_10001_x64 + LOG_B_P_ERR_MARGIN_UPPER_X64) >> 64

    if tick_low == tick_high:
        return tick_low
    return tick_high if get_sqrt_price_at_tick(tick_high) <= sqrt_price_x64 else tick_low


def check_tick_boundary(tick: int) -> None:
    """Raise InvalidTick unless MIN_TICK <= tick <= MAX_TICK"""
    if not isinstance(tick, int) or isinstance(tick, bool) or not MIN_TICK <= tick <= MAX_TICK:
        raise InvalidTick(tick)
