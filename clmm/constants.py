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

MAX_U64 = 2**64 - 1
MAX_U128 = 2**128 - 1

# The minimum tick that can be used on any pool.
MIN_TICK = -443636
# The maximum tick that can be used on any pool.
MAX_TICK = -MIN_TICK

# The sqrt price corresponding to the minimum tick that could be used on any pool.
MIN_SQRT_PRICE_X64 = 4295048016
# The sqrt price corresponding to the maximum tick. Prices must stay strictly below it.
MAX_SQRT_PRICE_X64 = 79226673521066979257578248091

# number of squaring iterations used when extracting the fractional log2 of a sqrt price
BIT_PRECISION = 16

# log2(sqrt price) in Q32.32 -> log_sqrt(1.0001)(sqrt price) in Q64.64, i.e. 2^32 / log2(sqrt(1.0001))
LOG_B_2_X32 = 59543866431248
# 0.01 in Q64.64, subtracted to get the lower tick candidate
LOG_B_P_ERR_MARGIN_LOWER_X64 = 184467440737095516
# 2^-precision / log2(sqrt(1.0001)) + 0.01 in Q64.64, added to get the upper tick candidate
LOG_B_P_ERR_MARGIN_UPPER_X64 = 15793534762490258745

# number of ticks held by a single tick array
TICK_ARRAY_SIZE = 60
# number of tick arrays tracked on each side of zero by the pool's bitmap
TICK_ARRAY_BITMAP_SIZE = 512
# number of u64 words in the pool's bitmap (both sides of zero)
POOL_TICK_ARRAY_BITMAP_WORDS = 16
# number of 512-bit blocks per side of the bitmap extension
EXTENSION_TICKARRAY_BITMAP_SIZE = 14
# number of u64 words per extension block
EXTENSION_BITMAP_BLOCK_WORDS = 8

# fee rates are expressed in millionths
FEE_RATE_DENOMINATOR_VALUE = 1_000_000

# default tick spacing used by the cli when none is given
DEFAULT_TICK_SPACING = 1

# number of reward slots per pool
REWARD_NUM = 3
