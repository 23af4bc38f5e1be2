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

from clmm.constants import MAX_TICK, MIN_TICK, TICK_ARRAY_BITMAP_SIZE, TICK_ARRAY_SIZE
from clmm.exceptions import InvalidTickArrayStartIndex


def tick_count(tick_spacing: int) -> int:
    """Number of ticks covered by one tick array"""
    if tick_spacing <= 0:
        raise ValueError("Tick spacing must be positive.")
    return TICK_ARRAY_SIZE * tick_spacing


def max_tick_in_tickarray_bitmap(tick_spacing: int) -> int:
    """Start indices in [-max, max) are tracked by the pool's own bitmap"""
    return tick_count(tick_spacing) * TICK_ARRAY_BITMAP_SIZE


def get_array_start_index(tick_index: int, tick_spacing: int) -> int:
    """
    Start index of the tick array containing `tick_index`.

    Floor division rounds toward negative infinity, so -1 lands in the array
    starting at -tick_count rather than the one starting at 0.
    """
    ticks_in_array = tick_count(tick_spacing)
    return (tick_index // ticks_in_array) * ticks_in_array


def start_index_bounds(tick_spacing: int) -> tuple[int, int]:
    """(lowest, highest) valid tick array start index"""
    return get_array_start_index(MIN_TICK, tick_spacing), get_array_start_index(MAX_TICK, tick_spacing)


def check_is_valid_start_index(tick_index: int, tick_spacing: int) -> bool:
    if not isinstance(tick_index, int) or isinstance(tick_index, bool):
        return False
    lowest, highest = start_index_bounds(tick_spacing)
    if not lowest <= tick_index <= highest:
        return False
    return tick_index % tick_count(tick_spacing) == 0


def check_start_index(tick_index: int, tick_spacing: int) -> None:
    if not check_is_valid_start_index(tick_index, tick_spacing):
        raise InvalidTickArrayStartIndex(tick_index, tick_spacing)
