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
Bitmap index of initialized tick arrays.

Each tick array start index maps to one bit. With `array_index = start_index // tick_count`
the bit lives in word `array_index >> 6` at offset `array_index & 63`; both are floor
operations, so negative start indices bucket toward negative infinity.

Word positions [-8, 8) are backed by the pool's own 16 word bitmap. Everything
further out is backed by the extension, 14 blocks of 8 words on each side of zero:

    negative block 13 ... negative block 0 | pool bitmap | positive block 0 ... positive block 13

Bits inside a word, and words inside a block, are ordered by increasing price on
both sides, so scans walk word positions in a straight line.
"""

from enum import Enum
from typing import NamedTuple

import numpy as np
from loguru import logger

from clmm.constants import (
    EXTENSION_BITMAP_BLOCK_WORDS,
    EXTENSION_TICKARRAY_BITMAP_SIZE,
    POOL_TICK_ARRAY_BITMAP_WORDS,
)
from clmm.states.tick_array import (
    check_start_index,
    get_array_start_index,
    max_tick_in_tickarray_bitmap,
    start_index_bounds,
    tick_count,
)
from clmm.utils.bit_math import least_significant_bit, most_significant_bit
from clmm.utils.tick_math import check_tick_boundary

WORD_BITS = 64
WORD_MASK = (1 << WORD_BITS) - 1
# words of the pool bitmap on each side of zero
POOL_HALF_WORDS = POOL_TICK_ARRAY_BITMAP_WORDS // 2


class BitmapSide(str, Enum):
    NEGATIVE = "NEGATIVE"
    PRIMARY = "PRIMARY"
    POSITIVE = "POSITIVE"


class BitmapAddress(NamedTuple):
    side: BitmapSide
    block: int  # always 0 for the pool bitmap
    word: int
    bit: int


class TickArrayBitmap:
    """The pool's own bitmap, covering tick array indices [-512, 512)."""

    def __init__(self, words=None) -> None:
        if words is None:
            self.words = np.zeros(POOL_TICK_ARRAY_BITMAP_WORDS, dtype=np.uint64)
        else:
            self.words = np.array(words, dtype=np.uint64)
            if self.words.shape != (POOL_TICK_ARRAY_BITMAP_WORDS,):
                raise ValueError(f"Tick array bitmap must hold {POOL_TICK_ARRAY_BITMAP_WORDS} words")

    def is_empty(self) -> bool:
        return not self.words.any()


class TickArrayBitmapExtension:
    """Blocks of words covering start indices beyond the pool bitmap, one set per side of zero."""

    SHAPE = (EXTENSION_TICKARRAY_BITMAP_SIZE, EXTENSION_BITMAP_BLOCK_WORDS)

    def __init__(self, positive_tick_array_bitmap=None, negative_tick_array_bitmap=None) -> None:
        self.positive_tick_array_bitmap = self._init_side(positive_tick_array_bitmap)
        self.negative_tick_array_bitmap = self._init_side(negative_tick_array_bitmap)

    @classmethod
    def _init_side(cls, blocks) -> np.ndarray:
        if blocks is None:
            return np.zeros(cls.SHAPE, dtype=np.uint64)
        blocks = np.array(blocks, dtype=np.uint64)
        if blocks.shape != cls.SHAPE:
            raise ValueError(f"Extension bitmap must have shape {cls.SHAPE}, got {blocks.shape}")
        return blocks

    def is_empty(self) -> bool:
        return not (self.positive_tick_array_bitmap.any() or self.negative_tick_array_bitmap.any())


class TickArrayBitmapIndex:
    """
    Combined view over a pool bitmap and its extension for one tick spacing.

    Callers pass tick array start indices only; whether a bit is stored in the pool
    bitmap or in the extension is resolved here.
    """

    def __init__(
        self,
        tick_spacing: int,
        bitmap: TickArrayBitmap | None = None,
        extension: TickArrayBitmapExtension | None = None,
    ) -> None:
        self.tick_spacing = tick_spacing
        self.ticks_in_array = tick_count(tick_spacing)
        self.bitmap = bitmap if bitmap is not None else TickArrayBitmap()
        self.extension = extension if extension is not None else TickArrayBitmapExtension()
        lowest, highest = start_index_bounds(tick_spacing)
        self._lowest_array_index = lowest // self.ticks_in_array
        self._highest_array_index = highest // self.ticks_in_array

    def _array_index(self, start_index: int) -> int:
        check_start_index(start_index, self.tick_spacing)
        return start_index // self.ticks_in_array

    @staticmethod
    def _locate(word_pos: int) -> tuple[BitmapSide, int, int]:
        if -POOL_HALF_WORDS <= word_pos < POOL_HALF_WORDS:
            return BitmapSide.PRIMARY, 0, word_pos + POOL_HALF_WORDS
        block = word_pos // EXTENSION_BITMAP_BLOCK_WORDS
        word = word_pos % EXTENSION_BITMAP_BLOCK_WORDS
        if word_pos >= POOL_HALF_WORDS:
            return BitmapSide.POSITIVE, block - 1, word
        return BitmapSide.NEGATIVE, -block - 2, word

    def _words(self, side: BitmapSide, block: int) -> np.ndarray:
        match side:
            case BitmapSide.PRIMARY:
                return self.bitmap.words
            case BitmapSide.POSITIVE:
                return self.extension.positive_tick_array_bitmap[block]
            case _:
                return self.extension.negative_tick_array_bitmap[block]

    def _read_word(self, word_pos: int) -> int:
        side, block, word = self._locate(word_pos)
        return int(self._words(side, block)[word])

    def _write_word(self, word_pos: int, value: int) -> None:
        side, block, word = self._locate(word_pos)
        self._words(side, block)[word] = np.uint64(value)

    def address(self, start_index: int) -> BitmapAddress:
        """Where the bit for `start_index` is stored"""
        array_index = self._array_index(start_index)
        side, block, word = self._locate(array_index >> 6)
        return BitmapAddress(side, block, word, array_index & 63)

    def is_in_primary(self, start_index: int) -> bool:
        check_start_index(start_index, self.tick_spacing)
        max_tick = max_tick_in_tickarray_bitmap(self.tick_spacing)
        return -max_tick <= start_index < max_tick

    def is_set(self, start_index: int) -> bool:
        array_index = self._array_index(start_index)
        return bool((self._read_word(array_index >> 6) >> (array_index & 63)) & 1)

    def set_bit(self, start_index: int) -> None:
        array_index = self._array_index(start_index)
        word_pos, bit_pos = array_index >> 6, array_index & 63
        self._write_word(word_pos, self._read_word(word_pos) | (1 << bit_pos))
        logger.debug(f"Set tick array bit {start_index=} @ {word_pos=}, {bit_pos=}")

    def clear_bit(self, start_index: int) -> None:
        array_index = self._array_index(start_index)
        word_pos, bit_pos = array_index >> 6, array_index & 63
        self._write_word(word_pos, self._read_word(word_pos) & ~(1 << bit_pos) & WORD_MASK)
        logger.debug(f"Cleared tick array bit {start_index=} @ {word_pos=}, {bit_pos=}")

    def flip_bit(self, start_index: int) -> bool:
        """Toggle the bit for `start_index`, returns its new state"""
        array_index = self._array_index(start_index)
        word_pos, bit_pos = array_index >> 6, array_index & 63
        word = self._read_word(word_pos) ^ (1 << bit_pos)
        self._write_word(word_pos, word)
        logger.debug(f"Flipped tick array bit {start_index=} @ {word_pos=}, {bit_pos=}")
        return bool((word >> bit_pos) & 1)

    def next_initialized_start_index(self, from_start_index: int, zero_for_one: bool) -> int | None:
        """
        Find the nearest initialized tick array strictly beyond `from_start_index`.

        zero_for_one=True searches toward lower prices, False toward higher prices.
        Returns None once the tick domain is exhausted.
        """
        array_index = self._array_index(from_start_index)

        if zero_for_one:
            candidate = array_index - 1
            while candidate >= self._lowest_array_index:
                bit_pos = candidate & 63
                # all the 1s at or below bit_pos
                masked = self._read_word(candidate >> 6) & ((2 << bit_pos) - 1)
                if masked:
                    return (candidate - bit_pos + most_significant_bit(masked)) * self.ticks_in_array
                # jump to the top bit of the previous word
                candidate -= bit_pos + 1
        else:
            candidate = array_index + 1
            while candidate <= self._highest_array_index:
                bit_pos = candidate & 63
                # all the 1s at or above bit_pos
                masked = self._read_word(candidate >> 6) & ~((1 << bit_pos) - 1) & WORD_MASK
                if masked:
                    return (candidate - bit_pos + least_significant_bit(masked)) * self.ticks_in_array
                # jump to the bottom bit of the next word
                candidate += WORD_BITS - bit_pos

        logger.debug(f"No initialized tick array beyond {from_start_index=}, {zero_for_one=}")
        return None

    def first_initialized_start_index(self, tick: int, zero_for_one: bool) -> int | None:
        """The tick array containing `tick` if it is initialized, else the next one in the swap direction"""
        check_tick_boundary(tick)
        start_index = get_array_start_index(tick, self.tick_spacing)
        if self.is_set(start_index):
            return start_index
        return self.next_initialized_start_index(start_index, zero_for_one)

    def initialized_start_indices(self) -> list[int]:
        """All initialized start indices, ascending"""
        start_indices = []
        for word_pos in range(self._lowest_array_index >> 6, (self._highest_array_index >> 6) + 1):
            word = self._read_word(word_pos)
            while word:
                bit_pos = least_significant_bit(word)
                start_indices.append(((word_pos << 6) + bit_pos) * self.ticks_in_array)
                word &= word - 1
        return start_indices
