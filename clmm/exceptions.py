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

class ClmmError(Exception):
    """
    Base exception for everything raised by the clmm math core.
    """


class DomainError(ClmmError, ValueError):
    """
    Raised when an input lies outside the range an operation is defined on.
    """


class InvalidTick(DomainError):
    def __init__(self, tick) -> None:
        self.tick = tick
        super().__init__(f"Invalid tick: {tick}")


class InvalidSqrtPrice(DomainError):
    def __init__(self, sqrt_price_x64) -> None:
        self.sqrt_price_x64 = sqrt_price_x64
        super().__init__(f"Invalid sqrt price: {sqrt_price_x64}")


class InvalidTickArrayStartIndex(DomainError):
    def __init__(self, start_index, tick_spacing) -> None:
        self.start_index = start_index
        self.tick_spacing = tick_spacing
        super().__init__(f"Invalid tick array start index {start_index} for tick spacing {tick_spacing}")


class ArithmeticOverflow(ClmmError, OverflowError):
    """
    Raised when a checked operation produces a result that does not fit its width.
    """


class DivisionByZero(ClmmError, ZeroDivisionError):
    """
    Raised eagerly when a denominator is zero.
    """
