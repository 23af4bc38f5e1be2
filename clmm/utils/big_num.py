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
Fixed width unsigned integers built from 64 bit limbs.

Limbs are stored least significant first. Every arithmetic operation propagates
carries and borrows limb by limb and stays inside the width of its type:
add, sub and mul raise ArithmeticOverflow instead of wrapping, left shifts drop
the bits pushed past the top limb.

Changing width is always explicit. Widening (`as_u256`, `as_u512`) zero-extends
and is lossless. Narrowing (`truncate_to_u128`, `truncate_to_u256`) keeps the low
limbs only, so callers must already know the high limbs are zero.
"""

from collections.abc import Iterable
from functools import total_ordering
from typing import Any, ClassVar

from clmm.exceptions import ArithmeticOverflow, DivisionByZero
from clmm.utils.bit_math import leading_zeros, trailing_zeros

LIMB_BITS = 64
LIMB_MASK = (1 << LIMB_BITS) - 1


def _split(value: int, n_limbs: int) -> tuple[int, ...]:
    return tuple((value >> (LIMB_BITS * i)) & LIMB_MASK for i in range(n_limbs))


def _significant_limbs(limbs) -> int:
    n = len(limbs)
    while n > 0 and limbs[n - 1] == 0:
        n -= 1
    return n


def _compare(a, b) -> int:
    for x, y in zip(reversed(a), reversed(b)):
        if x != y:
            return -1 if x < y else 1
    return 0


def _shl(a, shift: int) -> list[int]:
    size = len(a)
    out = [0] * size
    if shift >= size * LIMB_BITS:
        return out
    limb_shift, bit_shift = divmod(shift, LIMB_BITS)
    for i in range(size - 1, limb_shift - 1, -1):
        value = a[i - limb_shift] << bit_shift
        if i - limb_shift - 1 >= 0:
            value |= a[i - limb_shift - 1] >> (LIMB_BITS - bit_shift)
        out[i] = value & LIMB_MASK
    return out


def _shr(a, shift: int) -> list[int]:
    size = len(a)
    out = [0] * size
    if shift >= size * LIMB_BITS:
        return out
    limb_shift, bit_shift = divmod(shift, LIMB_BITS)
    for i in range(size - limb_shift):
        value = a[i + limb_shift] >> bit_shift
        if i + limb_shift + 1 < size:
            value |= (a[i + limb_shift + 1] << (LIMB_BITS - bit_shift)) & LIMB_MASK
        out[i] = value
    return out


def _divmod(u, v) -> tuple[list[int], list[int]]:
    """
    Long division of two equal-length limb sequences (Knuth, TAOCP vol. 2, algorithm D).
    The double-limb steps use a 128 bit intermediate, the same as a native u128 / u64.
    """
    size = len(u)
    n = _significant_limbs(v)
    m_plus_n = _significant_limbs(u)

    if _compare(u, v) < 0:
        return [0] * size, list(u)

    q = [0] * size
    if n == 1:
        divisor = v[0]
        rem = 0
        for i in range(m_plus_n - 1, -1, -1):
            q[i], rem = divmod((rem << LIMB_BITS) | u[i], divisor)
        r = [0] * size
        r[0] = rem
        return q, r

    # normalize so the top limb of the divisor has its high bit set
    s = leading_zeros(v[n - 1], LIMB_BITS)
    vn = [0] * n
    for i in range(n - 1, 0, -1):
        vn[i] = ((v[i] << s) | (v[i - 1] >> (LIMB_BITS - s))) & LIMB_MASK
    vn[0] = (v[0] << s) & LIMB_MASK

    un = [0] * (m_plus_n + 1)
    un[m_plus_n] = u[m_plus_n - 1] >> (LIMB_BITS - s)
    for i in range(m_plus_n - 1, 0, -1):
        un[i] = ((u[i] << s) | (u[i - 1] >> (LIMB_BITS - s))) & LIMB_MASK
    un[0] = (u[0] << s) & LIMB_MASK

    for j in range(m_plus_n - n, -1, -1):
        qhat, rhat = divmod((un[j + n] << LIMB_BITS) | un[j + n - 1], vn[n - 1])
        while qhat > LIMB_MASK or qhat * vn[n - 2] > ((rhat << LIMB_BITS) | un[j + n - 2]):
            qhat -= 1
            rhat += vn[n - 1]
            if rhat > LIMB_MASK:
                break

        # multiply and subtract
        carry = 0
        borrow = 0
        for i in range(n):
            p = qhat * vn[i] + carry
            carry = p >> LIMB_BITS
            t = un[i + j] - (p & LIMB_MASK) - borrow
            un[i + j] = t & LIMB_MASK
            borrow = 1 if t < 0 else 0
        t = un[j + n] - carry - borrow
        un[j + n] = t & LIMB_MASK

        if t < 0:
            # subtracted one time too many, add back
            qhat -= 1
            carry = 0
            for i in range(n):
                t = un[i + j] + vn[i] + carry
                un[i + j] = t & LIMB_MASK
                carry = t >> LIMB_BITS
            un[j + n] = (un[j + n] + carry) & LIMB_MASK

        q[j] = qhat

    r = [0] * size
    for i in range(n):
        r[i] = ((un[i] >> s) | (un[i + 1] << (LIMB_BITS - s))) & LIMB_MASK
    return q, r


@total_ordering
class _WideUint:
    __slots__ = ("_limbs",)

    LIMBS: ClassVar[int] = 0
    BITS: ClassVar[int] = 0

    def __init__(self, value: "int | Iterable[int]" = 0) -> None:
        if isinstance(value, _WideUint):
            if type(value) is not type(self):
                raise TypeError(f"Cannot build {type(self).__name__} from {type(value).__name__}, cast it explicitly")
            limbs = value._limbs
        elif isinstance(value, int):
            if value < 0 or value.bit_length() > self.BITS:
                raise ArithmeticOverflow(f"{value} does not fit in {type(self).__name__}")
            limbs = _split(value, self.LIMBS)
        else:
            limbs = tuple(value)
            if len(limbs) != self.LIMBS:
                raise ValueError(f"{type(self).__name__} takes exactly {self.LIMBS} limbs, got {len(limbs)}")
            if any(not 0 <= limb <= LIMB_MASK for limb in limbs):
                raise ValueError(f"limbs must be unsigned 64 bit integers: {limbs}")
        object.__setattr__(self, "_limbs", limbs)

    @classmethod
    def _from_limbs(cls, limbs):
        obj = cls.__new__(cls)
        object.__setattr__(obj, "_limbs", tuple(limbs))
        return obj

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def _coerce(self, other):
        if type(other) is type(self):
            return other
        if isinstance(other, int) and not isinstance(other, bool):
            return type(self)(other)
        return NotImplemented

    @property
    def limbs(self) -> tuple[int, ...]:
        return self._limbs

    def __int__(self) -> int:
        value = 0
        for limb in reversed(self._limbs):
            value = (value << LIMB_BITS) | limb
        return value

    def __bool__(self) -> bool:
        return any(self._limbs)

    def __hash__(self) -> int:
        return hash(int(self))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"

    def __str__(self) -> str:
        return str(int(self))

    def __eq__(self, other) -> bool:
        if isinstance(other, int) and not isinstance(other, bool):
            return 0 <= other and other.bit_length() <= self.BITS and self._limbs == _split(other, self.LIMBS)
        if type(other) is not type(self):
            return NotImplemented
        return self._limbs == other._limbs

    def __lt__(self, other) -> bool:
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return _compare(self._limbs, other._limbs) < 0

    def __add__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        out = []
        carry = 0
        for x, y in zip(self._limbs, other._limbs):
            s = x + y + carry
            out.append(s & LIMB_MASK)
            carry = s >> LIMB_BITS
        if carry:
            raise ArithmeticOverflow(f"{type(self).__name__} addition overflow")
        return self._from_limbs(out)

    def __sub__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        out = []
        borrow = 0
        for x, y in zip(self._limbs, other._limbs):
            d = x - y - borrow
            out.append(d & LIMB_MASK)
            borrow = 1 if d < 0 else 0
        if borrow:
            raise ArithmeticOverflow(f"{type(self).__name__} subtraction underflow")
        return self._from_limbs(out)

    def __mul__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        n = self.LIMBS
        out = [0] * (2 * n)
        for i, x in enumerate(self._limbs):
            if x == 0:
                continue
            carry = 0
            for j, y in enumerate(other._limbs):
                t = out[i + j] + x * y + carry
                out[i + j] = t & LIMB_MASK
                carry = t >> LIMB_BITS
            out[i + n] = carry
        if any(out[n:]):
            raise ArithmeticOverflow(f"{type(self).__name__} multiplication overflow")
        return self._from_limbs(out[:n])

    def __divmod__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        if not other:
            raise DivisionByZero(f"{type(self).__name__} division by zero")
        q, r = _divmod(self._limbs, other._limbs)
        return self._from_limbs(q), self._from_limbs(r)

    def __floordiv__(self, other):
        result = self.__divmod__(other)
        if result is NotImplemented:
            return NotImplemented
        return result[0]

    def __mod__(self, other):
        result = self.__divmod__(other)
        if result is NotImplemented:
            return NotImplemented
        return result[1]

    def __lshift__(self, shift: int):
        if shift < 0:
            raise ValueError("negative shift count")
        return self._from_limbs(_shl(self._limbs, shift))

    def __rshift__(self, shift: int):
        if shift < 0:
            raise ValueError("negative shift count")
        return self._from_limbs(_shr(self._limbs, shift))

    def bits(self) -> int:
        """Number of bits needed to represent the value"""
        n = _significant_limbs(self._limbs)
        if n == 0:
            return 0
        return (n - 1) * LIMB_BITS + self._limbs[n - 1].bit_length()

    def leading_zeros(self) -> int:
        return self.BITS - self.bits()

    def trailing_zeros(self) -> int:
        for i, limb in enumerate(self._limbs):
            if limb:
                return i * LIMB_BITS + trailing_zeros(limb, LIMB_BITS)
        return self.BITS

    def is_zero(self) -> bool:
        return not self

    def low_u64(self) -> int:
        return self._limbs[0]

    def as_u64(self) -> int:
        if any(self._limbs[1:]):
            raise ArithmeticOverflow(f"{self!r} does not fit in u64")
        return self._limbs[0]


class U128(_WideUint):
    __slots__ = ()
    LIMBS = 2
    BITS = 128

    def as_u256(self) -> "U256":
        return U256._from_limbs(self._limbs + (0, 0))


class U256(_WideUint):
    __slots__ = ()
    LIMBS = 4
    BITS = 256

    def as_u512(self) -> "U512":
        return U512._from_limbs(self._limbs + (0, 0, 0, 0))

    def truncate_to_u128(self) -> U128:
        """
        Unsafe cast to U128.
        Bits beyond the 128th position are lost.
        """
        return U128._from_limbs(self._limbs[:2])


class U512(_WideUint):
    __slots__ = ()
    LIMBS = 8
    BITS = 512

    def truncate_to_u256(self) -> U256:
        """
        Unsafe cast to U256.
        Bits beyond the 256th position are lost.
        """
        return U256._from_limbs(self._limbs[:4])


for _cls in (U128, U256, U512):
    _cls.ZERO = _cls._from_limbs((0,) * _cls.LIMBS)
    _cls.MAX = _cls._from_limbs((LIMB_MASK,) * _cls.LIMBS)
