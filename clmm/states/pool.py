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
from enum import IntEnum

from pydantic import BaseModel, Field, field_validator

from clmm.constants import MAX_SQRT_PRICE_X64, MAX_U64, MAX_U128, MIN_SQRT_PRICE_X64, REWARD_NUM
from clmm.exceptions import ArithmeticOverflow, InvalidSqrtPrice
from clmm.states.config import AmmConfig
from clmm.states.tick_array_bitmap import TickArrayBitmap, TickArrayBitmapExtension, TickArrayBitmapIndex
from clmm.utils.big_num import U128
from clmm.utils.fixed_point_64 import Q64, from_x64
from clmm.utils.full_math import mul_div_floor
from clmm.utils.tick_math import check_tick_boundary, get_tick_at_sqrt_price


class PoolStatusBitIndex(IntEnum):
    # a set bit disables the operation, 0 is normal
    OPEN_POSITION_OR_INCREASE_LIQUIDITY = 0
    DECREASE_LIQUIDITY = 1
    COLLECT_FEE = 2
    COLLECT_REWARD = 3
    SWAP = 4


class RewardState(IntEnum):
    UNINITIALIZED = 0
    # initialized, emissions have not started
    INITIALIZED = 1
    OPENING = 2
    # end time passed
    ENDED = 3


class RewardInfo(BaseModel):
    """
    One reward emission slot of a pool.

    Args:
        emissions_per_second_x64: (int), Q64.64 reward tokens emitted per second per unit of liquidity
        reward_growth_global_x64: (int), Q64.64 reward tokens earned per unit of liquidity since the start
    """

    reward_state: RewardState = RewardState.UNINITIALIZED
    open_time: int = Field(default=0, ge=0, le=MAX_U64)
    end_time: int = Field(default=0, ge=0, le=MAX_U64)
    last_update_time: int = Field(default=0, ge=0, le=MAX_U64)
    emissions_per_second_x64: int = Field(default=0, ge=0, le=MAX_U128)
    reward_total_emissioned: int = Field(default=0, ge=0, le=MAX_U64)
    reward_claimed: int = Field(default=0, ge=0, le=MAX_U64)
    token_mint: str = Field(default="", description="reward token mint")
    token_vault: str = Field(default="", description="vault holding the reward tokens")
    authority: str = Field(default="", description="may set the reward parameters")
    reward_growth_global_x64: int = Field(default=0, ge=0, le=MAX_U128)

    @classmethod
    def new(cls, authority: str) -> "RewardInfo":
        return cls(authority=authority)

    def initialized(self) -> bool:
        return self.reward_state != RewardState.UNINITIALIZED

    @property
    def emissions_per_second(self):
        return from_x64(self.emissions_per_second_x64)


def _checked_add_u64(a: int, b: int) -> int:
    total = a + b
    if total > MAX_U64:
        raise ArithmeticOverflow(f"u64 fee counter overflow: {a} + {b}")
    return total


class PoolState(BaseModel):
    """
    The slice of a pool's state the math core reads and writes: the current price,
    the fee accumulators, the reward slots and the tick array bitmap (plus its extension).

    Args:
        tick_spacing: (int),
        sqrt_price_x64: (int), Q64.64 sqrt(token_1/token_0)
        tick_current: (int), tick of the last tick transition
    """

    class Config:
        arbitrary_types_allowed = True

    owner: str = Field(default="", description="pool creator")
    tick_spacing: int = Field(..., gt=0, lt=2**16, description="tick spacing copied from the amm config")
    sqrt_price_x64: int = Field(..., description="current sqrt price as Q64.64")
    tick_current: int = Field(..., description="current tick")
    liquidity: int = Field(default=0, ge=0, le=MAX_U128, description="in-range liquidity of the whole pool")
    fee_growth_global_0_x64: int = Field(default=0, ge=0, le=MAX_U128)
    fee_growth_global_1_x64: int = Field(default=0, ge=0, le=MAX_U128)
    protocol_fees_token_0: int = Field(default=0, ge=0, le=MAX_U64, description="owed to the protocol, not yet collected")
    protocol_fees_token_1: int = Field(default=0, ge=0, le=MAX_U64)
    fund_fees_token_0: int = Field(default=0, ge=0, le=MAX_U64, description="owed to the fund, not yet collected")
    fund_fees_token_1: int = Field(default=0, ge=0, le=MAX_U64)
    total_fees_token_0: int = Field(default=0, ge=0, le=MAX_U64, description="lp fees earned over the pool's life")
    total_fees_token_1: int = Field(default=0, ge=0, le=MAX_U64)
    status: int = Field(default=0, ge=0, lt=2**8, description="bit set of disabled operations")
    reward_infos: list[RewardInfo] = Field(default_factory=lambda: [RewardInfo() for _ in range(REWARD_NUM)])
    tick_array_bitmap: TickArrayBitmap = Field(default_factory=TickArrayBitmap)
    tick_array_bitmap_extension: TickArrayBitmapExtension = Field(default_factory=TickArrayBitmapExtension)

    @field_validator("sqrt_price_x64")
    def check_sqrt_price(cls, value) -> int:
        if not MIN_SQRT_PRICE_X64 <= value < MAX_SQRT_PRICE_X64:
            raise InvalidSqrtPrice(value)
        return value

    @field_validator("tick_current")
    def check_tick_current(cls, value) -> int:
        check_tick_boundary(value)
        return value

    @field_validator("reward_infos")
    def check_reward_infos(cls, value) -> list[RewardInfo]:
        if len(value) != REWARD_NUM:
            raise ValueError(f"A pool has exactly {REWARD_NUM} reward slots, got {len(value)}")
        return value

    @classmethod
    def initialize(cls, amm_config: AmmConfig, sqrt_price_x64: int, owner: str = "") -> "PoolState":
        """Create an empty pool priced at `sqrt_price_x64`, its reward slots administered by `owner`"""
        return cls(
            owner=owner,
            tick_spacing=amm_config.tick_spacing,
            sqrt_price_x64=sqrt_price_x64,
            tick_current=get_tick_at_sqrt_price(sqrt_price_x64),
            reward_infos=[RewardInfo.new(owner) for _ in range(REWARD_NUM)],
        )

    @property
    def tick_array_bitmap_index(self) -> TickArrayBitmapIndex:
        return TickArrayBitmapIndex(self.tick_spacing, self.tick_array_bitmap, self.tick_array_bitmap_extension)

    def get_status_by_bit(self, bit: PoolStatusBitIndex) -> bool:
        """True if the operation is allowed"""
        return self.status & (1 << bit) == 0

    def set_status_by_bit(self, bit: PoolStatusBitIndex, enabled: bool) -> None:
        if enabled:
            self.status &= ~(1 << bit) & 0xFF
        else:
            self.status |= 1 << bit

    def flip_tick_array_bit(self, tick_array_start_index: int) -> bool:
        return self.tick_array_bitmap_index.flip_bit(tick_array_start_index)

    def get_first_initialized_tick_array(self, zero_for_one: bool) -> int | None:
        return self.tick_array_bitmap_index.first_initialized_start_index(self.tick_current, zero_for_one)

    def next_initialized_tick_array_start_index(self, last_tick_array_start_index: int, zero_for_one: bool) -> int | None:
        return self.tick_array_bitmap_index.next_initialized_start_index(last_tick_array_start_index, zero_for_one)

    def accrue_fee_growth(self, fee_amount: int, is_token_0: bool) -> int:
        """
        Add `fee_amount / liquidity` (Q64.64) to the fee growth of one token.
        The accumulators wrap at 2^128. Returns the increment.
        """
        if self.liquidity == 0:
            return 0
        increment = int(mul_div_floor(U128(fee_amount), U128(Q64), U128(self.liquidity)))
        if is_token_0:
            self.fee_growth_global_0_x64 = (self.fee_growth_global_0_x64 + increment) & MAX_U128
        else:
            self.fee_growth_global_1_x64 = (self.fee_growth_global_1_x64 + increment) & MAX_U128
        return increment

    def accrue_swap_fee(self, amm_config: AmmConfig, amount_in: int, is_token_0: bool) -> tuple[int, int, int]:
        """
        Charge the trade fee on a swap input of `amount_in` and book its three parts.

        The protocol and fund shares go to their u64 counters, the lp share to
        total_fees and the fee growth of the input token.

        Returns:
        - (lp_fee, protocol_fee, fund_fee)

        Raises ArithmeticOverflow if a u64 counter would overflow; nothing is booked then.
        """
        lp_fee, protocol_fee, fund_fee = amm_config.split_trade_fee(amount_in)
        if is_token_0:
            protocol_fees = _checked_add_u64(self.protocol_fees_token_0, protocol_fee)
            fund_fees = _checked_add_u64(self.fund_fees_token_0, fund_fee)
            total_fees = _checked_add_u64(self.total_fees_token_0, lp_fee)
            self.protocol_fees_token_0 = protocol_fees
            self.fund_fees_token_0 = fund_fees
            self.total_fees_token_0 = total_fees
        else:
            protocol_fees = _checked_add_u64(self.protocol_fees_token_1, protocol_fee)
            fund_fees = _checked_add_u64(self.fund_fees_token_1, fund_fee)
            total_fees = _checked_add_u64(self.total_fees_token_1, lp_fee)
            self.protocol_fees_token_1 = protocol_fees
            self.fund_fees_token_1 = fund_fees
            self.total_fees_token_1 = total_fees
        self.accrue_fee_growth(lp_fee, is_token_0)
        return lp_fee, protocol_fee, fund_fee
