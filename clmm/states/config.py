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

from pydantic import BaseModel, Field, field_validator, model_validator

from clmm.constants import FEE_RATE_DENOMINATOR_VALUE
from clmm.utils.full_math import mul_div_ceil, mul_div_floor


class AmmConfig(BaseModel):
    """
    Fee rates and tick spacing shared by every pool created under one config.

    Rates are in millionths (FEE_RATE_DENOMINATOR_VALUE). The trade fee is charged on the
    swap input; the protocol and fund rates are shares of that trade fee.
    """

    index: int = Field(default=0, ge=0, le=2**16 - 1, description="config index")
    owner: str = Field(default="", description="admin allowed to update this config")
    protocol_fee_rate: int = Field(default=0, description="share of the trade fee owed to the protocol")
    trade_fee_rate: int = Field(..., description="fee charged on swap input, paid to LPs")
    tick_spacing: int = Field(..., description="distance between usable ticks")
    fund_fee_rate: int = Field(default=0, description="share of the trade fee owed to the fund")
    fund_owner: str = Field(default="", description="recipient of the fund fee")

    @field_validator("tick_spacing")
    def check_tick_spacing(cls, value) -> int:
        if not 0 < value < 2**16:
            raise ValueError(f"Invalid tick spacing: {value}")
        return value

    @field_validator("trade_fee_rate")
    def check_trade_fee_rate(cls, value) -> int:
        if not 0 <= value < FEE_RATE_DENOMINATOR_VALUE:
            raise ValueError(f"Trade fee rate must be in [0, {FEE_RATE_DENOMINATOR_VALUE}), got {value}")
        return value

    @field_validator("protocol_fee_rate", "fund_fee_rate")
    def check_fee_share(cls, value) -> int:
        # shares of the trade fee, the whole fee may go to one recipient
        if not 0 <= value <= FEE_RATE_DENOMINATOR_VALUE:
            raise ValueError(f"Fee share must be in [0, {FEE_RATE_DENOMINATOR_VALUE}], got {value}")
        return value

    @model_validator(mode="after")
    def check_fee_split(self) -> "AmmConfig":
        if self.protocol_fee_rate + self.fund_fee_rate > FEE_RATE_DENOMINATOR_VALUE:
            raise ValueError("protocol and fund fee rates exceed the whole trade fee")
        return self

    def trade_fee(self, amount: int) -> int:
        """Trade fee on a swap input amount, rounded up"""
        return mul_div_ceil(amount, self.trade_fee_rate, FEE_RATE_DENOMINATOR_VALUE)

    def protocol_fee(self, trade_fee: int) -> int:
        return mul_div_floor(trade_fee, self.protocol_fee_rate, FEE_RATE_DENOMINATOR_VALUE)

    def fund_fee(self, trade_fee: int) -> int:
        return mul_div_floor(trade_fee, self.fund_fee_rate, FEE_RATE_DENOMINATOR_VALUE)

    def split_trade_fee(self, amount: int) -> tuple[int, int, int]:
        """
        Split the trade fee on `amount`.

        Returns:
        - (lp_fee, protocol_fee, fund_fee), summing to trade_fee(amount)
        """
        fee = self.trade_fee(amount)
        protocol_fee = self.protocol_fee(fee)
        fund_fee = self.fund_fee(fee)
        return fee - protocol_fee - fund_fee, protocol_fee, fund_fee
