import unittest

from pydantic import ValidationError

from clmm.constants import MAX_SQRT_PRICE_X64, MAX_U64, MAX_U128, MIN_SQRT_PRICE_X64, MIN_TICK, REWARD_NUM
from clmm.exceptions import ArithmeticOverflow, InvalidSqrtPrice, InvalidTick
from clmm.states.config import AmmConfig
from clmm.states.pool import PoolState, PoolStatusBitIndex, RewardInfo, RewardState
from clmm.utils.tick_math import get_sqrt_price_at_tick


class TestPoolState(unittest.TestCase):
    def setUp(self):
        self.amm_config = AmmConfig(trade_fee_rate=2500, tick_spacing=1)
        self.pool = PoolState.initialize(self.amm_config, 2**64)

    def test_initialize(self):
        self.assertEqual(self.pool.tick_current, 0)
        self.assertEqual(self.pool.tick_spacing, 1)
        self.assertEqual(self.pool.liquidity, 0)
        self.assertTrue(self.pool.tick_array_bitmap.is_empty())
        self.assertTrue(self.pool.tick_array_bitmap_extension.is_empty())

        pool = PoolState.initialize(self.amm_config, get_sqrt_price_at_tick(-1000))
        self.assertEqual(pool.tick_current, -1000)
        pool = PoolState.initialize(self.amm_config, MIN_SQRT_PRICE_X64)
        self.assertEqual(pool.tick_current, MIN_TICK)

    def test_initialize_rejects_out_of_range_price(self):
        self.assertRaises(InvalidSqrtPrice, PoolState.initialize, self.amm_config, MAX_SQRT_PRICE_X64)
        self.assertRaises(
            ValidationError, PoolState, tick_spacing=1, sqrt_price_x64=MAX_SQRT_PRICE_X64, tick_current=0
        )
        self.assertRaises(ValidationError, PoolState, tick_spacing=1, sqrt_price_x64=2**64, tick_current=443637)
        self.assertRaises(ValidationError, PoolState, tick_spacing=0, sqrt_price_x64=2**64, tick_current=0)

    def test_out_of_range_tick_is_an_invalid_tick(self):
        with self.assertRaises(ValidationError) as err:
            PoolState(tick_spacing=1, sqrt_price_x64=2**64, tick_current=MIN_TICK - 1)
        self.assertIsInstance(err.exception.errors()[0]["ctx"]["error"], InvalidTick)
        self.assertIn(f"Invalid tick: {MIN_TICK - 1}", str(err.exception))

    def test_reward_slots(self):
        pool = PoolState.initialize(self.amm_config, 2**64, owner="creator")
        self.assertEqual(len(pool.reward_infos), REWARD_NUM)
        for reward_info in pool.reward_infos:
            self.assertEqual(reward_info.authority, "creator")
            self.assertEqual(reward_info.reward_state, RewardState.UNINITIALIZED)
            self.assertFalse(reward_info.initialized())
            self.assertEqual(reward_info.reward_growth_global_x64, 0)

        # slots are independent
        pool.reward_infos[0].reward_state = RewardState.OPENING
        self.assertTrue(pool.reward_infos[0].initialized())
        self.assertFalse(pool.reward_infos[1].initialized())

        self.assertEqual(len(self.pool.reward_infos), REWARD_NUM)
        self.assertRaises(
            ValidationError,
            PoolState,
            tick_spacing=1,
            sqrt_price_x64=2**64,
            tick_current=0,
            reward_infos=[RewardInfo()],
        )

    def test_reward_emission_rate(self):
        reward_info = RewardInfo.new("authority")
        self.assertEqual(reward_info.authority, "authority")
        reward_info = RewardInfo(emissions_per_second_x64=3 * 2**63)
        self.assertEqual(reward_info.emissions_per_second, 1.5)
        self.assertRaises(ValidationError, RewardInfo, emissions_per_second_x64=MAX_U128 + 1)
        self.assertRaises(ValidationError, RewardInfo, open_time=-1)

    def test_accrue_swap_fee(self):
        amm_config = AmmConfig(trade_fee_rate=2500, protocol_fee_rate=120000, fund_fee_rate=40000, tick_spacing=1)
        self.pool.liquidity = 2**64

        self.assertEqual(self.pool.accrue_swap_fee(amm_config, 1_000_000, is_token_0=True), (2100, 300, 100))
        self.assertEqual(self.pool.protocol_fees_token_0, 300)
        self.assertEqual(self.pool.fund_fees_token_0, 100)
        self.assertEqual(self.pool.total_fees_token_0, 2100)
        self.assertEqual(self.pool.fee_growth_global_0_x64, 2100)
        self.assertEqual(self.pool.protocol_fees_token_1, 0)
        self.assertEqual(self.pool.fee_growth_global_1_x64, 0)

        self.pool.accrue_swap_fee(amm_config, 1_000_000, is_token_0=False)
        self.pool.accrue_swap_fee(amm_config, 1_000_000, is_token_0=False)
        self.assertEqual(self.pool.protocol_fees_token_1, 600)
        self.assertEqual(self.pool.fund_fees_token_1, 200)
        self.assertEqual(self.pool.total_fees_token_1, 4200)

    def test_swap_fee_counter_overflow(self):
        amm_config = AmmConfig(trade_fee_rate=2500, protocol_fee_rate=120000, tick_spacing=1)
        self.pool.protocol_fees_token_0 = MAX_U64
        self.assertRaises(ArithmeticOverflow, self.pool.accrue_swap_fee, amm_config, 1_000_000, True)
        self.assertEqual(self.pool.protocol_fees_token_0, MAX_U64)
        self.assertEqual(self.pool.total_fees_token_0, 0)

    def test_status_bits(self):
        for bit in PoolStatusBitIndex:
            self.assertTrue(self.pool.get_status_by_bit(bit))

        self.pool.set_status_by_bit(PoolStatusBitIndex.SWAP, enabled=False)
        self.assertFalse(self.pool.get_status_by_bit(PoolStatusBitIndex.SWAP))
        self.assertTrue(self.pool.get_status_by_bit(PoolStatusBitIndex.COLLECT_FEE))
        self.assertEqual(self.pool.status, 16)

        self.pool.set_status_by_bit(PoolStatusBitIndex.SWAP, enabled=True)
        self.assertTrue(self.pool.get_status_by_bit(PoolStatusBitIndex.SWAP))
        self.assertEqual(self.pool.status, 0)

    def test_tick_array_bitmap(self):
        self.assertIsNone(self.pool.get_first_initialized_tick_array(zero_for_one=False))

        self.assertTrue(self.pool.flip_tick_array_bit(60))
        self.assertEqual(self.pool.get_first_initialized_tick_array(zero_for_one=False), 60)
        self.assertIsNone(self.pool.get_first_initialized_tick_array(zero_for_one=True))

        self.pool.flip_tick_array_bit(0)
        self.assertEqual(self.pool.get_first_initialized_tick_array(zero_for_one=True), 0)
        self.assertEqual(self.pool.next_initialized_tick_array_start_index(0, zero_for_one=False), 60)

        # beyond the pool bitmap, stored in the extension
        self.pool.flip_tick_array_bit(-60 * 600)
        self.assertFalse(self.pool.tick_array_bitmap_extension.is_empty())
        self.assertEqual(self.pool.next_initialized_tick_array_start_index(0, zero_for_one=True), -36000)

    def test_accrue_fee_growth(self):
        self.assertEqual(self.pool.accrue_fee_growth(10, is_token_0=True), 0)

        self.pool.liquidity = 2**64
        self.assertEqual(self.pool.accrue_fee_growth(10, is_token_0=True), 10)
        self.assertEqual(self.pool.fee_growth_global_0_x64, 10)
        self.assertEqual(self.pool.fee_growth_global_1_x64, 0)

        self.pool.liquidity = 3
        self.assertEqual(self.pool.accrue_fee_growth(1, is_token_0=False), 2**64 // 3)
        self.assertEqual(self.pool.fee_growth_global_1_x64, 2**64 // 3)

    def test_fee_growth_wraps(self):
        self.pool.liquidity = 2**64
        self.pool.fee_growth_global_0_x64 = MAX_U128
        self.pool.accrue_fee_growth(1, is_token_0=True)
        self.assertEqual(self.pool.fee_growth_global_0_x64, 0)


if __name__ == "__main__":
    unittest.main()
