"""Pool state: token pair, fee settings, price and tick bounds."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .errors import ClmmError, ClmmErrorKind
from .pubkey import Pubkey
from .tick import MAX_TICK, MIN_TICK

U256_MAX = (1 << 256) - 1
RESERVED_LEN = 200
MAX_POOL_FEE = 10000


def _trunc_div(a, b):
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


@dataclass
class Pool:
    """A concentrated liquidity pool over a pair of tokens."""

    token_a: Pubkey
    token_b: Pubkey
    fee: int
    tick_spacing: int
    sqrt_price_x96: int = 0
    tick: int = 0
    max_liquidity_per_tick: int = U256_MAX
    fee_growth_global0_x128: int = 0
    fee_growth_global1_x128: int = 0
    protocol_fees_token0: int = 0
    protocol_fees_token1: int = 0
    liquidity: int = 0
    position_count: int = 0
    last_update_timestamp: int = 0
    unlocked: bool = True
    base_fee: Optional[int] = None
    min_fee: int = 1
    max_fee: int = 100
    last_fee_adjustment: int = 0
    fee_adjustment_interval: int = 3600
    dynamic_fee_enabled: bool = True
    last_oracle_update: int = 0
    oracle_observation_count: int = 0
    last_sequence_number: int = 0
    last_position_update: int = 0
    reserved: bytes = field(default=bytes(RESERVED_LEN), repr=False)

    def __post_init__(self):
        if self.base_fee is None:
            self.base_fee = self.fee

    def is_valid(self):
        """Tokens sorted, fee within range and a positive tick spacing."""
        return (
            self.token_a < self.token_b
            and self.fee <= MAX_POOL_FEE
            and self.tick_spacing > 0
        )

    def update_timestamp(self, timestamp):
        self.last_update_timestamp = timestamp

    def is_tick_spacing_valid(self, tick):
        return tick % self.tick_spacing == 0

    def min_tick(self):
        """Lowest tick that is a multiple of the spacing, rounded toward zero."""
        return _trunc_div(MIN_TICK, self.tick_spacing) * self.tick_spacing

    def max_tick(self):
        """Highest tick that is a multiple of the spacing, rounded toward zero."""
        return _trunc_div(MAX_TICK, self.tick_spacing) * self.tick_spacing

    def validate_tick_range(self, tick_lower, tick_upper):
        """Raise ClmmError(INVALID_TICK_RANGE) if the range is unusable in this pool."""
        if not self.is_tick_spacing_valid(tick_lower):
            raise ClmmError(ClmmErrorKind.INVALID_TICK_RANGE, "Lower tick not properly spaced")
        if not self.is_tick_spacing_valid(tick_upper):
            raise ClmmError(ClmmErrorKind.INVALID_TICK_RANGE, "Upper tick not properly spaced")
        if tick_lower >= tick_upper:
            raise ClmmError(
                ClmmErrorKind.INVALID_TICK_RANGE, "Lower tick must be less than upper tick"
            )
        if tick_lower < self.min_tick():
            raise ClmmError(ClmmErrorKind.INVALID_TICK_RANGE, "Lower tick below minimum")
        if tick_upper > self.max_tick():
            raise ClmmError(ClmmErrorKind.INVALID_TICK_RANGE, "Upper tick above maximum")