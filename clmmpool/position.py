"""Liquidity positions held in a pool and their binary account layout."""

from __future__ import annotations

from dataclasses import dataclass, field

from .codec import Reader, Writer
from .pubkey import Pubkey

U256_MAX = (1 << 256) - 1
RESERVED_LEN = 256


def _saturating_add(a, b):
    return min(a + b, U256_MAX)


def _saturating_sub(a, b):
    return max(a - b, 0)


@dataclass
class Position:
    """A liquidity position between two ticks of a pool."""

    pool_id: Pubkey
    owner: Pubkey
    tick_lower: int
    tick_upper: int
    liquidity: int = 0
    fee_growth_inside0_last_x128: int = 0
    fee_growth_inside1_last_x128: int = 0
    tokens_owed0: int = 0
    tokens_owed1: int = 0
    position_id: int = 0
    created_at: int = 0
    updated_at: int = 0
    is_active: bool = True
    reserved: bytes = field(default=bytes(RESERVED_LEN), repr=False)

    @classmethod
    def create(cls, pool_id, owner, tick_lower, tick_upper, position_id, created_at):
        """Open an empty, active position; the range must be non-empty."""
        if tick_lower >= tick_upper:
            raise ValueError("Lower tick must be less than upper tick")
        return cls(
            pool_id=pool_id,
            owner=owner,
            tick_lower=tick_lower,
            tick_upper=tick_upper,
            position_id=position_id,
            created_at=created_at,
            updated_at=created_at,
        )

    def is_valid(self):
        return self.tick_lower < self.tick_upper and self.owner != Pubkey.default()

    def update_liquidity(self, new_liquidity, timestamp):
        self.liquidity = new_liquidity
        self.updated_at = timestamp

    def add_tokens_owed(self, token0_amount, token1_amount):
        """Add to the owed amounts, saturating at the 256-bit maximum."""
        self.tokens_owed0 = _saturating_add(self.tokens_owed0, token0_amount)
        self.tokens_owed1 = _saturating_add(self.tokens_owed1, token1_amount)

    def collect_tokens_owed(self, token0_amount, token1_amount):
        """Take up to the requested amounts from what is owed; return what was taken."""
        collected0 = min(self.tokens_owed0, token0_amount)
        collected1 = min(self.tokens_owed1, token1_amount)
        self.tokens_owed0 = _saturating_sub(self.tokens_owed0, collected0)
        self.tokens_owed1 = _saturating_sub(self.tokens_owed1, collected1)
        return collected0, collected1

    def update_fee_growth(self, fee_growth_inside0, fee_growth_inside1, timestamp):
        self.fee_growth_inside0_last_x128 = fee_growth_inside0
        self.fee_growth_inside1_last_x128 = fee_growth_inside1
        self.updated_at = timestamp

    def contains_tick(self, tick):
        return self.tick_lower <= tick <= self.tick_upper

    def tick_range(self):
        return self.tick_lower, self.tick_upper

    def width(self):
        """Width of the range in ticks, as an unsigned 32-bit value."""
        return (self.tick_upper - self.tick_lower) & 0xFFFFFFFF

    def is_empty(self):
        return self.liquidity == 0

    def deactivate(self, timestamp):
        self.is_active = False
        self.updated_at = timestamp

    def to_bytes(self):
        if len(self.reserved) != RESERVED_LEN:
            raise ValueError(f"reserved must be {RESERVED_LEN} bytes")
        writer = Writer()
        writer.write_bytes(bytes(self.pool_id))
        writer.write_bytes(bytes(self.owner))
        writer.write_i32(self.tick_lower)
        writer.write_i32(self.tick_upper)
        writer.write_u256(self.liquidity)
        writer.write_u256(self.fee_growth_inside0_last_x128)
        writer.write_u256(self.fee_growth_inside1_last_x128)
        writer.write_u256(self.tokens_owed0)
        writer.write_u256(self.tokens_owed1)
        writer.write_u64(self.position_id)
        writer.write_u32(self.created_at)
        writer.write_u32(self.updated_at)
        writer.write_bool(self.is_active)
        writer.write_bytes(self.reserved)
        return writer.getvalue()

    @classmethod
    def from_bytes(cls, data):
        """Decode a position from the start of ``data``; trailing bytes are ignored."""
        reader = Reader(data)
        return cls(
            pool_id=Pubkey(reader.read_bytes(32)),
            owner=Pubkey(reader.read_bytes(32)),
            tick_lower=reader.read_i32(),
            tick_upper=reader.read_i32(),
            liquidity=reader.read_u256(),
            fee_growth_inside0_last_x128=reader.read_u256(),
            fee_growth_inside1_last_x128=reader.read_u256(),
            tokens_owed0=reader.read_u256(),
            tokens_owed1=reader.read_u256(),
            position_id=reader.read_u64(),
            created_at=reader.read_u32(),
            updated_at=reader.read_u32(),
            is_active=reader.read_bool(),
            reserved=reader.read_bytes(RESERVED_LEN),
        )


@dataclass(frozen=True)
class PositionInfo:
    """A read-only summary of a position."""

    position_id: int
    pool_id: Pubkey
    owner: Pubkey
    tick_lower: int
    tick_upper: int
    liquidity: int
    tokens_owed0: int
    tokens_owed1: int
    is_active: bool
    created_at: int
    updated_at: int

    @classmethod
    def from_position(cls, position):
        return cls(
            position_id=position.position_id,
            pool_id=position.pool_id,
            owner=position.owner,
            tick_lower=position.tick_lower,
            tick_upper=position.tick_upper,
            liquidity=position.liquidity,
            tokens_owed0=position.tokens_owed0,
            tokens_owed1=position.tokens_owed1,
            is_active=position.is_active,
            created_at=position.created_at,
            updated_at=position.updated_at,
        )