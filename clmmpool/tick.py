"""Tick state, its binary account layout, and the tick bitmap."""

from __future__ import annotations

from dataclasses import dataclass, field

from .codec import Reader, Writer
from .errors import ErrorKind, ProgramError

MIN_TICK = -887272
MAX_TICK = 887272
RESERVED_LEN = 256
BITMAP_LEN = 256

U256_MAX = (1 << 256) - 1
I256_MIN = -(1 << 255)
I256_MAX = (1 << 255) - 1


def _check_u256(value):
    if not 0 <= value <= U256_MAX:
        raise ProgramError(ErrorKind.ARITHMETIC_OVERFLOW, "256-bit unsigned overflow")
    return value


def _check_i256(value):
    if not I256_MIN <= value <= I256_MAX:
        raise ProgramError(ErrorKind.ARITHMETIC_OVERFLOW, "256-bit signed overflow")
    return value


@dataclass
class Tick:
    """Liquidity and fee bookkeeping at one tick index."""

    tick: int
    liquidity_gross: int = 0
    liquidity_net: int = 0
    fee_growth_outside0_x128: int = 0
    fee_growth_outside1_x128: int = 0
    tick_cumulative_outside: int = 0
    seconds_per_liquidity_outside_x128: int = 0
    seconds_outside: int = 0
    initialized: bool = False
    reserved: bytes = field(default=bytes(RESERVED_LEN), repr=False)

    @classmethod
    def new_initialized(cls, tick):
        return cls(tick=tick, initialized=True)

    def initialize(self):
        self.initialized = True

    def update_liquidity(self, liquidity_delta, upper):
        """Apply a signed liquidity change; upper ticks add it to net, lower ticks subtract it."""
        if not self.initialized:
            self.initialize()
        abs_delta = abs(liquidity_delta)
        if upper:
            net = self.liquidity_net + liquidity_delta
        else:
            net = self.liquidity_net - liquidity_delta
        gross = self.liquidity_gross + abs_delta
        self.liquidity_net = _check_i256(net)
        self.liquidity_gross = _check_u256(gross)

    def update_fee_growth_outside(self, fee_growth_outside0_x128, fee_growth_outside1_x128):
        if not self.initialized:
            self.initialize()
        self.fee_growth_outside0_x128 = fee_growth_outside0_x128
        self.fee_growth_outside1_x128 = fee_growth_outside1_x128

    def update_cumulative_values(self, tick_cumulative, seconds_per_liquidity_cumulative_x128,
                                 seconds_outside):
        if not self.initialized:
            self.initialize()
        self.tick_cumulative_outside = tick_cumulative
        self.seconds_per_liquidity_outside_x128 = seconds_per_liquidity_cumulative_x128
        self.seconds_outside = seconds_outside

    def has_liquidity(self):
        return self.liquidity_gross != 0

    def cross(self):
        """Net liquidity change when the price crosses this tick."""
        return self.liquidity_net

    def is_valid(self):
        return MIN_TICK <= self.tick <= MAX_TICK

    def to_bytes(self):
        if len(self.reserved) != RESERVED_LEN:
            raise ValueError(f"reserved must be {RESERVED_LEN} bytes")
        writer = Writer()
        writer.write_i32(self.tick)
        writer.write_u256(self.liquidity_gross)
        writer.write_i256(self.liquidity_net)
        writer.write_u256(self.fee_growth_outside0_x128)
        writer.write_u256(self.fee_growth_outside1_x128)
        writer.write_i256(self.tick_cumulative_outside)
        writer.write_u256(self.seconds_per_liquidity_outside_x128)
        writer.write_u32(self.seconds_outside)
        writer.write_bool(self.initialized)
        writer.write_bytes(self.reserved)
        return writer.getvalue()

    @classmethod
    def from_bytes(cls, data):
        """Decode a tick from the start of ``data``; trailing bytes are ignored."""
        reader = Reader(data)
        return cls(
            tick=reader.read_i32(),
            liquidity_gross=reader.read_u256(),
            liquidity_net=reader.read_i256(),
            fee_growth_outside0_x128=reader.read_u256(),
            fee_growth_outside1_x128=reader.read_u256(),
            tick_cumulative_outside=reader.read_i256(),
            seconds_per_liquidity_outside_x128=reader.read_u256(),
            seconds_outside=reader.read_u32(),
            initialized=reader.read_bool(),
            reserved=reader.read_bytes(RESERVED_LEN),
        )


@dataclass(frozen=True)
class TickInfo:
    """A read-only summary of a tick."""

    tick: int
    liquidity_gross: int
    liquidity_net: int
    fee_growth_outside0_x128: int
    fee_growth_outside1_x128: int
    tick_cumulative_outside: int
    seconds_per_liquidity_outside_x128: int
    seconds_outside: int
    initialized: bool

    @classmethod
    def from_tick(cls, tick):
        return cls(
            tick=tick.tick,
            liquidity_gross=tick.liquidity_gross,
            liquidity_net=tick.liquidity_net,
            fee_growth_outside0_x128=tick.fee_growth_outside0_x128,
            fee_growth_outside1_x128=tick.fee_growth_outside1_x128,
            tick_cumulative_outside=tick.tick_cumulative_outside,
            seconds_per_liquidity_outside_x128=tick.seconds_per_liquidity_outside_x128,
            seconds_outside=tick.seconds_outside,
            initialized=tick.initialized,
        )


def _trunc_div(a, b):
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _trunc_rem(a, b):
    return a - b * _trunc_div(a, b)


def _split(bit_position):
    if not 0 <= bit_position <= 255:
        raise ValueError("bit position must be in 0..=255")
    return bit_position // 8, bit_position % 8


@dataclass
class TickBitmap:
    """A word of tick flags; bit ``n`` marks compressed tick ``n``."""

    word_position: int = 0
    bitmap: bytearray = field(default_factory=lambda: bytearray(BITMAP_LEN))

    def __post_init__(self):
        self.bitmap = bytearray(self.bitmap)
        if len(self.bitmap) != BITMAP_LEN:
            raise ValueError(f"bitmap must be {BITMAP_LEN} bytes")

    def set_bit(self, bit_position):
        byte_index, bit_index = _split(bit_position)
        self.bitmap[byte_index] |= 1 << bit_index

    def clear_bit(self, bit_position):
        byte_index, bit_index = _split(bit_position)
        self.bitmap[byte_index] &= ~(1 << bit_index) & 0xFF

    def is_bit_set(self, bit_position):
        byte_index, bit_index = _split(bit_position)
        return bool(self.bitmap[byte_index] & (1 << bit_index))

    def next_initialized_tick(self, tick, tick_spacing, lte):
        """Nearest flagged tick at or below (``lte``) or at or above ``tick``, or None."""
        compressed = _trunc_div(tick, tick_spacing)
        if not lte and _trunc_rem(tick, tick_spacing) != 0:
            compressed += 1
        if compressed < 0:
            return None
        if lte:
            candidates = range(compressed, -1, -1)
        else:
            # Bit lookups wrap modulo 256, so one full sweep sees every bit.
            candidates = range(compressed, compressed + 256)
        for candidate in candidates:
            if self.is_bit_set(candidate & 0xFF):
                return candidate * tick_spacing
        return None

    def to_bytes(self):
        writer = Writer()
        writer.write_bytes(self.bitmap)
        writer.write_i16(self.word_position)
        return writer.getvalue()

    @classmethod
    def from_bytes(cls, data):
        reader = Reader(data)
        bitmap = reader.read_bytes(BITMAP_LEN)
        return cls(word_position=reader.read_i16(), bitmap=bytearray(bitmap))