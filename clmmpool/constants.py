"""Program-wide constants and the zero-suffixed address helpers."""

from __future__ import annotations

from .pubkey import find_program_address

MINIMUM_LIQUIDITY = 1000
MAX_FEE = 10000
PROTOCOL_FEE_PERCENT = 0

FEE_TIER_0_01 = 1
FEE_TIER_0_05 = 5
FEE_TIER_0_3 = 30
FEE_TIER_1_0 = 100

TICK_SPACING_1 = 1
TICK_SPACING_10 = 10
TICK_SPACING_60 = 60
TICK_SPACING_200 = 200

MAX_POSITIONS_PER_POOL = 100000

MAX_TICK_RANGE_WIDTH = 887272 * 2

POOL_SEED = b"pool"
POSITION_SEED = b"position"
TICK_SEED = b"tick"
BITMAP_SEED = b"bitmap"
PROTOCOL_FEE_SEED = b"protocol_fee"

POOL_ACCOUNT_SIZE = (
    8 + 32 + 32 + 4 + 4 + 4 + 16 + 4 + 16 + 16 + 16 + 16 + 16 + 8 + 4 + 1
    + 4 + 4 + 4 + 4 + 4 + 1 + 4 + 4 + 8 + 4 + 4 + 200
)
POSITION_ACCOUNT_SIZE = 8 + 32 + 32 + 4 + 4 + 16 + 16 + 16 + 16 + 16 + 8 + 4 + 4 + 1 + 256
TICK_ACCOUNT_SIZE = 8 + 4 + 16 + 16 + 16 + 16 + 16 + 16 + 4 + 1 + 256

_ZERO = b"\x00"


def get_pool_pda(token_a, token_b, fee, program_id):
    seeds = [POOL_SEED, bytes(token_a), bytes(token_b), int(fee).to_bytes(4, "little"), _ZERO]
    return find_program_address(seeds, program_id)


def get_position_pda(pool_id, owner, tick_lower, tick_upper, program_id):
    seeds = [
        POSITION_SEED,
        bytes(pool_id),
        bytes(owner),
        int(tick_lower).to_bytes(4, "little", signed=True),
        int(tick_upper).to_bytes(4, "little", signed=True),
        _ZERO,
    ]
    return find_program_address(seeds, program_id)


def get_tick_pda(pool_id, tick, program_id):
    seeds = [TICK_SEED, bytes(pool_id), int(tick).to_bytes(4, "little", signed=True), _ZERO]
    return find_program_address(seeds, program_id)


def get_bitmap_pda(pool_id, program_id):
    return find_program_address([BITMAP_SEED, bytes(pool_id), _ZERO], program_id)