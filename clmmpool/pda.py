"""Derivation of the program's pool, vault, position, tick and oracle addresses."""

from __future__ import annotations

from .errors import ErrorKind, ProgramError
from .pubkey import find_program_address

POOL_SEED = b"pool"
POOL_VAULT_SEED = b"pool_vault"
POOL_AUTHORITY_SEED = b"pool_authority"
POSITION_SEED = b"position"
TICK_SEED = b"tick"
ORACLE_SEED = b"oracle"


def _i32(value):
    return int(value).to_bytes(4, "little", signed=True)


def _u32(value):
    return int(value).to_bytes(4, "little", signed=False)


def _bump_bytes(bump):
    return bytes([bump]) if isinstance(bump, int) else bytes(bump)


def derive_pool_address(program_id, token_a, token_b, fee):
    return find_program_address(
        [POOL_SEED, bytes(token_a), bytes(token_b), _u32(fee)], program_id
    )


def derive_pool_vault_a_address(program_id, pool):
    return find_program_address([POOL_VAULT_SEED, bytes(pool), b"a"], program_id)


def derive_pool_vault_b_address(program_id, pool):
    return find_program_address([POOL_VAULT_SEED, bytes(pool), b"b"], program_id)


def derive_pool_authority_address(program_id, pool):
    return find_program_address([POOL_AUTHORITY_SEED, bytes(pool)], program_id)


def derive_position_address(program_id, pool, owner, tick_lower, tick_upper):
    return find_program_address(
        [POSITION_SEED, bytes(pool), bytes(owner), _i32(tick_lower), _i32(tick_upper)],
        program_id,
    )


def derive_tick_address(program_id, pool, tick):
    return find_program_address([TICK_SEED, bytes(pool), _i32(tick)], program_id)


def derive_oracle_address(program_id, pool):
    return find_program_address([ORACLE_SEED, bytes(pool)], program_id)


def verify_pda(expected, seeds, program_id):
    """Return the bump if the seeds derive ``expected``; raise otherwise."""
    derived, bump = find_program_address(seeds, program_id)
    if derived != expected:
        raise ProgramError(ErrorKind.INVALID_SEEDS, "derived address does not match")
    return bump


def pool_authority_seeds(pool, bump):
    return [POOL_AUTHORITY_SEED, bytes(pool), _bump_bytes(bump)]


def pool_vault_a_seeds(pool, bump):
    return [POOL_VAULT_SEED, bytes(pool), b"a", _bump_bytes(bump)]


def pool_vault_b_seeds(pool, bump):
    return [POOL_VAULT_SEED, bytes(pool), b"b", _bump_bytes(bump)]