# clmmpool

Account state, binary layouts and address derivation for a concentrated-liquidity
market-maker (CLMM) pool program.

The package models the accounts of the pool program: pools, positions, ticks and
tick bitmaps. It reads and writes positions, ticks and bitmaps in their exact
binary layout. It also derives the program addresses the accounts live at, builds
system and token-program instructions, and encodes and decodes the program's own
instructions.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## What is inside

- `clmmpool.codec`: `Reader` and `Writer` for the little-endian layout. They handle
  unsigned integers up to 256 bits, `i16`, `i32`, signed 256-bit values, booleans
  and raw bytes. A `Reader` that runs out of input raises `ProgramError`.
- `clmmpool.pubkey`: `Pubkey`, a 32-byte address ordered by its bytes, with a base58
  text form (`from_base58`, `str()`), `Pubkey.default()` for the all-zero key, and
  `b58encode`/`b58decode`. `is_on_curve` tests a point against ed25519.
  `create_program_address` and `find_program_address` derive off-curve program
  addresses; the second one searches bump seeds from 255 down.
- `clmmpool.pda`: derivation of pool, vault A/B, authority, position, tick and
  oracle addresses, `verify_pda`, and the signer seed lists
  `pool_authority_seeds`, `pool_vault_a_seeds` and `pool_vault_b_seeds`.
- `clmmpool.constants`: fee tiers, tick spacings, seeds, account sizes, and
  `get_pool_pda`, `get_position_pda`, `get_tick_pda` and `get_bitmap_pda`, which
  append a zero byte to their seeds.
- `clmmpool.position`: `Position` (liquidity, fee-growth tracking, tokens owed,
  `to_bytes`/`from_bytes`) and the read-only `PositionInfo`.
- `clmmpool.tick`: `Tick` (gross and net liquidity, fee growth outside,
  `to_bytes`/`from_bytes`), the read-only `TickInfo`, and `TickBitmap` with bit
  operations and `next_initialized_tick`.
- `clmmpool.pool`: `Pool` holds the token pair, fee settings, price, tick and
  liquidity. It checks tick spacing and tick bounds (`min_tick`, `max_tick`).
  `validate_tick_range` raises `ClmmError` when a range cannot be used.
- `clmmpool.accounts`: `AccountInfo`, `AccountMeta`, `Instruction` and `Rent`; the
  system-program instruction builders; `create_account`, `close_account` and
  `realloc_account`; and the account checks (`assert_signer`, `assert_writable`,
  `assert_owned_by`, `assert_initialized`, ...), each of which raises
  `ProgramError` when it fails. `write_account_data` writes any object with a
  `to_bytes()` method into an account.
- `clmmpool.token`: token-program instruction builders (transfer, mint-to, burn,
  initialize account, close account), the matching `token_*` calls, and
  `get_token_balance` with the mint and owner checks on token account data.
- `clmmpool.instruction`: the program's instruction set (`InitializePool`,
  `AddLiquidity`, `RemoveLiquidity`, `CollectFees`, `Swap`) with
  `encode_instruction` and `decode_instruction`. Each one is a variant byte
  followed by its fields.

## Example

```python
from clmmpool.pubkey import Pubkey
from clmmpool.pda import derive_position_address
from clmmpool.instruction import AddLiquidity, encode_instruction, decode_instruction

program_id = Pubkey(bytes(range(32)))
pool = Pubkey(bytes([7] * 32))
owner = Pubkey(bytes([9] * 32))

address, bump = derive_position_address(program_id, pool, owner, -60, 60)

ix = AddLiquidity(
    tick_lower=-60,
    tick_upper=60,
    liquidity_delta=1_000_000,
    amount_0_max=10_000,
    amount_1_max=10_000,
)
data = encode_instruction(ix)
assert decode_instruction(data) == ix
```

Some operations call other programs, such as `create_account`, `realloc_account`
and the `token_*` functions. These take an `invoke(instruction, account_infos,
signers_seeds)` callable, and the caller decides how each built instruction is
executed or recorded.

## What it does not do

- It does not execute instructions. Decoding an instruction gives you its data,
  but nothing here adds or removes liquidity, collects fees or swaps against a
  pool.
- It has no price or tick math. Nothing converts between sqrt prices and ticks,
  and nothing computes token amounts for a given liquidity. `Pool` stores
  `sqrt_price_x96` and `tick` exactly as you set them.
- `Pool` has no binary layout here, so it cannot be read from or written to
  account data. Only `Position`, `Tick` and `TickBitmap` are serialised.
- There is no runtime. Accounts are plain in-memory `AccountInfo` objects, and
  cross-program calls go only as far as the `invoke` callable you supply.

## Errors

Failed checks raise `clmmpool.errors.ProgramError`. Its `kind`, an `ErrorKind`,
tells you which check failed, for example `MISSING_REQUIRED_SIGNATURE` or
`ILLEGAL_OWNER`. Errors specific to the pool program raise
`clmmpool.errors.ClmmError`, a subclass whose `kind` is a `ClmmErrorKind`.