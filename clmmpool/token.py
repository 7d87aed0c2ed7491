"""Token program instructions and checks on token account data."""

from __future__ import annotations

from .accounts import AccountMeta, Instruction
from .errors import ErrorKind, ProgramError
from .pubkey import Pubkey

TOKEN_PROGRAM_ID = Pubkey.from_base58("TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA")

TOKEN_IX_INITIALIZE_ACCOUNT = 1
TOKEN_IX_TRANSFER = 3
TOKEN_IX_MINT_TO = 7
TOKEN_IX_BURN = 8
TOKEN_IX_CLOSE_ACCOUNT = 9

TOKEN_ACCOUNT_LEN = 165
_MINT_RANGE = slice(0, 32)
_OWNER_RANGE = slice(32, 64)
_AMOUNT_RANGE = slice(64, 72)


def _amount_data(tag, amount):
    return bytes([tag]) + int(amount).to_bytes(8, "little")


def transfer_instruction(source, destination, authority, amount):
    return Instruction(
        TOKEN_PROGRAM_ID,
        (
            AccountMeta.writable(source, False),
            AccountMeta.writable(destination, False),
            AccountMeta.readonly(authority, True),
        ),
        _amount_data(TOKEN_IX_TRANSFER, amount),
    )


def mint_to_instruction(mint, destination, authority, amount):
    return Instruction(
        TOKEN_PROGRAM_ID,
        (
            AccountMeta.writable(mint, False),
            AccountMeta.writable(destination, False),
            AccountMeta.readonly(authority, True),
        ),
        _amount_data(TOKEN_IX_MINT_TO, amount),
    )


def burn_instruction(account, mint, authority, amount):
    return Instruction(
        TOKEN_PROGRAM_ID,
        (
            AccountMeta.writable(account, False),
            AccountMeta.writable(mint, False),
            AccountMeta.readonly(authority, True),
        ),
        _amount_data(TOKEN_IX_BURN, amount),
    )


def initialize_account_instruction(account, mint, owner, rent):
    return Instruction(
        TOKEN_PROGRAM_ID,
        (
            AccountMeta.writable(account, False),
            AccountMeta.readonly(mint, False),
            AccountMeta.readonly(owner, False),
            AccountMeta.readonly(rent, False),
        ),
        bytes([TOKEN_IX_INITIALIZE_ACCOUNT]),
    )


def close_account_instruction(account, destination, authority):
    return Instruction(
        TOKEN_PROGRAM_ID,
        (
            AccountMeta.writable(account, False),
            AccountMeta.writable(destination, False),
            AccountMeta.readonly(authority, True),
        ),
        bytes([TOKEN_IX_CLOSE_ACCOUNT]),
    )


def token_transfer(token_program, source, destination, authority, amount, invoke):
    """Transfer tokens with a signing authority.

    ``invoke(instruction, account_infos, signers_seeds)`` performs the call.
    """
    return invoke(
        transfer_instruction(source.key, destination.key, authority.key, amount),
        [source, destination, authority, token_program],
        [],
    )


def token_transfer_signed(token_program, source, destination, authority, amount,
                          signer_seeds, invoke):
    """Transfer tokens with a program-derived authority signed by ``signer_seeds``."""
    return invoke(
        transfer_instruction(source.key, destination.key, authority.key, amount),
        [source, destination, authority, token_program],
        [list(signer_seeds)],
    )


def token_mint_to(token_program, mint, destination, authority, amount, signer_seeds, invoke):
    return invoke(
        mint_to_instruction(mint.key, destination.key, authority.key, amount),
        [mint, destination, authority, token_program],
        [list(signer_seeds)],
    )


def token_burn(token_program, account, mint, authority, amount, invoke):
    return invoke(
        burn_instruction(account.key, mint.key, authority.key, amount),
        [account, mint, authority, token_program],
        [],
    )


def token_initialize_account(token_program, account, mint, owner, rent, invoke):
    return invoke(
        initialize_account_instruction(account.key, mint.key, owner.key, rent.key),
        [account, mint, owner, rent, token_program],
        [],
    )


def token_close_account(token_program, account, destination, authority, signer_seeds, invoke):
    return invoke(
        close_account_instruction(account.key, destination.key, authority.key),
        [account, destination, authority, token_program],
        [list(signer_seeds)],
    )


def get_token_balance(account):
    """Read the amount field of a token account."""
    data = bytes(account.data)
    if len(data) != TOKEN_ACCOUNT_LEN:
        raise ProgramError(ErrorKind.INVALID_ACCOUNT_DATA, "not a token account")
    return int.from_bytes(data[_AMOUNT_RANGE], "little")


def assert_is_token_account(account):
    if account.owner != TOKEN_PROGRAM_ID:
        raise ProgramError(ErrorKind.ILLEGAL_OWNER, "account not owned by the token program")


def assert_token_mint(token_account, expected_mint):
    assert_is_token_account(token_account)
    data = bytes(token_account.data)
    if len(data) < 32:
        raise ProgramError(ErrorKind.INVALID_ACCOUNT_DATA, "token account data too short")
    if data[_MINT_RANGE] != bytes(expected_mint):
        raise ProgramError(ErrorKind.INVALID_ACCOUNT_DATA, "token account mint mismatch")


def assert_token_owner(token_account, expected_owner):
    assert_is_token_account(token_account)
    data = bytes(token_account.data)
    if len(data) < 64:
        raise ProgramError(ErrorKind.INVALID_ACCOUNT_DATA, "token account data too short")
    if data[_OWNER_RANGE] != bytes(expected_owner):
        raise ProgramError(ErrorKind.INVALID_ACCOUNT_DATA, "token account owner mismatch")