"""Account records, system instructions, rent and account checks."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field

from .errors import ErrorKind, ProgramError
from .pubkey import Pubkey

log = logging.getLogger(__name__)

SYSTEM_PROGRAM_ID = Pubkey.from_base58("Fw4mNHEDrHAGg41XEcp7DkHpEP12MiUcCrP2Lj5ngth9")

SYSTEM_IX_CREATE_ACCOUNT = 0
SYSTEM_IX_ASSIGN = 1
SYSTEM_IX_TRANSFER = 2
SYSTEM_IX_ALLOCATE = 8

ACCOUNT_STORAGE_OVERHEAD = 128
U64_MAX = (1 << 64) - 1


@dataclass
class AccountInfo:
    """An account as seen by a program: address, owner, balance and data."""

    key: Pubkey
    owner: Pubkey
    lamports: int = 0
    data: bytearray = field(default_factory=bytearray)
    is_signer: bool = False
    is_writable: bool = False
    executable: bool = False

    def __post_init__(self):
        self.data = bytearray(self.data)

    def data_len(self):
        return len(self.data)

    def data_is_empty(self):
        return not self.data


@dataclass(frozen=True)
class AccountMeta:
    """An account reference inside an instruction."""

    pubkey: Pubkey
    is_signer: bool
    is_writable: bool

    @classmethod
    def writable(cls, pubkey, is_signer):
        return cls(pubkey, is_signer, True)

    @classmethod
    def readonly(cls, pubkey, is_signer):
        return cls(pubkey, is_signer, False)


@dataclass(frozen=True)
class Instruction:
    """A call to a program with its accounts and encoded data."""

    program_id: Pubkey
    accounts: tuple
    data: bytes


@dataclass(frozen=True)
class Rent:
    """Rent parameters used to compute rent-exempt balances."""

    lamports_per_byte_year: int = 3480
    exemption_threshold: float = 2.0
    burn_percent: int = 50

    def minimum_balance(self, data_len):
        """Lamports needed for an account of ``data_len`` bytes to be rent exempt."""
        bytes_cost = (ACCOUNT_STORAGE_OVERHEAD + data_len) * self.lamports_per_byte_year
        return int(float(bytes_cost) * self.exemption_threshold)


def _u32(value):
    return int(value).to_bytes(4, "little")


def _u64(value):
    return int(value).to_bytes(8, "little")


def create_account_instruction(payer, new_account, lamports, space, owner):
    data = _u32(SYSTEM_IX_CREATE_ACCOUNT) + _u64(lamports) + _u64(space) + bytes(owner)
    return Instruction(
        SYSTEM_PROGRAM_ID,
        (AccountMeta.writable(payer, True), AccountMeta.writable(new_account, True)),
        data,
    )


def transfer_instruction(source, destination, lamports):
    data = _u32(SYSTEM_IX_TRANSFER) + _u64(lamports)
    return Instruction(
        SYSTEM_PROGRAM_ID,
        (AccountMeta.writable(source, True), AccountMeta.writable(destination, False)),
        data,
    )


def allocate_instruction(account, space):
    data = _u32(SYSTEM_IX_ALLOCATE) + _u64(space)
    return Instruction(SYSTEM_PROGRAM_ID, (AccountMeta.writable(account, True),), data)


def assign_instruction(account, owner):
    data = _u32(SYSTEM_IX_ASSIGN) + bytes(owner)
    return Instruction(SYSTEM_PROGRAM_ID, (AccountMeta.writable(account, True),), data)


def create_account(payer, new_account, system_program, program_id, rent, space,
                   signer_seeds, invoke):
    """Create (or top up, allocate and assign) a program-owned account.

    ``invoke(instruction, account_infos, signers_seeds)`` performs each system call.
    """
    required = rent.minimum_balance(space)
    signers = [list(signer_seeds)]
    if new_account.lamports > 0:
        missing = max(required - new_account.lamports, 0)
        if missing > 0:
            invoke(
                transfer_instruction(payer.key, new_account.key, missing),
                [payer, new_account, system_program],
                signers,
            )
        invoke(
            allocate_instruction(new_account.key, space),
            [new_account, system_program],
            signers,
        )
        invoke(
            assign_instruction(new_account.key, program_id),
            [new_account, system_program],
            signers,
        )
    else:
        invoke(
            create_account_instruction(payer.key, new_account.key, required, space, program_id),
            [payer, new_account, system_program],
            signers,
        )


def assert_writable(account):
    if not account.is_writable:
        log.info("Account is not writable: %s", account.key)
        raise ProgramError(ErrorKind.INVALID_ACCOUNT_DATA, f"Account is not writable: {account.key}")


def assert_signer(account):
    if not account.is_signer:
        log.info("Account is not a signer: %s", account.key)
        raise ProgramError(
            ErrorKind.MISSING_REQUIRED_SIGNATURE, f"Account is not a signer: {account.key}"
        )


def assert_owned_by(account, owner):
    if account.owner != owner:
        message = f"Account {account.key} is owned by {account.owner}, expected {owner}"
        log.info(message)
        raise ProgramError(ErrorKind.ILLEGAL_OWNER, message)


def assert_uninitialized(account):
    if any(account.data):
        raise ProgramError(
            ErrorKind.ACCOUNT_ALREADY_INITIALIZED, f"Account is already initialized: {account.key}"
        )


def assert_initialized(account):
    if not any(account.data):
        raise ProgramError(
            ErrorKind.UNINITIALIZED_ACCOUNT, f"Account is not initialized: {account.key}"
        )


def assert_account_key(account, expected):
    if account.key != expected:
        raise ProgramError(
            ErrorKind.INVALID_ACCOUNT_DATA,
            f"Account key mismatch: expected {expected}, got {account.key}",
        )


def get_current_timestamp():
    """Current unix time in whole seconds."""
    return int(time.time())


def write_account_data(account, data):
    """Write ``data.to_bytes()`` over the start of the account's data."""
    encoded = data.to_bytes()
    if len(encoded) > len(account.data):
        raise ProgramError(ErrorKind.BORSH_IO_ERROR, "failed to write whole buffer")
    account.data[:len(encoded)] = encoded


def assert_account_space(account, required_space):
    if account.data_len() < required_space:
        raise ProgramError(
            ErrorKind.ACCOUNT_DATA_TOO_SMALL,
            f"Account {account.key} has insufficient space: "
            f"{account.data_len()} < {required_space}",
        )


def close_account(account, destination):
    """Move all lamports to ``destination`` and zero the account's data."""
    total = destination.lamports + account.lamports
    if total > U64_MAX:
        raise ProgramError(ErrorKind.ARITHMETIC_OVERFLOW)
    destination.lamports = total
    account.lamports = 0
    account.data[:] = bytes(len(account.data))


def realloc_account(account, new_size, payer, rent, invoke):
    """Adjust the account's balance for ``new_size`` bytes of data."""
    current_size = account.data_len()
    if new_size == current_size:
        return
    current = account.lamports
    required = rent.minimum_balance(new_size)
    if new_size > current_size:
        additional = max(required - current, 0)
        if additional > 0:
            invoke(
                transfer_instruction(payer.key, account.key, additional),
                [payer, account],
                [],
            )
    else:
        excess = max(current - required, 0)
        if excess > 0:
            refunded = payer.lamports + excess
            if refunded > U64_MAX:
                raise ProgramError(ErrorKind.ARITHMETIC_OVERFLOW)
            account.lamports = required
            payer.lamports = refunded