"""Error types raised by account, encoding and address helpers."""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Runtime-level failure categories."""

    INVALID_ARGUMENT = "invalid argument"
    INVALID_INSTRUCTION_DATA = "invalid instruction data"
    INVALID_ACCOUNT_DATA = "invalid account data"
    ACCOUNT_DATA_TOO_SMALL = "account data too small"
    INSUFFICIENT_FUNDS = "insufficient funds"
    MISSING_REQUIRED_SIGNATURE = "missing required signature"
    ACCOUNT_ALREADY_INITIALIZED = "account already initialized"
    UNINITIALIZED_ACCOUNT = "uninitialized account"
    NOT_ENOUGH_ACCOUNT_KEYS = "not enough account keys"
    MAX_SEED_LENGTH_EXCEEDED = "max seed length exceeded"
    INVALID_SEEDS = "invalid seeds"
    BORSH_IO_ERROR = "borsh io error"
    ILLEGAL_OWNER = "illegal owner"
    ARITHMETIC_OVERFLOW = "arithmetic overflow"


class ProgramError(Exception):
    """A failure of a program operation, tagged with a kind."""

    def __init__(self, kind, message=None):
        self.kind = kind
        self.message = message if message is not None else kind.value
        super().__init__(self.message)


class ClmmErrorKind(Enum):
    """Failures specific to the liquidity pool program."""

    INSUFFICIENT_LIQUIDITY = "insufficient liquidity"
    INVALID_TICK_RANGE = "invalid tick range"
    UNAUTHORIZED = "unauthorized"
    INVALID_ACCOUNT = "invalid account"
    INVALID_PRICE = "invalid price"


class ClmmError(ProgramError):
    """A pool program failure; also a ProgramError."""

    def __init__(self, kind, message=None):
        super().__init__(kind, message)