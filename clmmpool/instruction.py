"""Instructions accepted by the pool program and their binary encoding."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import ClassVar

from .codec import Reader, Writer
from .errors import ErrorKind, ProgramError


class _Encoded:
    """Shared encoding: a one-byte variant tag followed by the fields in order."""

    TAG: ClassVar[int]
    LAYOUT: ClassVar[tuple]

    def _encode(self):
        writer = Writer()
        writer.write_u8(self.TAG)
        for f, kind in zip(fields(self), self.LAYOUT):
            getattr(writer, f"write_{kind}")(getattr(self, f.name))
        return writer.getvalue()

    @classmethod
    def _read(cls, reader):
        values = [getattr(reader, f"read_{kind}")() for kind in cls.LAYOUT]
        return cls(*values)


@dataclass(frozen=True)
class InitializePool(_Encoded):
    """Create a pool; fee is in basis points."""

    TAG: ClassVar[int] = 0
    LAYOUT: ClassVar[tuple] = ("u32", "u32", "u128")

    fee: int
    tick_spacing: int
    initial_sqrt_price_x96: int

    def to_bytes(self):
        return self._encode()


@dataclass(frozen=True)
class AddLiquidity(_Encoded):
    TAG: ClassVar[int] = 1
    LAYOUT: ClassVar[tuple] = ("i32", "i32", "u128", "u64", "u64")

    tick_lower: int
    tick_upper: int
    liquidity_delta: int
    amount_0_max: int
    amount_1_max: int

    def to_bytes(self):
        return self._encode()


@dataclass(frozen=True)
class RemoveLiquidity(_Encoded):
    TAG: ClassVar[int] = 2
    LAYOUT: ClassVar[tuple] = ("u128", "u64", "u64")

    liquidity_delta: int
    amount_0_min: int
    amount_1_min: int

    def to_bytes(self):
        return self._encode()


@dataclass(frozen=True)
class CollectFees(_Encoded):
    """Collect owed fees; a requested amount of 0 means everything owed."""

    TAG: ClassVar[int] = 3
    LAYOUT: ClassVar[tuple] = ("u64", "u64")

    amount_0_requested: int
    amount_1_requested: int

    def to_bytes(self):
        return self._encode()


@dataclass(frozen=True)
class Swap(_Encoded):
    TAG: ClassVar[int] = 4
    LAYOUT: ClassVar[tuple] = ("u64", "u64", "u128", "bool")

    amount_in: int
    minimum_amount_out: int
    sqrt_price_limit: int
    zero_for_one: bool

    def to_bytes(self):
        return self._encode()


_VARIANTS = {cls.TAG: cls for cls in (InitializePool, AddLiquidity, RemoveLiquidity,
                                      CollectFees, Swap)}


def decode_instruction(data):
    """Decode instruction data; every byte must be consumed."""
    try:
        reader = Reader(data)
        variant = _VARIANTS.get(reader.read_u8())
        if variant is None:
            raise ProgramError(ErrorKind.INVALID_INSTRUCTION_DATA, "unknown instruction")
        instruction = variant._read(reader)
        if reader.remaining():
            raise ProgramError(ErrorKind.INVALID_INSTRUCTION_DATA, "trailing instruction data")
    except ProgramError as exc:
        if exc.kind is ErrorKind.INVALID_INSTRUCTION_DATA:
            raise
        raise ProgramError(
            ErrorKind.INVALID_INSTRUCTION_DATA, "Failed to deserialize instruction"
        ) from exc
    return instruction


def encode_instruction(instruction):
    """Encode any instruction variant to its binary form."""
    return instruction.to_bytes()