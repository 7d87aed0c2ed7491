"""32-byte public keys, base58 text form and program-derived addresses."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

from .errors import ErrorKind, ProgramError

PUBKEY_BYTES = 32
MAX_SEEDS = 16
MAX_SEED_LEN = 32
_PDA_MARKER = b"ProgramDerivedAddress"

_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_INDEX = {ch: i for i, ch in enumerate(_ALPHABET)}

_P = 2**255 - 19
_D = -121665 * pow(121666, _P - 2, _P) % _P


def b58encode(data):
    """Encode bytes as base58 text."""
    data = bytes(data)
    number = int.from_bytes(data, "big")
    digits = []
    while number:
        number, rem = divmod(number, 58)
        digits.append(_ALPHABET[rem])
    zeros = len(data) - len(data.lstrip(b"\0"))
    return "1" * zeros + "".join(reversed(digits))


def b58decode(text):
    """Decode base58 text to bytes."""
    number = 0
    for ch in text:
        try:
            number = number * 58 + _INDEX[ch]
        except KeyError:
            raise ValueError(f"invalid base58 character {ch!r}") from None
    zeros = len(text) - len(text.lstrip("1"))
    body = number.to_bytes((number.bit_length() + 7) // 8, "big") if number else b""
    return b"\0" * zeros + body


def is_on_curve(data):
    """Whether 32 bytes decompress to a point on the ed25519 curve."""
    data = bytes(data)
    if len(data) != PUBKEY_BYTES:
        return False
    y = (int.from_bytes(data, "little") & ((1 << 255) - 1)) % _P
    y2 = y * y % _P
    u = (y2 - 1) % _P
    v = (_D * y2 + 1) % _P
    if v == 0:
        return False
    w = u * pow(v, _P - 2, _P) % _P
    return w == 0 or pow(w, (_P - 1) // 2, _P) == 1


@dataclass(frozen=True, order=True)
class Pubkey:
    """A 32-byte account address, ordered by its bytes."""

    raw: bytes

    def __post_init__(self):
        raw = bytes(self.raw)
        if len(raw) != PUBKEY_BYTES:
            raise ValueError(f"public key must be {PUBKEY_BYTES} bytes, got {len(raw)}")
        object.__setattr__(self, "raw", raw)

    @classmethod
    def from_base58(cls, value):
        return cls(b58decode(value))

    @classmethod
    def default(cls):
        return cls(bytes(PUBKEY_BYTES))

    def __str__(self):
        return b58encode(self.raw)

    def __repr__(self):
        return f"Pubkey({self})"

    def __bytes__(self):
        return self.raw


def create_program_address(seeds, program_id):
    """Hash seeds into an address that lies off the curve."""
    seeds = [bytes(seed) for seed in seeds]
    if len(seeds) > MAX_SEEDS:
        raise ProgramError(ErrorKind.MAX_SEED_LENGTH_EXCEEDED, "too many seeds")
    hasher = hashlib.sha256()
    for seed in seeds:
        if len(seed) > MAX_SEED_LEN:
            raise ProgramError(ErrorKind.MAX_SEED_LENGTH_EXCEEDED, "seed longer than 32 bytes")
        hasher.update(seed)
    hasher.update(bytes(program_id))
    hasher.update(_PDA_MARKER)
    digest = hasher.digest()
    if is_on_curve(digest):
        raise ProgramError(ErrorKind.INVALID_SEEDS, "derived address lies on the curve")
    return Pubkey(digest)


def find_program_address(seeds, program_id):
    """Search bump seeds from 255 down; return (address, bump)."""
    seeds = [bytes(seed) for seed in seeds]
    for bump in range(255, -1, -1):
        try:
            return create_program_address([*seeds, bytes([bump])], program_id), bump
        except ProgramError as exc:
            if exc.kind is not ErrorKind.INVALID_SEEDS:
                raise
    raise ProgramError(ErrorKind.INVALID_SEEDS, "Unable to find a viable program address bump seed")