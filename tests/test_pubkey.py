import pytest

from clmmpool.errors import ErrorKind, ProgramError
from clmmpool.pubkey import (
    Pubkey,
    b58decode,
    b58encode,
    create_program_address,
    find_program_address,
    is_on_curve,
)

PROGRAM_TEXT = "Fw4mNHEDrHAGg41XEcp7DkHpEP12MiUcCrP2Lj5ngth9"


def test_default_pubkey_text():
    assert str(Pubkey.default()) == "1" * 32


def test_base58_round_trip_of_program_id():
    key = Pubkey.from_base58(PROGRAM_TEXT)
    assert str(key) == PROGRAM_TEXT
    assert len(bytes(key)) == 32


@pytest.mark.parametrize("data", [b"", b"\x00", b"\x00\x00\x01", b"hello world", bytes(range(32))])
def test_b58_round_trip(data):
    assert b58decode(b58encode(data)) == data


def test_leading_zeros_become_ones():
    assert b58encode(b"\x00\x00\x01") == "112"


def test_invalid_base58_character():
    with pytest.raises(ValueError):
        b58decode("0OIl")


def test_wrong_length_rejected():
    with pytest.raises(ValueError):
        Pubkey(b"\x01" * 31)
    with pytest.raises(ValueError):
        Pubkey.from_base58("1111")


def test_ordering_follows_bytes():
    low = Pubkey(b"\x01" + bytes(31))
    high = Pubkey(b"\x02" + bytes(31))
    assert low < high
    assert sorted([high, low]) == [low, high]


def test_base_point_is_on_curve():
    base_point = bytes.fromhex("58" + "66" * 31)
    assert is_on_curve(base_point) is True


def test_identity_is_on_curve():
    identity = b"\x01" + bytes(31)
    assert is_on_curve(identity) is True


def test_wrong_size_is_not_on_curve():
    assert is_on_curve(b"\x01" * 31) is False


def test_find_program_address_is_off_curve_and_reproducible():
    program_id = Pubkey.from_base58(PROGRAM_TEXT)
    address, bump = find_program_address([b"pool", b"abc"], program_id)
    assert 0 <= bump <= 255
    assert is_on_curve(bytes(address)) is False
    assert create_program_address([b"pool", b"abc", bytes([bump])], program_id) == address


def test_find_program_address_deterministic_and_seed_sensitive():
    program_id = Pubkey.from_base58(PROGRAM_TEXT)
    first = find_program_address([b"tick"], program_id)
    assert find_program_address([b"tick"], program_id) == first
    assert find_program_address([b"tock"], program_id)[0] != first[0]


def test_seed_too_long_raises():
    with pytest.raises(ProgramError) as info:
        create_program_address([bytes(33)], Pubkey.default())
    assert info.value.kind is ErrorKind.MAX_SEED_LENGTH_EXCEEDED


def test_too_many_seeds_raises():
    with pytest.raises(ProgramError) as info:
        create_program_address([b"x"] * 17, Pubkey.default())
    assert info.value.kind is ErrorKind.MAX_SEED_LENGTH_EXCEEDED