import time

import pytest

from clmmpool import accounts
from clmmpool.accounts import (
    SYSTEM_PROGRAM_ID,
    AccountInfo,
    Rent,
    assert_account_key,
    assert_account_space,
    assert_initialized,
    assert_owned_by,
    assert_signer,
    assert_uninitialized,
    assert_writable,
    close_account,
    create_account,
    create_account_instruction,
    get_current_timestamp,
    realloc_account,
    transfer_instruction,
    write_account_data,
)
from clmmpool.errors import ErrorKind, ProgramError
from clmmpool.position import Position
from clmmpool.pubkey import Pubkey

PROGRAM = Pubkey(bytes([9]) * 32)
OTHER = Pubkey(bytes([8]) * 32)


def key(n):
    return Pubkey(bytes([n]) * 32)


def account(n, **kwargs):
    kwargs.setdefault("owner", PROGRAM)
    return AccountInfo(key=key(n), **kwargs)


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, instruction, infos, signers):
        self.calls.append((instruction, infos, signers))


def test_system_program_id_round_trips():
    text = "Fw4mNHEDrHAGg41XEcp7DkHpEP12MiUcCrP2Lj5ngth9"
    parsed = Pubkey.from_base58(text)
    assert parsed == SYSTEM_PROGRAM_ID
    assert str(parsed) == text
    assert str(SYSTEM_PROGRAM_ID) == text


def test_rent_minimum_balance_for_empty_account():
    assert Rent().minimum_balance(0) == 890880


def test_rent_grows_with_size():
    rent = Rent()
    assert rent.minimum_balance(100) - rent.minimum_balance(0) == 100 * 3480 * 2


def test_create_account_instruction_layout():
    ix = create_account_instruction(key(1), key(2), 500, 64, PROGRAM)
    assert ix.program_id == SYSTEM_PROGRAM_ID
    assert ix.data[:4] == b"\x00\x00\x00\x00"
    assert ix.data[4:12] == (500).to_bytes(8, "little")
    assert ix.data[12:20] == (64).to_bytes(8, "little")
    assert ix.data[20:] == bytes(PROGRAM)
    assert [(m.pubkey, m.is_signer, m.is_writable) for m in ix.accounts] == [
        (key(1), True, True),
        (key(2), True, True),
    ]


def test_transfer_instruction_layout():
    ix = transfer_instruction(key(1), key(2), 7)
    assert ix.data == b"\x02\x00\x00\x00" + (7).to_bytes(8, "little")
    assert ix.accounts[1].is_signer is False
    assert ix.accounts[1].is_writable is True


def test_create_account_fresh_uses_single_create():
    rec = Recorder()
    payer, new, system = account(1), account(2), account(3)
    create_account(payer, new, system, PROGRAM, Rent(), 100, [b"seed"], rec)
    assert len(rec.calls) == 1
    ix, infos, signers = rec.calls[0]
    assert ix.data[:4] == b"\x00\x00\x00\x00"
    assert int.from_bytes(ix.data[4:12], "little") == Rent().minimum_balance(100)
    assert infos == [payer, new, system]
    assert signers == [[b"seed"]]


def test_create_account_prefunded_tops_up_then_allocates_and_assigns():
    rec = Recorder()
    rent = Rent()
    new = account(2, lamports=10)
    create_account(account(1), new, account(3), PROGRAM, rent, 50, [b"s"], rec)
    kinds = [int.from_bytes(ix.data[:4], "little") for ix, _, _ in rec.calls]
    assert kinds == [2, 8, 1]
    transfer_ix = rec.calls[0][0]
    assert int.from_bytes(transfer_ix.data[4:12], "little") == rent.minimum_balance(50) - 10
    assert rec.calls[2][0].data[4:] == bytes(PROGRAM)


def test_create_account_fully_funded_skips_transfer():
    rec = Recorder()
    rent = Rent()
    new = account(2, lamports=rent.minimum_balance(50) + 1)
    create_account(account(1), new, account(3), PROGRAM, rent, 50, [], rec)
    kinds = [int.from_bytes(ix.data[:4], "little") for ix, _, _ in rec.calls]
    assert kinds == [8, 1]


def test_assert_writable_and_signer():
    with pytest.raises(ProgramError) as info:
        assert_writable(account(1))
    assert info.value.kind is ErrorKind.INVALID_ACCOUNT_DATA
    with pytest.raises(ProgramError) as info:
        assert_signer(account(1))
    assert info.value.kind is ErrorKind.MISSING_REQUIRED_SIGNATURE
    ok = account(1, is_signer=True, is_writable=True)
    assert_writable(ok)
    assert_signer(ok)
    assert ok.is_signer and ok.is_writable


def test_assert_owned_by():
    acc = account(1)
    assert_owned_by(acc, PROGRAM)
    with pytest.raises(ProgramError) as info:
        assert_owned_by(acc, OTHER)
    assert info.value.kind is ErrorKind.ILLEGAL_OWNER


def test_initialized_checks():
    empty = account(1)
    zeros = account(2, data=bytes(10))
    full = account(3, data=b"\x00\x01")
    for acc in (empty, zeros):
        with pytest.raises(ProgramError) as info:
            assert_initialized(acc)
        assert info.value.kind is ErrorKind.UNINITIALIZED_ACCOUNT
        assert_uninitialized(acc)
    assert_initialized(full)
    with pytest.raises(ProgramError) as info:
        assert_uninitialized(full)
    assert info.value.kind is ErrorKind.ACCOUNT_ALREADY_INITIALIZED


def test_assert_account_key():
    assert_account_key(account(1), key(1))
    with pytest.raises(ProgramError) as info:
        assert_account_key(account(1), key(2))
    assert info.value.kind is ErrorKind.INVALID_ACCOUNT_DATA


def test_assert_account_space():
    acc = account(1, data=bytes(8))
    assert_account_space(acc, 8)
    with pytest.raises(ProgramError) as info:
        assert_account_space(acc, 9)
    assert info.value.kind is ErrorKind.ACCOUNT_DATA_TOO_SMALL


def test_get_current_timestamp_is_now():
    before = int(time.time())
    now = get_current_timestamp()
    assert before <= now <= int(time.time())


def test_write_account_data_round_trip():
    position = Position.create(key(1), key(2), -60, 60, 3, 100)
    position.liquidity = 12345
    acc = account(4, data=bytes(len(position.to_bytes()) + 8))
    write_account_data(acc, position)
    assert Position.from_bytes(acc.data) == position
    assert acc.data[-8:] == bytes(8)


def test_write_account_data_too_small():
    position = Position.create(key(1), key(2), -60, 60, 3, 100)
    acc = account(4, data=bytes(10))
    with pytest.raises(ProgramError) as info:
        write_account_data(acc, position)
    assert info.value.kind is ErrorKind.BORSH_IO_ERROR


def test_close_account_moves_lamports_and_zeroes_data():
    acc = account(1, lamports=300, data=b"\x01\x02\x03")
    dest = account(2, lamports=200)
    close_account(acc, dest)
    assert (acc.lamports, dest.lamports) == (0, 500)
    assert acc.data == bytearray(3)


def test_close_account_overflow():
    acc = account(1, lamports=1)
    dest = account(2, lamports=accounts.U64_MAX)
    with pytest.raises(ProgramError) as info:
        close_account(acc, dest)
    assert info.value.kind is ErrorKind.ARITHMETIC_OVERFLOW
    assert dest.lamports == accounts.U64_MAX


def test_realloc_same_size_does_nothing():
    rec = Recorder()
    acc = account(1, lamports=5, data=bytes(4))
    realloc_account(acc, 4, account(2), Rent(), rec)
    assert rec.calls == []
    assert acc.lamports == 5


def test_realloc_grow_requests_transfer():
    rec = Recorder()
    rent = Rent()
    acc = account(1, lamports=rent.minimum_balance(4), data=bytes(4))
    payer = account(2, lamports=10**9)
    realloc_account(acc, 40, payer, rent, rec)
    assert len(rec.calls) == 1
    ix, infos, signers = rec.calls[0]
    expected = rent.minimum_balance(40) - rent.minimum_balance(4)
    assert int.from_bytes(ix.data[4:12], "little") == expected
    assert infos == [payer, acc]
    assert signers == []


def test_realloc_shrink_refunds_payer():
    rec = Recorder()
    rent = Rent()
    start = rent.minimum_balance(40)
    acc = account(1, lamports=start, data=bytes(40))
    payer = account(2, lamports=100)
    realloc_account(acc, 4, payer, rent, rec)
    assert acc.lamports == rent.minimum_balance(4)
    assert payer.lamports + acc.lamports == 100 + start
    assert rec.calls == []