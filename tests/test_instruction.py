import pytest

from clmmpool.errors import ErrorKind, ProgramError
from clmmpool.instruction import (
    AddLiquidity,
    CollectFees,
    InitializePool,
    RemoveLiquidity,
    Swap,
    decode_instruction,
    encode_instruction,
)

SAMPLES = [
    InitializePool(30, 60, 1 << 96),
    AddLiquidity(-120, 120, 10**20, 5000, 6000),
    RemoveLiquidity(12345, 1, 2),
    CollectFees(0, 0),
    Swap(1000, 900, (1 << 128) - 1, True),
    Swap(1, 0, 0, False),
]


@pytest.mark.parametrize("instruction", SAMPLES)
def test_round_trip(instruction):
    assert decode_instruction(encode_instruction(instruction)) == instruction


@pytest.mark.parametrize("instruction,tag", [
    (SAMPLES[0], 0), (SAMPLES[1], 1), (SAMPLES[2], 2), (SAMPLES[3], 3), (SAMPLES[4], 4),
])
def test_variant_tag(instruction, tag):
    assert instruction.to_bytes()[0] == tag


def test_collect_fees_wire_bytes():
    assert CollectFees(0, 0).to_bytes() == bytes([3]) + bytes(16)


def test_lengths_follow_field_sizes():
    assert len(InitializePool(30, 60, 1).to_bytes()) == 1 + 4 + 4 + 16
    assert len(AddLiquidity(0, 1, 1, 1, 1).to_bytes()) == 1 + 4 + 4 + 16 + 8 + 8
    assert len(Swap(1, 1, 1, True).to_bytes()) == 1 + 8 + 8 + 16 + 1


def test_negative_ticks_little_endian():
    data = AddLiquidity(-1, 2, 0, 0, 0).to_bytes()
    assert data[1:5] == (-1).to_bytes(4, "little", signed=True)
    assert data[5:9] == (2).to_bytes(4, "little")


def test_swap_bool_encoding():
    assert Swap(0, 0, 0, True).to_bytes()[-1] == 1
    assert Swap(0, 0, 0, False).to_bytes()[-1] == 0


@pytest.mark.parametrize("data", [
    b"",
    bytes([5]),
    bytes([3]) + bytes(15),
    bytes([3]) + bytes(17),
    Swap(0, 0, 0, True).to_bytes()[:-1] + bytes([2]),
])
def test_invalid_data_rejected(data):
    with pytest.raises(ProgramError) as err:
        decode_instruction(data)
    assert err.value.kind is ErrorKind.INVALID_INSTRUCTION_DATA


def test_out_of_range_field_rejected_on_encode():
    with pytest.raises(ValueError):
        CollectFees(1 << 64, 0).to_bytes()