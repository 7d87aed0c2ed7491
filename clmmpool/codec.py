"""Little-endian binary encoding of account and instruction fields."""

from __future__ import annotations

from .errors import ErrorKind, ProgramError

_U256_BITS = 256


class Reader:
    """Sequential decoder over a byte string."""

    def __init__(self, data):
        self._data = bytes(data)
        self._offset = 0

    def remaining(self):
        """Number of bytes not yet read."""
        return len(self._data) - self._offset

    def read_bytes(self, n):
        if n < 0 or n > self.remaining():
            raise ProgramError(ErrorKind.BORSH_IO_ERROR, "Unexpected length of input")
        chunk = self._data[self._offset:self._offset + n]
        self._offset += n
        return chunk

    def _read_int(self, size, signed):
        return int.from_bytes(self.read_bytes(size), "little", signed=signed)

    def read_u8(self):
        return self._read_int(1, False)

    def read_bool(self):
        value = self.read_u8()
        if value not in (0, 1):
            raise ProgramError(ErrorKind.BORSH_IO_ERROR, "Invalid bool representation")
        return value == 1

    def read_i16(self):
        return self._read_int(2, True)

    def read_u32(self):
        return self._read_int(4, False)

    def read_i32(self):
        return self._read_int(4, True)

    def read_u64(self):
        return self._read_int(8, False)

    def read_u128(self):
        return self._read_int(16, False)

    def read_u256(self):
        return self._read_int(_U256_BITS // 8, False)

    def read_i256(self):
        return self._read_int(_U256_BITS // 8, True)


class Writer:
    """Sequential encoder building a byte string."""

    def __init__(self):
        self._buffer = bytearray()

    def write_bytes(self, data):
        self._buffer.extend(bytes(data))

    def _write_int(self, value, size, signed):
        try:
            self._buffer.extend(int(value).to_bytes(size, "little", signed=signed))
        except OverflowError as exc:
            kind = "signed" if signed else "unsigned"
            raise ValueError(f"{value} does not fit in {size * 8}-bit {kind} integer") from exc

    def write_u8(self, value):
        self._write_int(value, 1, False)

    def write_bool(self, value):
        self.write_u8(1 if value else 0)

    def write_i16(self, value):
        self._write_int(value, 2, True)

    def write_u32(self, value):
        self._write_int(value, 4, False)

    def write_i32(self, value):
        self._write_int(value, 4, True)

    def write_u64(self, value):
        self._write_int(value, 8, False)

    def write_u128(self, value):
        self._write_int(value, 16, False)

    def write_u256(self, value):
        self._write_int(value, _U256_BITS // 8, False)

    def write_i256(self, value):
        self._write_int(value, _U256_BITS // 8, True)

    def getvalue(self):
        """The bytes written so far."""
        return bytes(self._buffer)