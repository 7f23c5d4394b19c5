"""Bounds-checked fixed-width reads from a byte buffer.

Every reader takes the whole buffer plus an absolute position and returns
``(value, new_pos)``.  Nothing reads past the end of the buffer: a short
read raises OutOfRange instead.
"""

from __future__ import annotations

import struct
from typing import Callable

from .errors import OobPointer, OutOfRange


def read_at(buf: bytes, off: int) -> int:
    """Validate a pointer into ``buf`` and return it as a start position."""
    if off < 0 or off > len(buf):
        raise OobPointer(off, len(buf))
    return off


def _reader(fmt: str) -> Callable[[bytes, int], tuple]:
    s = struct.Struct(fmt)

    def read(buf: bytes, pos: int):
        left = len(buf) - pos
        if s.size > left:
            raise OutOfRange(s.size, max(left, 0))
        (value,) = s.unpack_from(buf, pos)
        return value, pos + s.size

    read.__name__ = f"read_{fmt}"
    return read


# -- little-endian --

le_u16 = _reader("<H")
le_u32 = _reader("<I")
le_u64 = _reader("<Q")
le_i16 = _reader("<h")
le_i32 = _reader("<i")
le_i64 = _reader("<q")
le_f32 = _reader("<f")
le_f64 = _reader("<d")

# -- big-endian --

be_u16 = _reader(">H")
be_u32 = _reader(">I")
be_u64 = _reader(">Q")
be_i16 = _reader(">h")
be_i32 = _reader(">i")
be_i64 = _reader(">q")
be_f32 = _reader(">f")
be_f64 = _reader(">d")


def count(buf: bytes, pos: int, n: int, read) -> tuple[list, int]:
    """Apply ``read`` ``n`` times in sequence."""
    values = []
    for _ in range(n):
        value, pos = read(buf, pos)
        values.append(value)
    return values, pos


def many_till_nth(buf: bytes, pos: int, read, sentinel, nth: int) -> tuple[list, int]:
    """Read values until ``sentinel`` is seen for the ``nth + 1``-th time.

    The first ``nth`` sentinels are kept as ordinary values; the terminating
    one is consumed but not returned.
    """
    values = []
    seen = 0
    while True:
        value, pos = read(buf, pos)
        if value == sentinel:
            if seen >= nth:
                return values, pos
            seen += 1
        values.append(value)
