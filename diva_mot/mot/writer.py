"""MOT binary writer — lays raw motions out in pointer-table form.

The header table is reserved up front and back-patched once every motion
has been written, because the offsets are only known afterwards.
"""

from __future__ import annotations

import io
import logging
import struct
from pathlib import Path
from typing import BinaryIO, Iterable, Sequence

from .errors import FieldOverflow, TrackWriteError
from .parser import ALIGNMENT, HEADER_SIZE, TRACK_COUNT_MASK
from .types import (
    CatmullRom,
    FrameData,
    Hermite,
    NoData,
    Pose,
    RawMotion,
    SetType,
    set_type_of,
)

log = logging.getLogger("diva_mot")

U16_MAX = 0xFFFF


# ---------------------------------------------------------------------------
# Track tags
# ---------------------------------------------------------------------------

def pack_set_types(types: Sequence[SetType]) -> bytes:
    """Pack track types four to a byte, least significant pair first."""
    out = bytearray()
    for i in range(0, len(types), 4):
        chunk = list(types[i : i + 4])
        chunk += [SetType.NONE] * (4 - len(chunk))
        out.append(chunk[0] | chunk[1] << 2 | chunk[2] << 4 | chunk[3] << 6)
    return bytes(out)


# ---------------------------------------------------------------------------
# Tracks
# ---------------------------------------------------------------------------

def write_frame_data(w: BinaryIO, data: FrameData) -> int:
    """Write one track at the current position and return its size."""
    if isinstance(data, NoData):
        return 0
    if isinstance(data, Pose):
        w.write(struct.pack("<f", data.value))
        return 4
    if isinstance(data, (CatmullRom, Hermite)):
        keys = data.keyframes
        if isinstance(data, CatmullRom) and any(k.interpolation is not None for k in keys):
            log.warning("Catmull-Rom track has interpolation values; they are not stored")
        w.write(struct.pack("<H", len(keys)))
        for key in keys:
            w.write(struct.pack("<H", key.frame))
        pad = w.tell() % ALIGNMENT
        w.write(b"\x00" * pad)
        for key in keys:
            if isinstance(data, Hermite):
                w.write(struct.pack("<2f", key.value, key.interpolation))
            else:
                w.write(struct.pack("<f", key.value))
        per_key = 10 if isinstance(data, Hermite) else 6
        return 2 + pad + per_key * len(keys)
    raise TypeError(f"Not a frame data track: {data!r}")


# ---------------------------------------------------------------------------
# Motions
# ---------------------------------------------------------------------------

def _check_u16(index: int, field: str, value: int) -> None:
    if not 0 <= value <= U16_MAX:
        raise FieldOverflow(index, field, value, U16_MAX)


def _check_motion(index: int, mot: RawMotion) -> None:
    """Reject values that do not fit their on-disk fields."""
    if len(mot.sets) > TRACK_COUNT_MASK:
        # The upper two bits of the count field are flags
        raise FieldOverflow(index, "track count", len(mot.sets), TRACK_COUNT_MASK)
    _check_u16(index, "frames", mot.frames)
    for i, bone in enumerate(mot.bones):
        _check_u16(index, f"bones[{i}]", bone)
    for i, data in enumerate(mot.sets):
        if isinstance(data, (CatmullRom, Hermite)):
            _check_u16(index, f"sets[{i}] keyframe count", len(data.keyframes))
            for j, key in enumerate(data.keyframes):
                _check_u16(index, f"sets[{i}].keyframes[{j}].frame", key.frame)


def _check_bones(index: int, bones: list[int]) -> None:
    zeros = bones.count(0)
    if zeros != 1:
        log.warning(
            "Motion %d has %d zero bone ids; its bone list will not read back "
            "unchanged (the reader keeps the first 0 and stops at the second)",
            index, zeros,
        )


def _write_motion(w: BinaryIO, index: int, mot: RawMotion) -> tuple[int, int]:
    """Write one motion body; return the (sets, bones) offsets."""
    w.write(struct.pack("<HH", len(mot.sets), mot.frames))

    set_types = pack_set_types([set_type_of(s) for s in mot.sets])
    start = w.tell()
    w.write(set_types)
    w.write(b"\x00" * ((start + len(set_types)) % ALIGNMENT))

    sets_off = w.tell()
    for i, data in enumerate(mot.sets):
        try:
            write_frame_data(w, data)
        except struct.error as e:
            raise TrackWriteError(index, i, e) from e

    bones_off = w.tell()
    for bone in mot.bones:
        w.write(struct.pack("<H", bone))
    w.write(b"\x00\x00")
    return sets_off, bones_off


def write_all(motions: Sequence[RawMotion], w: BinaryIO) -> None:
    """Write ``motions`` to the seekable binary stream ``w``.

    The stream must be positioned at its start: offsets and alignment are
    absolute.  Field overflows are rejected before anything is written;
    on any later write error the stream content is undefined and should be
    dropped.
    """
    if w.tell() != 0:
        raise ValueError(f"MOT output must start at offset 0, not {w.tell()}")
    for index, mot in enumerate(motions):
        _check_motion(index, mot)
        _check_bones(index, mot.bones)

    w.write(b"\x00" * ((1 + len(motions)) * HEADER_SIZE))

    infos: list[tuple[int, int, int]] = []
    for index, mot in enumerate(motions):
        start = w.tell()
        sets_off, bones_off = _write_motion(w, index, mot)
        infos.append((start, sets_off, bones_off))

    # The reader aligns keyframe values on the bytes left in the file
    tail = w.tell() % ALIGNMENT
    if tail:
        w.write(b"\x00" * (ALIGNMENT - tail))

    end = w.tell()
    try:
        w.seek(0)
        for start, sets_off, bones_off in infos:
            w.write(struct.pack("<4I", start, start + 4, sets_off, bones_off))
        w.write(b"\x00" * HEADER_SIZE)
    finally:
        w.seek(end)

    log.debug("Wrote %d motions (%d bytes)", len(motions), end)


def write(motions: Iterable[RawMotion]) -> bytes:
    """Serialize ``motions`` to an in-memory MOT file."""
    buf = io.BytesIO()
    write_all(list(motions), buf)
    return buf.getvalue()


def save(motions: Iterable[RawMotion], filepath: str | Path) -> None:
    """Write ``motions`` to a MOT file."""
    filepath = Path(filepath)
    data = write(motions)
    filepath.write_bytes(data)
    log.info("Saved MOT: %s (%d bytes)", filepath.name, len(data))
