"""MOT binary parser — reads pointer-table motion files.

A MOT file starts with a table of 16-byte records, one per motion, ended by
an all-zero record.  Each record holds four absolute offsets:

    info       u16 track count (low 14 bits), u16 frame count
    set_types  packed 2-bit track tags, four per byte, low bits first
    sets       the tracks themselves, back to back
    bones      u16 motion database ids, ended by the second 0

All values are little-endian.  Offsets are kept as positions into the one
file buffer; sub-streams are never copied out.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from pathlib import Path

from .binary import count, le_f32, le_u16, le_u32, many_till_nth, read_at
from .errors import (
    FrameReadError,
    OobPointer,
    OutOfRange,
    RawMotionError,
    ReadAtError,
    SetTypeReadError,
)
from .types import (
    CatmullRom,
    FrameData,
    Hermite,
    Keyframe,
    NoData,
    Pose,
    RawMotion,
    SetType,
)

log = logging.getLogger("diva_mot")

HEADER_SIZE = 16
TRACK_COUNT_MASK = 0x3FFF
ALIGNMENT = 4


@dataclass(frozen=True)
class HeaderOffsets:
    info: int
    set_types: int
    sets: int
    bones: int


# ---------------------------------------------------------------------------
# Header table
# ---------------------------------------------------------------------------

def _parse_header(buf: bytes, pos: int) -> tuple[HeaderOffsets | None, int]:
    info, pos = le_u32(buf, pos)
    set_types, pos = le_u32(buf, pos)
    sets, pos = le_u32(buf, pos)
    bones, pos = le_u32(buf, pos)
    if info == 0 and set_types == 0 and sets == 0 and bones == 0:
        return None, pos
    return HeaderOffsets(info, set_types, sets, bones), pos


def parse_headers(buf: bytes) -> list[HeaderOffsets]:
    """Read header records from offset 0 up to the all-zero terminator."""
    headers: list[HeaderOffsets] = []
    pos = 0
    while True:
        header, pos = _parse_header(buf, pos)
        if header is None:
            return headers
        headers.append(header)


# ---------------------------------------------------------------------------
# Track tags
# ---------------------------------------------------------------------------

def unpack_set_types(byte: int) -> tuple[SetType, SetType, SetType, SetType]:
    """Split one tag byte into four track types, least significant pair first."""
    return (
        SetType(byte & 0b11),
        SetType((byte >> 2) & 0b11),
        SetType((byte >> 4) & 0b11),
        SetType((byte >> 6) & 0b11),
    )


def _read_set_types(buf: bytes, off: int, track_count: int) -> list[SetType]:
    nbytes = math.ceil(track_count / 4)
    pos = read_at(buf, off)
    if pos + nbytes > len(buf):
        raise SetTypeReadError(off, nbytes, len(buf) - pos)
    types: list[SetType] = []
    for byte in buf[pos : pos + nbytes]:
        types.extend(unpack_set_types(byte))
    return types[:track_count]


# ---------------------------------------------------------------------------
# Tracks
# ---------------------------------------------------------------------------

def _read_keyframe_header(buf: bytes, pos: int) -> tuple[list[int], int]:
    cnt, pos = le_u16(buf, pos)
    frames, pos = count(buf, pos, cnt, le_u16)
    # Values are aligned on the bytes left in the buffer, not on pos
    pos += (len(buf) - pos) % ALIGNMENT
    return frames, pos


def _read_catmull_rom(buf: bytes, pos: int) -> tuple[CatmullRom, int]:
    frames, pos = _read_keyframe_header(buf, pos)
    values, pos = count(buf, pos, len(frames), le_f32)
    keyframes = [Keyframe(frame, value) for frame, value in zip(frames, values)]
    return CatmullRom(keyframes), pos


def _read_hermite(buf: bytes, pos: int) -> tuple[Hermite, int]:
    frames, pos = _read_keyframe_header(buf, pos)
    keyframes = []
    for frame in frames:
        value, pos = le_f32(buf, pos)
        interpolation, pos = le_f32(buf, pos)
        keyframes.append(Keyframe(frame, value, interpolation))
    return Hermite(keyframes), pos


def read_frame_data(buf: bytes, pos: int, ty: SetType) -> tuple[FrameData, int]:
    """Decode one track of type ``ty`` starting at ``pos``."""
    if ty == SetType.NONE:
        return NoData(), pos
    if ty == SetType.POSE:
        value, pos = le_f32(buf, pos)
        return Pose(value), pos
    if ty == SetType.CATMULL_ROM:
        return _read_catmull_rom(buf, pos)
    if ty == SetType.HERMITE:
        return _read_hermite(buf, pos)
    raise ValueError(f"Unknown set type: {ty}")


# ---------------------------------------------------------------------------
# Motions
# ---------------------------------------------------------------------------

def _read_info(buf: bytes, off: int) -> tuple[int, int]:
    pos = read_at(buf, off)
    try:
        count_and_flags, pos = le_u16(buf, pos)
        frames, pos = le_u16(buf, pos)
    except OutOfRange as e:
        raise ReadAtError(off, e) from e
    return count_and_flags & TRACK_COUNT_MASK, frames


def _read_bones(buf: bytes, off: int) -> list[int]:
    pos = read_at(buf, off)
    try:
        # Id 0 is a real bone the first time it shows up
        bones, _ = many_till_nth(buf, pos, le_u16, 0, 1)
    except OutOfRange as e:
        raise ReadAtError(off, e) from e
    return bones


def parse_motion(buf: bytes, offsets: HeaderOffsets) -> RawMotion:
    """Decode the motion located by one header record."""
    track_count, frames = _read_info(buf, offsets.info)
    set_types = _read_set_types(buf, offsets.set_types, track_count)

    if offsets.sets > len(buf):
        raise OobPointer(offsets.sets, len(buf))
    sets: list[FrameData] = []
    pos = offsets.sets
    for index, ty in enumerate(set_types):
        try:
            data, pos = read_frame_data(buf, pos, ty)
        except OutOfRange as e:
            raise FrameReadError(index, pos, e) from e
        sets.append(data)

    bones = _read_bones(buf, offsets.bones)

    log.debug(
        "Motion at %#x: %d sets, %d bones, %d frames",
        offsets.info, len(sets), len(bones), frames,
    )
    return RawMotion(sets=sets, bones=bones, frames=frames)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def read(buf: bytes) -> list[RawMotion]:
    """Decode every motion of an in-memory MOT file."""
    headers = parse_headers(buf)
    log.debug("Parsing %d motion headers", len(headers))
    motions: list[RawMotion] = []
    for index, header in enumerate(headers):
        try:
            motions.append(parse_motion(buf, header))
        except RawMotionError:
            log.error("Failed to parse motion %d (%s)", index, header)
            raise
    return motions


def parse(filepath: str | Path) -> list[RawMotion]:
    """Parse a MOT file and return its raw motions."""
    filepath = Path(filepath)
    buf = filepath.read_bytes()
    log.info("Parsing MOT: %s (%d bytes)", filepath.name, len(buf))

    motions = read(buf)

    log.info(
        "MOT parsed: %d motions, %d sets, %d bones",
        len(motions),
        sum(len(m.sets) for m in motions),
        sum(len(m.bones) for m in motions),
    )
    return motions
