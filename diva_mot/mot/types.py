"""MOT data model — dataclasses for raw and qualified motions.

A raw motion is exactly what the file stores: a flat list of tracks plus
the bone ids that consume them.  A qualified motion groups those tracks
into per-bone animations, named and shaped by the bone database.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Union


# ---------------------------------------------------------------------------
# Track types
# ---------------------------------------------------------------------------

class SetType(IntEnum):
    NONE = 0
    POSE = 1
    CATMULL_ROM = 2
    HERMITE = 3


@dataclass(frozen=True)
class Keyframe:
    frame: int
    value: float
    interpolation: float | None = None  # tangent, Hermite tracks only


@dataclass()
class NoData:
    """Track with no data (zero bytes on disk)."""


@dataclass()
class Pose:
    value: float


@dataclass()
class CatmullRom:
    """Keyframed track whose tangents are derived from the neighbouring keys.

    Only frame and value are stored; a key's ``interpolation`` is ignored
    by the writer (with a warning) and reads back as ``None``.
    """

    keyframes: list[Keyframe] = field(default_factory=list)


@dataclass()
class Hermite:
    keyframes: list[Keyframe] = field(default_factory=list)


FrameData = Union[NoData, Pose, CatmullRom, Hermite]

# x, y, z
Vec3 = tuple[FrameData, FrameData, FrameData]


def set_type_of(data: FrameData) -> SetType:
    if isinstance(data, NoData):
        return SetType.NONE
    if isinstance(data, Pose):
        return SetType.POSE
    if isinstance(data, CatmullRom):
        return SetType.CATMULL_ROM
    if isinstance(data, Hermite):
        return SetType.HERMITE
    raise TypeError(f"Not a frame data track: {data!r}")


# ---------------------------------------------------------------------------
# Raw motion
# ---------------------------------------------------------------------------

@dataclass()
class RawMotion:
    sets: list[FrameData] = field(default_factory=list)
    bones: list[int] = field(default_factory=list)  # motion database ids
    frames: int = 0


# ---------------------------------------------------------------------------
# Per-bone animations
# ---------------------------------------------------------------------------

@dataclass()
class Rotation:
    rotation: Vec3


@dataclass()
class Unk:
    first: Vec3
    second: Vec3


@dataclass()
class Position:
    position: Vec3


@dataclass()
class PositionRotation:
    position: Vec3
    rotation: Vec3


@dataclass()
class RotationIk:
    target: Vec3
    rotation: Vec3


@dataclass()
class ArmIk:
    target: Vec3
    rotation: Vec3


@dataclass()
class LegIk:
    position: Vec3
    target: Vec3


BoneAnim = Union[
    Rotation,
    Unk,
    Position,
    PositionRotation,
    RotationIk,
    ArmIk,
    LegIk,
]


# ---------------------------------------------------------------------------
# Qualified motion
# ---------------------------------------------------------------------------

@dataclass()
class Motion:
    """Per-bone animations keyed by bone name, in name order.

    A ``None`` value marks a bone referenced by the file that the bone
    database does not know about.
    """

    frames: int = 0
    anims: dict[str, BoneAnim | None] = field(default_factory=dict)
