"""Flattened views of motions for inspection and tooling.

Every track becomes a plain list of keys regardless of its kind, and every
bone animation becomes a role → group mapping.
"""

from __future__ import annotations

from dataclasses import dataclass

from .types import (
    ArmIk,
    BoneAnim,
    CatmullRom,
    FrameData,
    Hermite,
    LegIk,
    Motion,
    NoData,
    Pose,
    Position,
    PositionRotation,
    RawMotion,
    Rotation,
    RotationIk,
    Unk,
    Vec3,
)


@dataclass(frozen=True)
class KeyView:
    frame: int | None  # None for a constant pose
    value: float
    interpolation: float | None = None


def keyset(data: FrameData) -> list[KeyView]:
    if isinstance(data, NoData):
        return []
    if isinstance(data, Pose):
        return [KeyView(None, data.value)]
    if isinstance(data, (CatmullRom, Hermite)):
        return [KeyView(k.frame, k.value, k.interpolation) for k in data.keyframes]
    raise TypeError(f"Not a frame data track: {data!r}")


def channels(anim: BoneAnim) -> dict[str, Vec3]:
    """Map role names (position, rotation, target) to their groups."""
    if isinstance(anim, Rotation):
        return {"rotation": anim.rotation}
    if isinstance(anim, Unk):
        return {"first": anim.first, "second": anim.second}
    if isinstance(anim, Position):
        return {"position": anim.position}
    if isinstance(anim, PositionRotation):
        return {"position": anim.position, "rotation": anim.rotation}
    if isinstance(anim, (RotationIk, ArmIk)):
        return {"target": anim.target, "rotation": anim.rotation}
    if isinstance(anim, LegIk):
        return {"target": anim.target, "position": anim.position}
    raise TypeError(f"Not a bone animation: {anim!r}")


# ---------------------------------------------------------------------------
# One-line summaries
# ---------------------------------------------------------------------------

def describe_raw(raw: RawMotion) -> str:
    return (
        f"RawMotion: {raw.frames} frames, {len(raw.sets)} sets, "
        f"{len(raw.bones)} bones"
    )


def describe_motion(motion: Motion) -> str:
    return f"Motion: {motion.frames} frames, {len(motion.anims)} bone animations"


def describe_anim(anim: BoneAnim | None) -> str:
    if anim is None:
        return "BoneAnim: empty"
    return "BoneAnim: " + ", ".join(channels(anim))


def describe_vec3(vec: Vec3) -> str:
    axes = [axis for axis, data in zip("xyz", vec) if keyset(data)]
    return "Vec3: " + (" ".join(axes) or "empty")
