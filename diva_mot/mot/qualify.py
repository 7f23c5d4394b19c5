"""Qualify raw motions into named per-bone animations, and back.

The file does not say which tracks belong to which bone.  The bone ids map
to names through the motion database, and each name's kind in the bone
database says how many 3-track groups to take off the front of the track
list.  The shape cannot be recovered from the data alone.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Mapping

from ..db.types import BoneDatabase, BoneKind, MotionSetDatabase
from .errors import NoSkeleton, NotInDatabase, NotInMotDb, PopSet
from .types import (
    ArmIk,
    BoneAnim,
    FrameData,
    LegIk,
    Motion,
    Position,
    PositionRotation,
    RawMotion,
    Rotation,
    RotationIk,
    Unk,
    Vec3,
)

log = logging.getLogger("diva_mot")

# Bones missing from some bone databases but present in motions
FALLBACK_KINDS: dict[str, BoneKind] = {
    "gblctr": BoneKind.POSITION,
    "kg_ya_ex": BoneKind.ROTATION,
}

_GROUPS: dict[BoneKind, int] = {
    BoneKind.ROTATION: 1,
    BoneKind.UNK: 2,
    BoneKind.POSITION: 1,
    BoneKind.POSITION_ROTATION: 2,
    BoneKind.ROTATION_IK: 2,
    BoneKind.ARM_IK: 2,
    BoneKind.LEG_IK: 2,
}


def _build_anim(kind: BoneKind, groups: list[Vec3]) -> BoneAnim:
    if kind == BoneKind.ROTATION:
        return Rotation(rotation=groups[0])
    if kind == BoneKind.UNK:
        return Unk(first=groups[0], second=groups[1])
    if kind == BoneKind.POSITION:
        return Position(position=groups[0])
    if kind == BoneKind.POSITION_ROTATION:
        return PositionRotation(position=groups[0], rotation=groups[1])
    if kind == BoneKind.ROTATION_IK:
        return RotationIk(target=groups[0], rotation=groups[1])
    if kind == BoneKind.ARM_IK:
        return ArmIk(target=groups[0], rotation=groups[1])
    if kind == BoneKind.LEG_IK:
        # Target is stored first
        return LegIk(target=groups[0], position=groups[1])
    raise ValueError(f"Unknown bone kind: {kind}")


def anim_groups(anim: BoneAnim) -> list[Vec3]:
    """Flatten an animation into its 3-track groups, in file order."""
    if isinstance(anim, Rotation):
        return [anim.rotation]
    if isinstance(anim, Unk):
        return [anim.first, anim.second]
    if isinstance(anim, Position):
        return [anim.position]
    if isinstance(anim, PositionRotation):
        return [anim.position, anim.rotation]
    if isinstance(anim, (RotationIk, ArmIk)):
        return [anim.target, anim.rotation]
    if isinstance(anim, LegIk):
        return [anim.target, anim.position]
    raise TypeError(f"Not a bone animation: {anim!r}")


def _pop_vec3(sets: deque[FrameData]) -> Vec3:
    return (sets.popleft(), sets.popleft(), sets.popleft())


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def from_raw(
    raw: RawMotion,
    mot_db: MotionSetDatabase,
    bone_db: BoneDatabase,
    fallbacks: Mapping[str, BoneKind] | None = None,
) -> Motion:
    """Group the tracks of ``raw`` into per-bone animations.

    Bones the bone database does not know are recorded as ``None`` and
    consume no tracks.
    """
    if not bone_db.skeletons:
        raise NoSkeleton()
    skeleton = bone_db.skeletons[0]
    if fallbacks is None:
        fallbacks = FALLBACK_KINDS

    sets: deque[FrameData] = deque(raw.sets)
    anims: dict[str, BoneAnim | None] = {}
    unresolved = 0

    for bone_id in raw.bones:
        name = mot_db.name_of(bone_id)
        if name is None:
            raise NotInMotDb(bone_id)

        bone = skeleton.find(name)
        if bone is not None:
            kind = bone.kind
        elif name in fallbacks:
            kind = fallbacks[name]
        else:
            log.warning("Bone `%s` not found in bone database, skipping", name)
            anims[name] = None
            unresolved += 1
            continue

        needed = 3 * _GROUPS[kind]
        if len(sets) < needed:
            raise PopSet(name, needed, len(sets))
        groups = [_pop_vec3(sets) for _ in range(_GROUPS[kind])]
        anims[name] = _build_anim(kind, groups)

    if sets:
        log.warning(
            "%d sets left over after qualifying %d bones", len(sets), len(raw.bones)
        )
    log.debug(
        "Qualified motion: %d bone animations (%d unresolved)", len(anims), unresolved
    )

    return Motion(frames=raw.frames, anims=dict(sorted(anims.items())))


def to_raw(motion: Motion, mot_db: MotionSetDatabase) -> RawMotion:
    """Flatten a qualified motion back into tracks and bone ids.

    Bones are emitted in name order, which need not match the order of the
    file the motion was read from.  ``None`` entries are dropped.
    """
    sets: list[FrameData] = []
    bones: list[int] = []
    for name in sorted(motion.anims):
        anim = motion.anims[name]
        if anim is None:
            continue
        index = mot_db.index_of(name)
        if index is None:
            raise NotInDatabase(name)
        for x, y, z in anim_groups(anim):
            sets.extend((x, y, z))
        bones.append(index)
    return RawMotion(sets=sets, bones=bones, frames=motion.frames)
