"""Schema snapshots: the slices of the bone and motion databases the
qualifier needs.

Only the first skeleton of a bone database is ever consulted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class BoneKind(IntEnum):
    """How many 3-track groups a bone animates, and what they mean."""

    ROTATION = 0
    UNK = 1
    POSITION = 2
    POSITION_ROTATION = 3
    ROTATION_IK = 4
    ARM_IK = 5
    LEG_IK = 6

    @classmethod
    def parse(cls, value: int | str) -> BoneKind:
        if isinstance(value, str):
            try:
                return cls[value.upper()]
            except KeyError:
                raise ValueError(f"Unknown bone kind: {value!r}") from None
        return cls(value)


@dataclass()
class Bone:
    name: str
    kind: BoneKind = BoneKind.ROTATION


@dataclass()
class Skeleton:
    name: str = ""
    bones: list[Bone] = field(default_factory=list)

    def find(self, name: str) -> Bone | None:
        for bone in self.bones:
            if bone.name == name:
                return bone
        return None


@dataclass()
class BoneDatabase:
    skeletons: list[Skeleton] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> BoneDatabase:
        skeletons = []
        for sk in data.get("skeletons", []):
            bones = [
                Bone(name=b["name"], kind=BoneKind.parse(b.get("kind", 0)))
                for b in sk.get("bones", [])
            ]
            skeletons.append(Skeleton(name=sk.get("name", ""), bones=bones))
        return cls(skeletons=skeletons)


@dataclass()
class MotionSetDatabase:
    bones: list[str] = field(default_factory=list)  # indexed by motion bone id

    def name_of(self, bone_id: int) -> str | None:
        if 0 <= bone_id < len(self.bones):
            return self.bones[bone_id]
        return None

    def index_of(self, name: str) -> int | None:
        try:
            return self.bones.index(name)
        except ValueError:
            return None

    @classmethod
    def from_dict(cls, data: dict) -> MotionSetDatabase:
        return cls(bones=list(data.get("bones", [])))
