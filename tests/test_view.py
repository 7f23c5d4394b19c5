"""Key-set view and summary tests."""

from __future__ import annotations

from diva_mot.mot.types import (
    CatmullRom,
    Hermite,
    Keyframe,
    LegIk,
    Motion,
    NoData,
    Pose,
    RawMotion,
    Rotation,
    Unk,
)
from diva_mot.mot.view import (
    KeyView,
    channels,
    describe_anim,
    describe_motion,
    describe_raw,
    describe_vec3,
    keyset,
)

_EMPTY = (NoData(), NoData(), NoData())


class TestKeyset:
    def test_none(self):
        assert keyset(NoData()) == []

    def test_pose_has_no_frame(self):
        assert keyset(Pose(2.0)) == [KeyView(None, 2.0, None)]

    def test_catmull_rom(self):
        data = CatmullRom([Keyframe(0, 1.0), Keyframe(5, 2.0)])
        assert keyset(data) == [KeyView(0, 1.0), KeyView(5, 2.0)]

    def test_hermite_keeps_tangent(self):
        data = Hermite([Keyframe(3, 1.0, 0.5)])
        assert keyset(data) == [KeyView(3, 1.0, 0.5)]


class TestChannels:
    def test_rotation(self):
        assert channels(Rotation(_EMPTY)) == {"rotation": _EMPTY}

    def test_leg_ik_roles(self):
        vec = (Pose(1.0), NoData(), NoData())
        anim = LegIk(position=vec, target=_EMPTY)
        assert channels(anim) == {"target": _EMPTY, "position": vec}

    def test_unk(self):
        assert list(channels(Unk(_EMPTY, _EMPTY))) == ["first", "second"]


class TestDescribe:
    def test_raw(self):
        raw = RawMotion(sets=[NoData()] * 6, bones=[0, 1], frames=9301)
        assert describe_raw(raw) == "RawMotion: 9301 frames, 6 sets, 2 bones"

    def test_motion(self):
        mot = Motion(frames=10, anims={"a": None, "b": Rotation(_EMPTY)})
        assert describe_motion(mot) == "Motion: 10 frames, 2 bone animations"

    def test_anim(self):
        assert describe_anim(None) == "BoneAnim: empty"
        anim = LegIk(position=_EMPTY, target=_EMPTY)
        assert describe_anim(anim) == "BoneAnim: target, position"

    def test_vec3(self):
        assert describe_vec3(_EMPTY) == "Vec3: empty"
        vec = (Pose(1.0), CatmullRom([]), Hermite([Keyframe(0, 1.0, 0.0)]))
        assert describe_vec3(vec) == "Vec3: x z"
