from __future__ import annotations

import struct

import pytest

from diva_mot.db.types import Bone, BoneDatabase, BoneKind, MotionSetDatabase, Skeleton


def make_sample_bytes() -> bytes:
    """One motion, four tracks, laid out exactly as the writer lays it out.

    tracks: Pose(1.0), NoData, CatmullRom[(0, 0.5), (30, 1.5)],
            Hermite[(0, 2.0, 0.25)]
    bones:  [3, 0]   frames: 120
    """
    buf = bytearray()
    # Header table: one record + terminator (0x00..0x20)
    buf.extend(struct.pack("<4I", 32, 36, 38, 68))
    buf.extend(b"\x00" * 16)
    # Info (0x20): track count, frames
    buf.extend(struct.pack("<HH", 4, 120))
    # Tags (0x24): POSE, NONE, CATMULL_ROM, HERMITE + 1 pad byte
    buf.append(0b11_10_00_01)
    buf.append(0)
    # Tracks (0x26)
    buf.extend(struct.pack("<f", 1.0))
    buf.extend(struct.pack("<3H", 2, 0, 30))
    buf.extend(struct.pack("<2f", 0.5, 1.5))
    buf.extend(struct.pack("<2H", 1, 0))
    buf.extend(struct.pack("<2f", 2.0, 0.25))
    # Bones (0x44): ids, terminator, pad to 4
    buf.extend(struct.pack("<3H", 3, 0, 0))
    buf.extend(b"\x00" * 2)
    assert len(buf) == 76
    return bytes(buf)


@pytest.fixture
def sample_bytes() -> bytes:
    return make_sample_bytes()


@pytest.fixture
def mot_db() -> MotionSetDatabase:
    # Ids follow name order so unqualifying keeps the file order
    return MotionSetDatabase(bones=[
        "a_rot",       # 0
        "b_pos",       # 1
        "c_leg",       # 2
        "d_arm",       # 3
        "e_unk",       # 4
        "f_posrot",    # 5
        "g_rotik",     # 6
        "gblctr",      # 7
        "kg_ya_ex",    # 8
        "zz_missing",  # 9
    ])


@pytest.fixture
def bone_db() -> BoneDatabase:
    return BoneDatabase(skeletons=[
        Skeleton(name="CMN", bones=[
            Bone("a_rot", BoneKind.ROTATION),
            Bone("b_pos", BoneKind.POSITION),
            Bone("c_leg", BoneKind.LEG_IK),
            Bone("d_arm", BoneKind.ARM_IK),
            Bone("e_unk", BoneKind.UNK),
            Bone("f_posrot", BoneKind.POSITION_ROTATION),
            Bone("g_rotik", BoneKind.ROTATION_IK),
        ]),
        # Never consulted
        Skeleton(name="OTHER", bones=[Bone("zz_missing", BoneKind.POSITION)]),
    ])
