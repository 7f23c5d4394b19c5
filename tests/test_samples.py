"""Sample-file tests: run when the game files are present in tests/samples/.

mot_PV001.bin holds one motion; bone_data.json / mot_db.json are snapshots of
the matching databases.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from diva_mot.db import load_bone_db, load_mot_db
from diva_mot.mot import from_raw, parse, read, write

SAMPLES_DIR = Path(__file__).parent / "samples"
TEST_MOT = SAMPLES_DIR / "mot_PV001.bin"
MOT_DB = SAMPLES_DIR / "mot_db.json"
BONE_DB = SAMPLES_DIR / "bone_data.json"

pytestmark = pytest.mark.skipif(
    not TEST_MOT.exists(), reason=f"Sample MOT not found: {TEST_MOT}"
)


@pytest.fixture(scope="module")
def motions():
    return parse(TEST_MOT)


class TestSampleMot:
    def test_single_motion(self, motions):
        assert len(motions) == 1

    def test_counts(self, motions):
        mot = motions[0]
        assert len(mot.sets) == 583
        assert len(mot.bones) == 193
        assert mot.frames == 9301

    def test_round_trip(self, motions):
        assert read(write(motions)) == motions

    @pytest.mark.skipif(
        not (MOT_DB.exists() and BONE_DB.exists()),
        reason="Database snapshots not found",
    )
    def test_qualify(self, motions):
        mot = from_raw(motions[0], load_mot_db(MOT_DB), load_bone_db(BONE_DB))
        assert len(mot.anims) == 192
        assert sum(1 for a in mot.anims.values() if a is None) == 1
