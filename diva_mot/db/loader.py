"""Load bone / motion-set database snapshots from JSON.

Bone database::

    {"skeletons": [{"name": "CMN", "bones": [{"name": "n_hara", "kind": 2}]}]}

``kind`` may be the integer value or the BoneKind name.

Motion-set database::

    {"bones": ["n_hara_cp", "kg_hara_y", ...]}
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .types import BoneDatabase, MotionSetDatabase

log = logging.getLogger("diva_mot")


def _load_json(filepath: str | Path) -> dict:
    filepath = Path(filepath)
    data = json.loads(filepath.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {filepath.name}")
    return data


def load_bone_db(filepath: str | Path) -> BoneDatabase:
    db = BoneDatabase.from_dict(_load_json(filepath))
    log.info(
        "Loaded bone database: %s (%d skeletons)", Path(filepath).name, len(db.skeletons)
    )
    return db


def load_mot_db(filepath: str | Path) -> MotionSetDatabase:
    db = MotionSetDatabase.from_dict(_load_json(filepath))
    log.info("Loaded motion database: %s (%d bones)", Path(filepath).name, len(db.bones))
    return db
