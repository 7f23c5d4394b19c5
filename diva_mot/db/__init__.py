"""Bone and motion-set schema snapshots consumed by the qualifier."""

from .loader import load_bone_db, load_mot_db
from .types import Bone, BoneDatabase, BoneKind, MotionSetDatabase, Skeleton

__all__ = [
    "Bone",
    "BoneDatabase",
    "BoneKind",
    "MotionSetDatabase",
    "Skeleton",
    "load_bone_db",
    "load_mot_db",
]
