"""MOT error types.

All errors derive from ValueError so callers treating malformed input the
usual way keep working.  Structural errors abort the motion being parsed;
semantic errors come from qualification against the bone/motion databases.
"""

from __future__ import annotations


class MotError(ValueError):
    """Base class for every error raised by diva_mot.mot."""


# ---------------------------------------------------------------------------
# Structural (binary layout)
# ---------------------------------------------------------------------------

class RawMotionError(MotError):
    """The binary layout of a motion could not be decoded."""


class OutOfRange(RawMotionError):
    def __init__(self, want: int, left: int) -> None:
        self.want = want
        self.left = left
        super().__init__(
            f"Unexpected EOF. Wanted to read {want} bytes, {left} bytes left"
        )


class OobPointer(RawMotionError):
    def __init__(self, at: int, length: int) -> None:
        self.at = at
        self.len = length
        super().__init__(
            f"Unexpected EOF. Wanted to read at {at:#X} "
            f"but leftover input has len {length:#X}"
        )


class ReadAtError(RawMotionError):
    """A sub-parser failed while reading from a pointed-to offset."""

    def __init__(self, at: int, cause: RawMotionError) -> None:
        self.at = at
        self.cause = cause
        super().__init__(f"Failed to read at {at:#X}: {cause}")


class SetTypeReadError(RawMotionError):
    def __init__(self, at: int, want: int, left: int) -> None:
        self.at = at
        self.want = want
        self.left = left
        super().__init__(
            f"Unexpected EOF. Not enough bytes to read set types at {at:#X} "
            f"(wanted {want}, {left} left)"
        )


class FrameReadError(RawMotionError):
    def __init__(self, index: int, offset: int, cause: OutOfRange) -> None:
        self.index = index
        self.offset = offset
        self.cause = cause
        super().__init__(
            f"Failed to read the {index}th frame data at {offset}: {cause}"
        )


# ---------------------------------------------------------------------------
# Semantic (qualification)
# ---------------------------------------------------------------------------

class MotionQualifyError(MotError):
    """A raw motion does not fit the supplied databases."""


class NoSkeleton(MotionQualifyError):
    def __init__(self) -> None:
        super().__init__("Found no skeleton in bone database")


class PopSet(MotionQualifyError):
    def __init__(self, bone: str, needed: int, left: int) -> None:
        self.bone = bone
        self.needed = needed
        self.left = left
        super().__init__(
            f"Not enough sets for bone `{bone}`: needed {needed}, {left} left"
        )


class NotInMotDb(MotionQualifyError):
    def __init__(self, bone_id: int) -> None:
        self.bone_id = bone_id
        super().__init__(f"Bone id `{bone_id}` not in motion database")


class UnqualifyMotionError(MotError):
    """A qualified motion cannot be flattened back to raw form."""


class NotInDatabase(UnqualifyMotionError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Bone `{name}` not found in motion database")


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------

class MotWriteError(MotError):
    """A raw motion cannot be laid out in the binary format."""


class FieldOverflow(MotWriteError):
    def __init__(self, motion: int, field: str, value: object, limit: int) -> None:
        self.motion = motion
        self.field = field
        self.value = value
        self.limit = limit
        super().__init__(
            f"Motion {motion}: {field} = {value!r} does not fit (0..{limit})"
        )


class TrackWriteError(MotWriteError):
    def __init__(self, motion: int, index: int, cause: Exception) -> None:
        self.motion = motion
        self.index = index
        self.cause = cause
        super().__init__(
            f"Motion {motion}: failed to write the {index}th frame data: {cause}"
        )
