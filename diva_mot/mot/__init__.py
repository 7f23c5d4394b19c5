"""MOT motion codec: raw track layout, writer, and per-bone qualification."""

from .parser import parse, read
from .qualify import from_raw, to_raw
from .types import Motion, RawMotion
from .writer import save, write, write_all

__all__ = [
    "Motion",
    "RawMotion",
    "from_raw",
    "parse",
    "read",
    "save",
    "to_raw",
    "write",
    "write_all",
]
