#!/usr/bin/env python3
"""Check that MOT files survive a parse → write → parse round trip.

Usage:
    python scripts/roundtrip_check.py [--mot-db mot_db.json --bone-db bone_db.json] mot_file ...

Reports, per file, whether the re-read motions equal the originals and
whether the rewritten bytes equal the input bytes.  With both database
snapshots given, each motion is also qualified and the number of named
bone animations printed.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Add parent to path so we can import the package
sys.path.insert(0, str(Path(__file__).parent.parent))

from diva_mot.db import load_bone_db, load_mot_db
from diva_mot.mot import from_raw, read, write
from diva_mot.mot.errors import MotError
from diva_mot.mot.view import describe_motion, describe_raw


def check(filepath: Path, mot_db=None, bone_db=None) -> bool:
    print(f"\n{'='*60}")
    print(f" {filepath.name}")
    print(f"{'='*60}")

    data = filepath.read_bytes()
    try:
        motions = read(data)
    except MotError as e:
        print(f"  PARSE FAILED: {e}")
        return False

    for i, mot in enumerate(motions):
        print(f"  [{i}] {describe_raw(mot)}")
        if mot_db is not None and bone_db is not None:
            qual = from_raw(mot, mot_db, bone_db)
            unresolved = sum(1 for a in qual.anims.values() if a is None)
            print(f"      {describe_motion(qual)} ({unresolved} unresolved)")

    out = write(motions)
    again = read(out)
    same = again == motions
    identical = out == data
    print(f"\n  STRUCTURE: {'OK' if same else 'MISMATCH'}")
    print(f"  BYTES:     {'OK' if identical else 'DIFF'} "
          f"(in={len(data)}, out={len(out)})")
    return same


def main():
    args = sys.argv[1:]
    mot_db = bone_db = None
    if "--mot-db" in args:
        i = args.index("--mot-db")
        mot_db = load_mot_db(args[i + 1])
        del args[i : i + 2]
    if "--bone-db" in args:
        i = args.index("--bone-db")
        bone_db = load_bone_db(args[i + 1])
        del args[i : i + 2]

    if not args:
        print(__doc__, file=sys.stderr)
        sys.exit(1)

    ok = True
    for f in args:
        ok &= check(Path(f), mot_db, bone_db)

    print("\nDone.")
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
