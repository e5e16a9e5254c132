from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple
import os


@dataclass(frozen=True)
class WatchTarget:
    path: str
    provisional: bool = False


def find_last_file_like(pattern: str) -> Optional[str]:
    """
    Return the most recently modified file matching `pattern`, or None.

    `pattern` may be a literal file path, a directory (every file in it is a
    candidate) or a glob in the last path component. Equal modification
    times are broken by the greatest file name.
    """
    candidate = Path(pattern)
    if candidate.is_file():
        # an existing literal file wins, even with glob characters in its name
        return os.path.abspath(pattern)
    if candidate.is_dir():
        folder, name = candidate, "*"
    else:
        folder, name = candidate.parent, candidate.name or "*"
        if not folder.is_dir():
            return None

    ranked: List[Tuple[int, str, Path]] = []
    for entry in folder.glob(name):
        try:
            st = entry.stat()
        except OSError:
            # vanished between listing and stat
            continue
        if not entry.is_file():
            continue
        ranked.append((st.st_mtime_ns, entry.name, entry))

    if not ranked:
        return None
    _, _, newest = max(ranked, key=lambda r: (r[0], r[1]))
    # absolute but not resolved: a symlinked log keeps following its link
    return os.path.abspath(str(newest))


def resolve_target(pattern: str) -> WatchTarget:
    """Resolve once per session; a miss falls back to the literal path."""
    found = find_last_file_like(pattern)
    if found is None:
        return WatchTarget(path=os.path.abspath(pattern), provisional=True)
    return WatchTarget(path=found)
