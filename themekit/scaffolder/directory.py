"""Target directory inspection and reconciliation.

Inspection is read-only and happens before any question is asked.  The
destructive half (``apply_disposition``) only runs once the user has
confirmed the whole configuration.  The directory is not re-checked in
between: if something else modifies it meanwhile, the generator works with
whatever is there at write time.
"""

from __future__ import annotations

import asyncio
import shutil
from enum import Enum
from pathlib import Path

from themekit.config import DirectoryDisposition
from themekit.utils import console, print_warning


class DirectoryStatus(str, Enum):
    ABSENT = "absent"
    EMPTY = "empty"
    NON_EMPTY = "non_empty"

    @property
    def is_empty(self) -> bool:
        """Absent and empty directories are handled identically."""
        return self is not DirectoryStatus.NON_EMPTY


def inspect_directory(path: str | Path) -> DirectoryStatus:
    """Classify the target directory without modifying it.

    A missing directory is ``ABSENT``.  Any other read failure is reported
    and treated as ``NON_EMPTY`` so the user is asked what to do instead of
    having files silently written into an unknown location.
    """
    target = Path(path)
    try:
        entries = list(target.iterdir())
    except FileNotFoundError:
        return DirectoryStatus.ABSENT
    except OSError as exc:
        print_warning(f"Could not read {target}: {exc}")
        console.print("Continuing...")
        return DirectoryStatus.NON_EMPTY
    return DirectoryStatus.NON_EMPTY if entries else DirectoryStatus.EMPTY


async def apply_disposition(
    disposition: DirectoryDisposition | None, path: str | Path
) -> None:
    """Carry out the disposition chosen for a non-empty directory.

    ``CLEAN`` removes the directory tree; ``IGNORE`` (and no disposition at
    all) leaves it untouched so later writes overwrite individual files.

    Raises:
        ValueError: For ``EXIT``, which must be handled as an abort before
            generation starts.
    """
    if disposition is DirectoryDisposition.EXIT:
        raise ValueError("Exit disposition reached the write phase")
    if disposition is DirectoryDisposition.CLEAN:
        target = Path(path)
        if target.exists():
            await asyncio.to_thread(shutil.rmtree, target)
