"""Recursive disk usage of candidate directories."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from clean_big_targets.models.target_dir import TargetDir

log = logging.getLogger(__name__)


def calculate_dir_size(path: Path | str) -> int:
    """Calculate total size of a directory tree.

    Unreadable parts are skipped, so the result is a best-effort lower
    bound and never raises.
    """
    total, _count, _errors = _walk(path, strict=False)
    return total


def measure_target(path: Path | str) -> TargetDir:
    """Size a candidate directory, attaching the subtrees that were skipped.

    Raises:
        OSError: if *path* itself can no longer be opened.
    """
    total, count, errors = _walk(path, strict=True)
    if errors:
        log.debug("Skipped %d unreadable entries under %s", len(errors), path)
    return TargetDir(path=Path(path), size_bytes=total, file_count=count, errors=tuple(errors))


def _walk(path: Path | str, *, strict: bool) -> tuple[int, int, list[str]]:
    """Walk a directory tree using os.scandir.

    Only regular files count. Symlinks are neither followed nor counted.

    Returns:
        (total_bytes, file_count, errors) tuple.
    """
    total = 0
    count = 0
    errors: list[str] = []
    stack: list[Path | str] = [path]
    first = True
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as it:
                for entry in it:
                    try:
                        if entry.is_file(follow_symlinks=False):
                            total += entry.stat(follow_symlinks=False).st_size
                            count += 1
                        elif entry.is_dir(follow_symlinks=False):
                            stack.append(entry.path)
                    except OSError as e:
                        errors.append(f"{entry.path}: {e.strerror or e}")
        except OSError as e:
            if first and strict:
                raise
            errors.append(f"{current}: {e.strerror or e}")
        first = False
    return total, count, errors
