"""Locate build ``target`` directories directly beneath a scan root."""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

from clean_big_targets.models.target_dir import DiscoveryResult

log = logging.getLogger(__name__)

TARGET_DIR_NAME = "target"


class ScanError(Exception):
    """The scan root is missing, not a directory, or cannot be listed."""


def find_target_dirs(root: Path | str) -> DiscoveryResult:
    """Find the ``target`` directories belonging to *root*.

    A root that is itself named ``target``, either as given or once
    symlinks are resolved, is returned as the only candidate and its
    children are not inspected. Otherwise each immediate child directory
    is checked in name order: a child named ``target`` is a candidate,
    and so is ``<child>/target`` for a project living directly under the
    root. Symbolic links below the root are never followed.

    Raises:
        ScanError: if the root cannot be resolved or listed.
    """
    given = Path(root).absolute()
    try:
        root = given.resolve(strict=True)
    except OSError as e:
        raise ScanError(f"Scan root does not exist: {given} ({e.strerror or e})") from e
    if not root.is_dir():
        raise ScanError(f"Scan root is not a directory: {root}")

    result = DiscoveryResult(root=root)
    if TARGET_DIR_NAME in (given.name, root.name):
        log.debug("Scan root is itself a target directory: %s", root)
        result.paths.append(root)
        return result

    try:
        with os.scandir(root) as it:
            children = sorted(it, key=lambda entry: entry.name)
    except OSError as e:
        raise ScanError(f"Cannot read scan root {root}: {e.strerror or e}") from e

    for child in children:
        try:
            if not child.is_dir(follow_symlinks=False):
                continue
            if child.name == TARGET_DIR_NAME:
                candidate = Path(child.path)
            else:
                candidate = Path(child.path) / TARGET_DIR_NAME
                if not _is_plain_dir(candidate):
                    continue
        except OSError as e:
            log.debug("Cannot inspect %s: %s", child.path, e)
            result.errors.append(f"{child.path}: {e.strerror or e}")
            continue

        log.debug("Found target directory: %s", candidate)
        result.paths.append(candidate)

    return result


def _is_plain_dir(path: Path) -> bool:
    """True for a real directory, False for a symlink or a missing path."""
    try:
        mode = path.lstat().st_mode
    except (FileNotFoundError, NotADirectoryError):
        return False
    return stat.S_ISDIR(mode)
