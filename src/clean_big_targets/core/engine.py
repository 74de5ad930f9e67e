"""Discovery and sizing orchestration engine."""

from __future__ import annotations

import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable

from clean_big_targets.core.discovery import find_target_dirs
from clean_big_targets.core.sizing import measure_target
from clean_big_targets.models.target_dir import ScanReport, TargetDir
from clean_big_targets.utils import format_elapsed

log = logging.getLogger(__name__)

ProgressCallback = Callable[[Path, str], None]  # (path, status)


class TargetEngine:
    """Finds target directories under a root and sizes them in parallel."""

    def __init__(self, max_workers: int | None = None) -> None:
        self.max_workers = max_workers or os.cpu_count() or 1

    def scan(
        self,
        root: Path | str,
        on_progress: ProgressCallback | None = None,
    ) -> ScanReport:
        """Discover and size the target directories belonging to *root*.

        Discovery runs first and on its own; a ``ScanError`` from it
        propagates before any sizing starts. Candidates are then sized on
        a pool of ``max_workers`` threads. Results are collected by
        position so the report keeps discovery order.

        Args:
            root: Directory to scan.
            on_progress: Optional callback fired with ``sizing``, ``done``
                or ``error`` for each candidate.

        Returns:
            Sized targets plus every per-entry error met on the way.
        """
        started = time.monotonic()
        discovery = find_target_dirs(root)
        report = ScanReport(root=discovery.root, errors=list(discovery.errors))
        log.debug("Found %d target directories under %s", len(discovery.paths), discovery.root)

        if not discovery.paths:
            return report

        def _measure(path: Path) -> TargetDir | str:
            if on_progress:
                on_progress(path, "sizing")
            try:
                target = measure_target(path)
            except OSError as e:
                log.warning("Cannot size %s: %s", path, e.strerror or e)
                if on_progress:
                    on_progress(path, "error")
                return f"{path}: {e.strerror or e}"
            if on_progress:
                on_progress(path, "done")
            return target

        workers = min(self.max_workers, len(discovery.paths))
        if workers > 1:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                outcomes = list(executor.map(_measure, discovery.paths))
        else:
            outcomes = [_measure(path) for path in discovery.paths]

        for outcome in outcomes:
            if isinstance(outcome, TargetDir):
                report.targets.append(outcome)
            else:
                report.errors.append(outcome)

        log.debug(
            "Sized %d directories (%d workers) in %s",
            len(report.targets),
            workers,
            format_elapsed(time.monotonic() - started),
        )
        return report
