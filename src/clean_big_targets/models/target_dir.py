"""Discovery and scan result dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(slots=True)
class DiscoveryResult:
    """Candidate ``target`` directories found under a scan root.

    ``errors`` holds one ``"<path>: <reason>"`` line per child that could
    not be inspected. Those children are skipped, not fatal.
    """

    root: Path
    paths: list[Path] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class TargetDir:
    """A candidate directory paired with its computed size."""

    path: Path
    size_bytes: int
    file_count: int = 0
    errors: tuple[str, ...] = ()


@dataclass(slots=True)
class ScanReport:
    """Result of discovering and sizing the targets under one root."""

    root: Path
    targets: list[TargetDir] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def total_bytes(self) -> int:
        return sum(t.size_bytes for t in self.targets)

    def sorted_by_size(self) -> list[TargetDir]:
        """Largest first; ties keep discovery order."""
        return sorted(self.targets, key=lambda t: t.size_bytes, reverse=True)
