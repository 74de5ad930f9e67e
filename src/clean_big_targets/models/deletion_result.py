"""Deletion result dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field

from clean_big_targets.models.target_dir import TargetDir

NOTHING_TO_DELETE = "nothing_to_delete"
UNAVAILABLE = "unavailable"
CANCELLED = "cancelled"
NO_SELECTION = "no_selection"
DELETED = "deleted"


@dataclass(slots=True)
class DeletionResult:
    """Outcome of a deletion step.

    ``status`` is one of ``nothing_to_delete``, ``unavailable``,
    ``cancelled``, ``no_selection`` or ``deleted``. Only the last one
    means deletions were attempted; ``failed`` pairs each directory that
    could not be removed with the reason.
    """

    status: str
    deleted: list[TargetDir] = field(default_factory=list)
    failed: list[tuple[TargetDir, str]] = field(default_factory=list)
    message: str = ""

    @property
    def freed_bytes(self) -> int:
        return sum(t.size_bytes for t in self.deleted)

    @property
    def ok(self) -> bool:
        return not self.failed
