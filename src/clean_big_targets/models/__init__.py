"""Clean-big-targets data models."""

from clean_big_targets.models.target_dir import DiscoveryResult, ScanReport, TargetDir
from clean_big_targets.models.deletion_result import DeletionResult

__all__ = [
    "DeletionResult",
    "DiscoveryResult",
    "ScanReport",
    "TargetDir",
]
