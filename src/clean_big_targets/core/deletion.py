"""Interactive selection and removal of sized target directories."""

from __future__ import annotations

import logging
import shutil
from typing import Callable

from clean_big_targets.core.prompt import SelectionPrompt
from clean_big_targets.models.deletion_result import (
    CANCELLED,
    DELETED,
    NO_SELECTION,
    NOTHING_TO_DELETE,
    UNAVAILABLE,
    DeletionResult,
)
from clean_big_targets.models.target_dir import TargetDir
from clean_big_targets.utils import bytes_to_human

log = logging.getLogger(__name__)

# (target, error message or None on success)
DeletionCallback = Callable[[TargetDir, str | None], None]

PROMPT_MESSAGE = "Select target directories to delete"


def format_label(target: TargetDir) -> str:
    """Selection label: right-aligned size followed by the path."""
    return f"{bytes_to_human(target.size_bytes):>10}  {target.path}"


def handle_deletion(
    targets: list[TargetDir],
    prompt: SelectionPrompt,
    on_result: DeletionCallback | None = None,
) -> DeletionResult:
    """Ask the user which *targets* to delete, then delete them.

    Nothing is deleted unless the prompt is attached to a terminal and
    the user picks at least one entry.

    Args:
        targets: Sized directories, in presentation order.
        prompt: Terminal capability used to collect the selection.
        on_result: Optional callback fired after each deletion attempt.

    Returns:
        Summary of what was deleted and what failed.
    """
    if not targets:
        return DeletionResult(status=NOTHING_TO_DELETE, message="Nothing to delete.")

    if not prompt.is_terminal():
        log.info("Not attached to a terminal, skipping interactive deletion")
        return DeletionResult(
            status=UNAVAILABLE,
            message="Cannot prompt for deletion: not running in an interactive terminal.",
        )

    chosen = prompt.multi_select(PROMPT_MESSAGE, [format_label(t) for t in targets])
    if chosen is None:
        return DeletionResult(status=CANCELLED, message="Aborted.")

    indices = sorted({i for i in chosen if 0 <= i < len(targets)})
    if not indices:
        return DeletionResult(status=NO_SELECTION, message="No directories selected for deletion.")

    return delete_targets([targets[i] for i in indices], on_result=on_result)


def delete_targets(
    targets: list[TargetDir],
    on_result: DeletionCallback | None = None,
) -> DeletionResult:
    """Recursively remove each directory; one failure never stops the rest."""
    result = DeletionResult(status=DELETED)
    for target in targets:
        try:
            shutil.rmtree(target.path)
        except OSError as e:
            reason = str(e)
            log.warning("Failed to delete %s: %s", target.path, reason)
            result.failed.append((target, reason))
            if on_result:
                on_result(target, reason)
            continue
        log.info("Deleted %s (%s)", target.path, bytes_to_human(target.size_bytes))
        result.deleted.append(target)
        if on_result:
            on_result(target, None)

    result.message = (
        f"Deleted {len(result.deleted)} director{'y' if len(result.deleted) == 1 else 'ies'}, "
        f"freed {bytes_to_human(result.freed_bytes)}"
    )
    if result.failed:
        result.message += f", {len(result.failed)} failed"
    return result
