"""Interactive multi-select capability used by the deletion step."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod

import click


class SelectionPrompt(ABC):
    """Terminal capability: detect interactivity and collect a selection."""

    @abstractmethod
    def is_terminal(self) -> bool:
        """Whether a user can be prompted right now."""

    @abstractmethod
    def multi_select(self, message: str, labels: list[str]) -> list[int] | None:
        """Let the user pick any number of *labels*.

        Returns the chosen zero-based indices, or None if the user
        cancelled the prompt.
        """


class ClickPrompt(SelectionPrompt):
    """Numbered-list selection read with ``click.prompt``."""

    def is_terminal(self) -> bool:
        return sys.stdin.isatty() and sys.stderr.isatty()

    def multi_select(self, message: str, labels: list[str]) -> list[int] | None:
        # Same stream is_terminal() checks, so a redirected stdout hides nothing.
        click.echo(f"\n{message} (numbers or ranges, comma-separated; 'all' for everything):\n", err=True)
        for i, label in enumerate(labels, 1):
            click.echo(f"  [{i:>2}] {label}", err=True)
        click.echo(err=True)
        try:
            raw = click.prompt("Selection", default="", show_default=False, err=True)
        except click.Abort:
            return None
        return parse_selection(raw, len(labels))


def parse_selection(raw: str, count: int) -> list[int]:
    """Parse ``"1,3-5"`` style input into zero-based indices.

    Unknown tokens and out-of-range numbers are ignored.
    """
    raw = raw.strip().lower()
    if not raw:
        return []
    if raw in ("a", "all"):
        return list(range(count))

    selected: list[int] = []
    for part in raw.split(","):
        part = part.strip()
        start, sep, end = part.partition("-")
        if sep and start.strip().isdigit() and end.strip().isdigit():
            numbers = range(int(start), int(end) + 1)
        elif part.isdigit():
            numbers = range(int(part), int(part) + 1)
        else:
            continue
        for number in numbers:
            idx = number - 1
            if 0 <= idx < count and idx not in selected:
                selected.append(idx)
    return selected
