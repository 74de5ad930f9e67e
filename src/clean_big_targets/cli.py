"""CLI interface for clean-big-targets."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from clean_big_targets.core.deletion import delete_targets, format_label, handle_deletion
from clean_big_targets.core.discovery import ScanError
from clean_big_targets.core.engine import TargetEngine
from clean_big_targets.core.prompt import ClickPrompt
from clean_big_targets.models.deletion_result import DELETED, NOTHING_TO_DELETE, UNAVAILABLE, DeletionResult
from clean_big_targets.models.target_dir import ScanReport, TargetDir
from clean_big_targets.settings import KNOWN_KEYS, Settings, SettingsError
from clean_big_targets.utils import bytes_to_human

ROOT_ENVVAR = "CLEAN_BIG_TARGETS_DIR"

_root_argument = click.argument(
    "root",
    default=".",
    envvar=ROOT_ENVVAR,
    type=click.Path(path_type=Path),
)


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _build_engine() -> TargetEngine:
    return TargetEngine(max_workers=Settings.instance().workers)


def _run_scan(root: Path) -> ScanReport:
    """Scan *root*, turning a fatal scan error into exit status 1."""
    try:
        report = _build_engine().scan(root)
    except ScanError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    for error in report.errors:
        click.echo(f"  {click.style('!', fg='yellow')} {error}", err=True)
    for target in report.targets:
        if target.errors:
            click.echo(
                f"  {click.style('!', fg='yellow')} {target.path}: "
                f"skipped {len(target.errors)} unreadable entr{'y' if len(target.errors) == 1 else 'ies'}",
                err=True,
            )
    return report


def _ordered(report: ScanReport, sort: str) -> list[TargetDir]:
    if sort == "path":
        return sorted(report.targets, key=lambda t: str(t.path))
    return report.sorted_by_size()


def _target_to_dict(target: TargetDir) -> dict:
    return {
        "path": str(target.path),
        "size_bytes": target.size_bytes,
        "file_count": target.file_count,
        "errors": list(target.errors),
    }


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
def main(verbose: int) -> None:
    """clean-big-targets: find and remove large build target directories."""
    _setup_logging(verbose)


# ── scan ─────────────────────────────────────────────────────────────────

@main.command()
@_root_argument
@click.option("--sort", type=click.Choice(["size", "path"]), default=None, help="Listing order")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def scan(root: Path, sort: str | None, as_json: bool) -> None:
    """List target directories and their sizes (preview only, never deletes)."""
    report = _run_scan(root)
    targets = _ordered(report, sort or Settings.instance().sort)

    if as_json:
        data = {
            "root": str(report.root),
            "total_bytes": report.total_bytes,
            "targets": [_target_to_dict(t) for t in targets],
            "errors": report.errors,
        }
        click.echo(json.dumps(data, indent=2))
        return

    if not targets:
        click.echo("No target directories found.")
        return

    click.echo(f"\n{'SIZE':>10}  PATH")
    click.echo("-" * 80)
    for target in targets:
        click.echo(format_label(target))
    click.echo("-" * 80)
    click.echo(f"{bytes_to_human(report.total_bytes):>10}  Total\n")


# ── clean ────────────────────────────────────────────────────────────────

@main.command()
@_root_argument
@click.option("--force", is_flag=True, help="Delete every target directory without prompting")
@click.option("--dry-run", is_flag=True, help="Show what would be offered without deleting")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def clean(root: Path, force: bool, dry_run: bool, as_json: bool) -> None:
    """Scan, then pick target directories to delete."""
    report = _run_scan(root)
    targets = _ordered(report, Settings.instance().sort)

    if dry_run:
        if as_json:
            data = {"status": "dry_run", "targets": [_target_to_dict(t) for t in targets]}
            click.echo(json.dumps(data, indent=2))
        elif not targets:
            click.echo("No target directories found.")
        else:
            for target in targets:
                click.echo(format_label(target))
            click.echo(f"\nTotal: {click.style(bytes_to_human(report.total_bytes), fg='green', bold=True)}")
            click.echo("(dry run, nothing was deleted)")
        return

    def on_result(target: TargetDir, error: str | None) -> None:
        if as_json:
            return
        if error:
            click.echo(f"  {click.style('✗', fg='red')} Failed to delete '{target.path}': {error}", err=True)
        else:
            click.echo(
                f"  {click.style('✓', fg='green')} Deleted '{target.path}' "
                f"({bytes_to_human(target.size_bytes)})"
            )

    if force:
        result = delete_targets(targets, on_result=on_result) if targets else DeletionResult(
            status=NOTHING_TO_DELETE, message="Nothing to delete."
        )
    else:
        result = handle_deletion(targets, ClickPrompt(), on_result=on_result)

    if as_json:
        data = {
            "status": result.status,
            "freed_bytes": result.freed_bytes,
            "deleted": [str(t.path) for t in result.deleted],
            "failed": [{"path": str(t.path), "error": err} for t, err in result.failed],
            "message": result.message,
        }
        click.echo(json.dumps(data, indent=2))
    elif result.status == DELETED:
        click.echo(f"\n{result.message}")
        click.echo(f"Total freed: {click.style(bytes_to_human(result.freed_bytes), fg='green', bold=True)}\n")
    else:
        click.echo(result.message, err=result.status == UNAVAILABLE)

    if not result.ok:
        sys.exit(1)


# ── config ───────────────────────────────────────────────────────────────

@main.group()
def config() -> None:
    """Settings management commands."""


@config.command("show")
def config_show() -> None:
    """Show effective settings."""
    settings = Settings.instance()
    click.echo(f"  {click.style('File:', bold=True)} {settings.path}")
    for key, value in settings.as_dict().items():
        click.echo(f"  {key:15s} {'(default)' if value is None else json.dumps(value)}")


@config.command("set")
@click.argument("key", type=click.Choice(sorted(KNOWN_KEYS)))
@click.argument("value")
def config_set(key: str, value: str) -> None:
    """Set KEY to VALUE (parsed as JSON when possible)."""
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        parsed = value

    try:
        Settings.instance().set(key, parsed)
    except SettingsError as exc:
        raise click.BadParameter(str(exc), param_hint="VALUE") from exc
    click.echo(f"{key} = {json.dumps(parsed)}")
