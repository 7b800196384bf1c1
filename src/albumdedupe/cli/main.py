"""Command-line interface for albumdedupe.

Provides CLI commands for scanning, merging and reviewing catalog duplicates.
"""

import importlib.metadata
import json
import sys
from pathlib import Path
from typing import Any

import click

from albumdedupe.api import (
    audit_manual_albums,
    check_similar,
    mark_distinct,
    merge_albums,
    merge_manual_album,
    scan_duplicates,
)
from albumdedupe.audit import AuditLogger, generate_run_id
from albumdedupe.engine import EngineConfig
from albumdedupe.errors import DedupeError
from albumdedupe.review import ManualReviewSession, ReviewSession
from albumdedupe.store import CatalogStore

__all__ = ["cli"]

try:
    __version__ = importlib.metadata.version("albumdedupe")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.1.0"  # Fallback for development


@click.group()
@click.version_option(version=__version__, prog_name="albumdedupe")
@click.option(
    "--db",
    type=click.Path(dir_okay=False),
    default="catalog.db",
    envvar="ALBUMDEDUPE_DB",
    show_default=True,
    help="SQLite catalog database",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="JSON engine configuration file",
)
@click.option(
    "--log",
    "log_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Append JSONL audit events to this file",
)
@click.pass_context
def cli(ctx: click.Context, db: str, config_path: str | None, log_path: str | None) -> None:
    """Find and resolve duplicate albums in a shared catalog.

    Use 'albumdedupe COMMAND --help' for command-specific help.
    """
    try:
        config = EngineConfig.from_file(config_path) if config_path else EngineConfig()
    except DedupeError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)

    ctx.ensure_object(dict)
    ctx.obj["db"] = db
    ctx.obj["config"] = config
    ctx.obj["log_path"] = log_path


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _open_store(ctx: click.Context) -> CatalogStore:
    store = CatalogStore(ctx.obj["db"])
    ctx.call_on_close(store.close)
    return store


def _open_logger(ctx: click.Context) -> AuditLogger | None:
    if not ctx.obj["log_path"]:
        return None
    logger = AuditLogger(generate_run_id(), Path(ctx.obj["log_path"]))
    ctx.call_on_close(logger.close)
    return logger


def _fail(e: DedupeError) -> None:
    click.secho(f"✗ Error: {e}", fg="red", err=True)
    sys.exit(1)


def _echo_json(data: dict[str, Any]) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _label(album: Any) -> str:
    return f"{album.artist or '?'} - {album.title or '?'} [{album.album_id}]"


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@cli.command()
@click.option(
    "--sensitivity",
    "-s",
    type=float,
    default=None,
    help="Scan sensitivity, clamped into [0.03, 0.5] (default: 0.10)",
)
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.pass_context
def scan(ctx: click.Context, sensitivity: float | None, as_json: bool) -> None:
    """Scan the catalog for potential duplicate albums.

    Examples
    --------
        albumdedupe --db catalog.db scan
        albumdedupe scan --sensitivity 0.2 --json
    """
    config: EngineConfig = ctx.obj["config"]
    try:
        result = scan_duplicates(
            _open_store(ctx), sensitivity, config=config, logger=_open_logger(ctx)
        )
    except DedupeError as e:
        _fail(e)
        return

    if as_json:
        _echo_json(result.to_dict())
        return

    click.echo(
        f"Scanned {result.total_records} albums at sensitivity {result.sensitivity:.2f} "
        f"({result.excluded_pair_count} distinct pairs excluded)"
    )
    for pair in result.pairs:
        marker = " [auto]" if pair.should_auto_merge else ""
        click.echo(
            f"  {pair.confidence:.0%}{marker}  "
            f"{_label(pair.album_a)}  <->  {_label(pair.album_b)}"
        )
    if result.truncated:
        click.echo(f"  ... showing {len(result.pairs)} of {result.total_matches} matches")
    click.secho(f"✓ Found {result.total_matches} potential duplicates", fg="green")


@cli.command()
@click.argument("keep_id")
@click.argument("delete_id")
@click.option("--no-fuse", is_flag=True, help="Do not copy missing fields from DELETE_ID")
@click.pass_context
def merge(ctx: click.Context, keep_id: str, delete_id: str, no_fuse: bool) -> None:
    """Merge album DELETE_ID into KEEP_ID.

    List references move to KEEP_ID and DELETE_ID is removed.
    """
    try:
        result = merge_albums(
            _open_store(ctx),
            keep_id,
            delete_id,
            fuse_fields=not no_fuse,
            logger=_open_logger(ctx),
        )
    except DedupeError as e:
        _fail(e)
        return

    fused = f", adopted {', '.join(result.fields_merged)}" if result.fields_merged else ""
    click.secho(
        f"✓ Merged {delete_id} into {keep_id} "
        f"({result.list_items_updated} list items updated{fused})",
        fg="green",
    )


@cli.command("mark-distinct")
@click.argument("album_id_a")
@click.argument("album_id_b")
@click.option("--by", "created_by", default=None, help="Reviewer recorded on the pair")
@click.pass_context
def mark_distinct_cmd(
    ctx: click.Context, album_id_a: str, album_id_b: str, created_by: str | None
) -> None:
    """Record that two albums are not duplicates."""
    try:
        created = mark_distinct(
            _open_store(ctx), album_id_a, album_id_b, created_by, logger=_open_logger(ctx)
        )
    except DedupeError as e:
        _fail(e)
        return

    if created:
        click.secho(f"✓ Marked {album_id_a} and {album_id_b} as distinct", fg="green")
    else:
        click.echo(f"{album_id_a} and {album_id_b} were already marked distinct")


@cli.command("audit-manual")
@click.option("--threshold", type=float, default=None, help="Match threshold (default: 0.15)")
@click.option("--max-matches", type=int, default=None, help="Matches per manual album (default: 5)")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.pass_context
def audit_manual(
    ctx: click.Context, threshold: float | None, max_matches: int | None, as_json: bool
) -> None:
    """Audit manually-entered albums against the canonical catalog."""
    try:
        result = audit_manual_albums(
            _open_store(ctx),
            threshold,
            max_matches,
            config=ctx.obj["config"],
            logger=_open_logger(ctx),
        )
    except DedupeError as e:
        _fail(e)
        return

    if as_json:
        _echo_json(result.to_dict())
        return

    for entry in result.entries:
        used = f" (in {len(entry.used_in)} lists)" if entry.used_in else ""
        click.echo(f"{entry.artist or '?'} - {entry.title or '?'} [{entry.manual_id}]{used}")
        for match in entry.matches:
            click.echo(
                f"    {match.confidence:.0%}  {match.artist} - {match.title} [{match.album_id}]"
            )
    for issue in result.integrity_issues:
        click.secho(f"! [{issue.severity}] {issue.description}", fg="yellow")
    click.secho(
        f"✓ {result.total_manual} manual albums, {result.total_with_matches} with matches",
        fg="green",
    )


@cli.command("merge-manual")
@click.argument("manual_id")
@click.argument("canonical_id")
@click.option("--no-sync", is_flag=True, help="Do not copy missing fields to CANONICAL_ID")
@click.pass_context
def merge_manual(ctx: click.Context, manual_id: str, canonical_id: str, no_sync: bool) -> None:
    """Merge manual album MANUAL_ID into canonical album CANONICAL_ID."""
    try:
        result = merge_manual_album(
            _open_store(ctx),
            manual_id,
            canonical_id,
            sync_metadata=not no_sync,
            config=ctx.obj["config"],
            logger=_open_logger(ctx),
        )
    except DedupeError as e:
        _fail(e)
        return

    click.secho(
        f"✓ Merged {manual_id} into {canonical_id} "
        f"({len(result.affected_lists)} lists updated)",
        fg="green",
    )


@cli.command()
@click.argument("artist")
@click.argument("title")
@click.option("--album-id", default=None, help="ID of the album if already stored")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.pass_context
def check(
    ctx: click.Context, artist: str, title: str, album_id: str | None, as_json: bool
) -> None:
    """Check whether ARTIST / TITLE already exists in the catalog.

    Examples
    --------
        albumdedupe check "Pink Floyd" "Dark Side of the Moon"
    """
    try:
        result = check_similar(
            _open_store(ctx), artist, title, album_id, config=ctx.obj["config"]
        )
    except DedupeError as e:
        _fail(e)
        return

    if as_json:
        _echo_json(result.to_dict())
        return

    if not result.has_similar:
        click.secho("✓ No similar albums found", fg="green")
        return
    for pair in result.matches:
        click.echo(f"  {pair.confidence:.0%}  {_label(pair.album_b)}")
    if result.should_auto_merge:
        click.secho("Best match is confident enough to reuse", fg="yellow")


@cli.command()
@click.option("--sensitivity", "-s", type=float, default=None, help="Scan sensitivity")
@click.option("--reviewer", default=None, help="Name recorded on distinct pairs")
@click.option("--manual", is_flag=True, help="Review manual albums instead of scan pairs")
@click.pass_context
def review(
    ctx: click.Context, sensitivity: float | None, reviewer: str | None, manual: bool
) -> None:
    """Interactively arbitrate potential duplicates one at a time.

    For scan pairs: [l]eft keeps the left album, [r]ight keeps the right,
    [d]istinct marks the pair as different albums, [s]kip moves on and
    [q]uit stops the session.
    """
    config: EngineConfig = ctx.obj["config"]
    try:
        store = _open_store(ctx)
        logger = _open_logger(ctx)
        if manual:
            audit = audit_manual_albums(store, config=config, logger=logger)
            session: ReviewSession | ManualReviewSession = ManualReviewSession.from_audit(
                audit, manual_prefix=config.manual_prefix, reviewer=reviewer, logger=logger
            )
        else:
            result = scan_duplicates(store, sensitivity, config=config, logger=logger)
            session = ReviewSession.from_scan(result, reviewer=reviewer, logger=logger)
        session.start()

        while session.current is not None:
            if isinstance(session, ManualReviewSession):
                keep_going = _review_manual_entry(session, store)
            else:
                keep_going = _review_pair(session, store)
            if not keep_going:
                break
    except DedupeError as e:
        _fail(e)
        return

    progress = session.progress()
    click.secho(
        f"✓ Reviewed: {progress['resolved']} resolved, {progress['skipped']} skipped, "
        f"{progress['stale']} stale, {progress['remaining']} remaining",
        fg="green",
    )


def _review_pair(session: ReviewSession, store: CatalogStore) -> bool:
    pair = session.current
    diff = session.current_diff
    click.echo("")
    click.echo(f"[{pair.confidence:.0%}] L: {_label(pair.album_a)}")
    click.echo(f"       R: {_label(pair.album_b)}")
    for field_diff in diff.fields:
        if field_diff.differs:
            click.echo(f"    {field_diff.name}: {field_diff.left!r} vs {field_diff.right!r}")

    choice = click.prompt(
        "Action", type=click.Choice(["l", "r", "d", "s", "q"]), default="s"
    )
    if choice == "q":
        return False
    if choice == "l":
        outcome = session.keep_left(store)
    elif choice == "r":
        outcome = session.keep_right(store)
    elif choice == "d":
        outcome = session.mark_distinct(store)
    else:
        outcome = session.skip()
    if not outcome.success:
        click.secho(f"✗ {outcome.message}", fg="red", err=True)
    return True


def _review_manual_entry(session: ManualReviewSession, store: CatalogStore) -> bool:
    entry = session.current
    click.echo("")
    click.echo(f"Manual: {entry.artist or '?'} - {entry.title or '?'} [{entry.manual_id}]")
    for number, match in enumerate(entry.matches, start=1):
        click.echo(
            f"  {number}. {match.confidence:.0%}  {match.artist} - {match.title} [{match.album_id}]"
        )

    choice = click.prompt(
        "Action ([m]erge, [d]istinct, [s]kip, [q]uit)",
        type=click.Choice(["m", "d", "s", "q"]),
        default="s",
    )
    if choice == "q":
        return False
    if choice == "s":
        session.skip()
        return True

    number = click.prompt(
        "Match number", type=click.IntRange(1, len(entry.matches)), default=1
    )
    canonical_id = entry.matches[number - 1].album_id
    if choice == "m":
        outcome = session.merge_into(canonical_id, store)
    else:
        outcome = session.mark_distinct(canonical_id, store)
    if not outcome.success:
        click.secho(f"✗ {outcome.message}", fg="red", err=True)
    return True


if __name__ == "__main__":
    cli()
