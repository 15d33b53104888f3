"""Command-line interface for cueline.

Operates on a JSON file holding an array of item records, e.g.
``[{"id": "k1", "globalIndex": 0, "trackId": "A", "data": {}}]``.
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
import sys
from typing import Any

from pydantic import TypeAdapter, ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cueline.core.config.loader import configure_logging, load_app_config
from cueline.core.config.models import AppConfig, LoggingConfig
from cueline.core.ordering import (
    ConflictError,
    OrderedItem,
    Placement,
    compute_order,
    insert_item,
    move_item,
    reindex,
)
from cueline.core.utils.logging import get_logger

console = Console()

_ITEMS_ADAPTER: TypeAdapter[list[OrderedItem]] = TypeAdapter(list[OrderedItem])


def load_items(path: Path) -> list[OrderedItem]:
    """Read and validate an items file."""
    with path.open("r", encoding="utf-8") as f:
        return _ITEMS_ADAPTER.validate_python(json.load(f))


def dump_items(items: list[OrderedItem]) -> list[dict[str, Any]]:
    """Convert items to their stored record layout."""
    return [item.to_json_object() for item in items]


def _emit(items: list[OrderedItem], out: str | None) -> None:
    records = dump_items(items)
    if out is None:
        console.print_json(data=records)
        return
    out_path = Path(out)
    out_path.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
    console.print(f"[green]Wrote {len(records)} items to[/green] {out_path}")


def render_groups(items: list[OrderedItem]) -> Table:
    """Build a table with one row per group, one column per track."""
    groups = compute_order(items)
    reindex(groups)

    tracks: list[str] = []
    for group in groups:
        for item in group:
            if item.track_id not in tracks:
                tracks.append(item.track_id)

    table = Table(title=f"{len(groups)} groups, {len(items)} items")
    table.add_column("Group", justify="right")
    for track_id in tracks:
        table.add_column(track_id)

    for rank, group in enumerate(groups):
        by_track = {item.track_id: item.id for item in group}
        table.add_row(str(rank), *(by_track.get(track_id, "") for track_id in tracks))
    return table


def cmd_order(args: argparse.Namespace, config: AppConfig) -> int:
    """Print the canonical order of an items file."""
    items = load_items(Path(args.items))
    console.print(render_groups(items))
    return 0


def cmd_move(args: argparse.Namespace, config: AppConfig) -> int:
    """Move one item and write the resulting collection."""
    items = load_items(Path(args.items))
    moved = move_item(items, args.id, args.to, args.placement, config=config.ordering)
    _emit(moved, args.out)
    return 0


def cmd_insert(args: argparse.Namespace, config: AppConfig) -> int:
    """Insert a new item and write the resulting collection."""
    items = load_items(Path(args.items))
    record = json.loads(args.item)
    if isinstance(record, dict):
        # Provisional index, overwritten by reindexing
        record = {"globalIndex": -1, "data": {}, **record}
    # Non-object records fail validation here
    new_item = OrderedItem.model_validate(record)

    inserted = insert_item(items, new_item, args.to, config=config.ordering)
    _emit(inserted, args.out)
    return 0


_COMMANDS = {
    "order": cmd_order,
    "move": cmd_move,
    "insert": cmd_insert,
}


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="cueline",
        description="cueline - order, move and insert timeline cue points",
    )
    p.add_argument(
        "--config",
        default=None,
        help="Path to app config (JSON or YAML, default: config.json if present)",
    )
    p.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the configured log level",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    order = sub.add_parser("order", help="Show the canonical group order")
    order.add_argument("items", help="Path to items JSON file")

    move = sub.add_parser("move", help="Move an item to another group")
    move.add_argument("items", help="Path to items JSON file")
    move.add_argument("--id", required=True, help="Id of the item to move")
    move.add_argument("--to", required=True, type=int, help="Destination group index")
    move.add_argument(
        "--placement",
        default=Placement.AT.value,
        choices=[placement.value for placement in Placement],
        help="Join the group (at) or follow it (after)",
    )
    move.add_argument("-o", "--out", default=None, help="Write result here instead of stdout")

    insert = sub.add_parser("insert", help="Insert a new item as its own group")
    insert.add_argument("items", help="Path to items JSON file")
    insert.add_argument(
        "--item",
        required=True,
        help='Item record as JSON, e.g. \'{"id": "k9", "trackId": "A"}\'',
    )
    insert.add_argument("--to", required=True, type=int, help="Destination group index")
    insert.add_argument("-o", "--out", default=None, help="Write result here instead of stdout")

    return p


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    p = build_arg_parser()
    args = p.parse_args(argv)

    config = load_app_config(args.config)
    if args.log_level:
        logging_config = LoggingConfig.model_validate(
            {**config.logging.model_dump(), "level": args.log_level}
        )
        config = config.model_copy(update={"logging": logging_config})
    configure_logging(config)

    cmd_logger = get_logger(__name__, command=args.cmd)
    cmd_logger.debug("Running %s", args.cmd)

    try:
        return _COMMANDS[args.cmd](args, config)
    except FileNotFoundError as e:
        console.print(f"[red]ERROR: File not found: {e.filename}[/red]")
    except (json.JSONDecodeError, ValidationError) as e:
        console.print(f"[red]ERROR: Invalid item data: {escape(str(e))}[/red]")
    except (ConflictError, IndexError) as e:
        console.print(f"[red]ERROR: {escape(str(e))}[/red]")
    cmd_logger.debug("Command %s failed", args.cmd)
    return 1


if __name__ == "__main__":
    sys.exit(main())
