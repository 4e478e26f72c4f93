"""Command line access to a user's ordered location list."""
from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from weather_locations.config import load_config
from weather_locations.logging_setup import configure_logging
from weather_locations.models.location import MoveIntent, Notice
from weather_locations.persistence.journal import default_journal_root
from weather_locations.store.factory import build_store
from weather_locations.sync.controller import ListSyncController


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="weather-locations")
    parser.add_argument("--config", default="configs/config.yaml")
    parser.add_argument("--user", default=None, help="user id (defaults to session.user_id)")
    parser.add_argument("--offline", action="store_true", help="use an in-memory store")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list")

    add = sub.add_parser("add")
    add.add_argument("name")
    add.add_argument("--lat", type=float, default=None)
    add.add_argument("--lon", type=float, default=None)

    delete = sub.add_parser("delete")
    delete.add_argument("name")

    move = sub.add_parser("move")
    move.add_argument("index", type=int)
    move.add_argument("intent", choices=[intent.value for intent in MoveIntent])

    drag = sub.add_parser("drag")
    drag.add_argument("source", type=int)
    drag.add_argument("targets", type=int, nargs="+", help="rows the dragged row passes over, in order")

    sub.add_parser("health")
    return parser


def _print_sequence(names: List[str]) -> None:
    if not names:
        print("(no saved locations)")
        return
    for idx, name in enumerate(names):
        print(f"{idx}: {name}")


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    cfg = load_config(args.config)
    configure_logging(cfg)
    user_id = args.user or cfg.session.user_id
    if not user_id:
        print("Provide --user or set WEATHER_USER_ID", file=sys.stderr)
        return 2

    notices: List[Notice] = []
    controller = ListSyncController(
        build_store(cfg, offline=args.offline),
        user_id,
        journal_root=default_journal_root(cfg),
    )
    controller.subscribe_notices(notices.append)

    if args.command == "health":
        controller.check_health()
    else:
        controller.load()
        if args.command == "add":
            controller.add_location(args.name, args.lat, args.lon)
        elif args.command == "delete":
            controller.delete_location(args.name)
        elif args.command == "move":
            if not controller.request_move(args.index, args.intent):
                print(f"move {args.intent} is not available for row {args.index}", file=sys.stderr)
                return 1
        elif args.command == "drag":
            if not controller.begin_drag(args.source):
                print(f"cannot drag row {args.source}", file=sys.stderr)
                return 1
            for target in args.targets:
                controller.report_drag_over(target)
            controller.end_drag()
        _print_sequence(controller.current_sequence())

    for notice in notices:
        stream = sys.stderr if notice.level == "error" else sys.stdout
        print(f"[{notice.operation}] {notice.message}", file=stream)
    return 1 if any(notice.level == "error" for notice in notices) else 0


if __name__ == "__main__":
    sys.exit(main())
