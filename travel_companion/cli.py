"""travel-companion operator console."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv

from travel_companion.application import itinerary_service, user_service
from travel_companion.application.context import AppContext, make_app_context
from travel_companion.application.contracts import ItineraryView, MoveCommand
from travel_companion.domain.exceptions import DomainError
from travel_companion.services.itinerary_presenter import present_itinerary


def _format_itinerary(view: ItineraryView) -> str:
    lines: list[str] = []
    for day in view.days:
        lines.append(f"Day {day.day_number} ({day.date.isoformat()})")
        if not day.items:
            lines.append("  -")
        for item in day.items:
            lines.append(f"  [{item.id}] {item.place_name}" + (f"  ({item.notes})" if item.notes else ""))
    lines.append(view.places_to_visit.label)
    if not view.places_to_visit.items:
        lines.append("  -")
    for item in view.places_to_visit.items:
        lines.append(f"  [{item.id}] {item.place_name}" + (f"  ({item.notes})" if item.notes else ""))
    return "\n".join(lines)


def _print_itinerary(view: ItineraryView, as_json: bool) -> None:
    if as_json:
        print(json.dumps(view.model_dump(mode="json", by_alias=True), ensure_ascii=False, indent=2))
    else:
        print(_format_itinerary(view))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="travel-companion", description="Trip planning console")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create the SQLite schema")

    register = sub.add_parser("register", help="Register an account and link pending invites")
    register.add_argument("email")
    register.add_argument("--name", required=True)
    register.add_argument("--password-hash", required=True)

    show = sub.add_parser("itinerary", help="Print a trip's itinerary")
    show.add_argument("trip_id")
    show.add_argument("--user", default=None)
    show.add_argument("--json", action="store_true")

    move = sub.add_parser("move", help="Move an itinerary item")
    move.add_argument("trip_id")
    move.add_argument("item_id")
    move.add_argument("--user", required=True)
    move.add_argument("--day", type=int, default=None, help="Target day; omit for places to visit")
    anchor = move.add_mutually_exclusive_group()
    anchor.add_argument("--before", default=None)
    anchor.add_argument("--after", default=None)
    move.add_argument("--json", action="store_true")
    return parser


def run(args: argparse.Namespace, ctx: AppContext) -> int:
    if args.command == "init-db":
        print(f"Storage ready ({ctx.trip_repo.backend}: {ctx.settings.persistence_db})")
        return 0

    if args.command == "register":
        user = user_service.register_user(
            ctx=ctx, email=args.email, display_name=args.name, password_hash=args.password_hash
        )
        print(user.id)
        return 0

    if args.command == "itinerary":
        trip = itinerary_service.get_itinerary(ctx=ctx, trip_id=args.trip_id, user_id=args.user)
        _print_itinerary(present_itinerary(trip), args.json)
        return 0

    if args.command == "move":
        command = MoveCommand(target_day_number=args.day, before_item_id=args.before, after_item_id=args.after)
        trip = itinerary_service.move_item(
            ctx=ctx, trip_id=args.trip_id, user_id=args.user, item_id=args.item_id, command=command
        )
        _print_itinerary(present_itinerary(trip), args.json)
        return 0

    return 2


def main(argv: Optional[Sequence[str]] = None, ctx: Optional[AppContext] = None) -> int:
    load_dotenv()
    args = _build_parser().parse_args(argv)
    try:
        return run(args, ctx or make_app_context())
    except DomainError as exc:
        print(f"{type(exc).__name__}: {exc.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
