#!/usr/bin/env python3
"""
Local booking harness (no HTTP).

Usage:
  python3 scripts/bookings_local.py list [--q TEXT] [--service ID] [--status S] [--date D] [--sort ORDER]
  python3 scripts/bookings_local.py add --name N --email E --phone P --service ID --date D --time T [--notes X] [--force]
  python3 scripts/bookings_local.py status ID Confirmed
  python3 scripts/bookings_local.py delete ID
  python3 scripts/bookings_local.py export [--out FILE]

Runs against the store configured in .env / environment (see probook/core/config.py).
"""

from __future__ import annotations

import argparse
import sys
from datetime import date
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from probook.application.exceptions import BookingError, ValidationError
from probook.application.use_cases.booking_engine import BookingEngine
from probook.application.use_cases.export_csv import export_csv, export_filename
from probook.application.use_cases.query import BookingQuery, SortOrder, summarize
from probook.domain.entities.booking import Booking, BookingDraft, BookingStatus
from probook.wiring.dependencies import get_booking_engine


def _print_booking(b: Booking) -> None:
    print(
        f"{b.id}  {b.date.isoformat()} {b.time.strftime('%H:%M')} ({b.duration_minutes}m)  "
        f"{b.service_name:<20} {b.status.value:<9} {b.name} <{b.email}> {b.phone}"
    )
    if b.notes:
        print(f"    notes: {b.notes}")


def cmd_list(engine: BookingEngine, args: argparse.Namespace) -> int:
    bookings = engine.query(
        BookingQuery(
            search_text=args.q,
            service_id=args.service,
            status=BookingStatus(args.status) if args.status else None,
            date=date.fromisoformat(args.date) if args.date else None,
            sort=SortOrder(args.sort),
        )
    )
    if not bookings:
        print("No bookings yet.")
    for b in bookings:
        _print_booking(b)
    stats = summarize(bookings)
    print("-" * 60)
    print(f"total={stats.total} confirmed={stats.confirmed} pending={stats.pending} cancelled={stats.cancelled}")
    return 0


def cmd_add(engine: BookingEngine, args: argparse.Namespace) -> int:
    draft = BookingDraft(
        name=args.name,
        email=args.email,
        phone=args.phone,
        service_id=args.service,
        date=args.date,
        time=args.time,
        notes=args.notes,
    )
    result = engine.create(draft, override_conflicts=args.force)
    if not result.saved:
        print("This booking conflicts with an existing booking for the same service:")
        for c in result.conflicts:
            print(f"  {c.booking_id} at {c.time.strftime('%H:%M')} ({c.duration_minutes}m)")
        print("Re-run with --force to save anyway.")
        return 1
    _print_booking(result.booking)
    return 0


def cmd_status(engine: BookingEngine, args: argparse.Namespace) -> int:
    _print_booking(engine.set_status(args.booking_id, BookingStatus(args.status)))
    return 0


def cmd_delete(engine: BookingEngine, args: argparse.Namespace) -> int:
    engine.delete(args.booking_id)
    print(f"Deleted {args.booking_id}")
    return 0


def cmd_export(engine: BookingEngine, args: argparse.Namespace) -> int:
    bookings = engine.list_bookings()
    if not bookings:
        print("No bookings to export.")
        return 1
    out = Path(args.out or export_filename())
    out.write_text(export_csv(bookings), encoding="utf-8")
    print(f"Exported {len(bookings)} bookings to {out}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage local bookings")
    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="List bookings")
    p_list.add_argument("--q", default="", help="Search name or email")
    p_list.add_argument("--service", default=None)
    p_list.add_argument("--status", choices=[s.value for s in BookingStatus], default=None)
    p_list.add_argument("--date", default=None, help="YYYY-MM-DD")
    p_list.add_argument("--sort", choices=[s.value for s in SortOrder], default=SortOrder.DATE_ASC.value)
    p_list.set_defaults(func=cmd_list)

    p_add = sub.add_parser("add", help="Create a booking")
    p_add.add_argument("--name", required=True)
    p_add.add_argument("--email", required=True)
    p_add.add_argument("--phone", required=True)
    p_add.add_argument("--service", required=True)
    p_add.add_argument("--date", required=True, help="YYYY-MM-DD")
    p_add.add_argument("--time", required=True, help="HH:MM")
    p_add.add_argument("--notes", default="")
    p_add.add_argument("--force", action="store_true", help="Save even if it conflicts")
    p_add.set_defaults(func=cmd_add)

    p_status = sub.add_parser("status", help="Change booking status")
    p_status.add_argument("booking_id")
    p_status.add_argument("status", choices=[s.value for s in BookingStatus])
    p_status.set_defaults(func=cmd_status)

    p_delete = sub.add_parser("delete", help="Delete a booking")
    p_delete.add_argument("booking_id")
    p_delete.set_defaults(func=cmd_delete)

    p_export = sub.add_parser("export", help="Export all bookings as CSV")
    p_export.add_argument("--out", default=None)
    p_export.set_defaults(func=cmd_export)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    engine = get_booking_engine()
    try:
        return args.func(engine, args)
    except ValidationError as e:
        print(f"ERROR: {e.reason}")
        return 2
    except BookingError as e:
        print(f"ERROR: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
