from __future__ import annotations

import csv
import io
from collections.abc import Iterable
from datetime import datetime

from probook.domain.entities.booking import Booking

CSV_HEADERS = (
    "id",
    "name",
    "email",
    "phone",
    "serviceId",
    "serviceName",
    "duration",
    "date",
    "time",
    "status",
    "notes",
    "createdAt",
)


def _row(booking: Booking) -> list[str]:
    return [
        booking.id,
        booking.name,
        booking.email,
        booking.phone,
        booking.service_id,
        booking.service_name,
        str(booking.duration_minutes),
        booking.date.isoformat(),
        booking.time.strftime("%H:%M"),
        booking.status.value,
        booking.notes or "",
        booking.created_at.isoformat() if booking.created_at else "",
    ]


def export_csv(bookings: Iterable[Booking]) -> str:
    """
    Render bookings as CSV in the order given.
    The header row is bare; every data value is quoted with embedded quotes doubled.
    """
    buffer = io.StringIO()
    buffer.write(",".join(CSV_HEADERS))
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="")
    for booking in bookings:
        buffer.write("\n")
        writer.writerow(_row(booking))
    return buffer.getvalue()


def export_filename(now: datetime | None = None) -> str:
    now = now or datetime.now()
    return f"bookings_{now.strftime('%Y-%m-%d_%H_%M_%S')}.csv"
