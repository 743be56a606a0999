from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from enum import Enum

from probook.domain.entities.booking import Booking, BookingStatus


class SortOrder(str, Enum):
    DATE_ASC = "date-asc"
    DATE_DESC = "date-desc"
    NONE = "none"


@dataclass(frozen=True)
class BookingQuery:
    search_text: str = ""
    service_id: str | None = None
    status: BookingStatus | None = None
    date: date | None = None
    sort: SortOrder = SortOrder.DATE_ASC


@dataclass(frozen=True)
class BookingStats:
    total: int
    confirmed: int
    pending: int
    cancelled: int


def _matches(booking: Booking, params: BookingQuery, needle: str) -> bool:
    if needle and needle not in f"{booking.name} {booking.email}".lower():
        return False
    if params.service_id and booking.service_id != params.service_id:
        return False
    if params.status and booking.status != params.status:
        return False
    if params.date and booking.date != params.date:
        return False
    return True


def query_bookings(bookings: Iterable[Booking], params: BookingQuery | None = None) -> list[Booking]:
    """Filter, search and sort a booking snapshot. The input is left untouched."""
    params = params or BookingQuery()
    needle = (params.search_text or "").strip().lower()
    result = [b for b in bookings if _matches(b, params, needle)]

    sort = SortOrder(params.sort)
    if sort is SortOrder.DATE_ASC:
        result.sort(key=lambda b: b.sort_key)
    elif sort is SortOrder.DATE_DESC:
        result.sort(key=lambda b: b.sort_key, reverse=True)
    return result


def summarize(bookings: Iterable[Booking]) -> BookingStats:
    counts = {status: 0 for status in BookingStatus}
    total = 0
    for booking in bookings:
        counts[booking.status] += 1
        total += 1
    return BookingStats(
        total=total,
        confirmed=counts[BookingStatus.CONFIRMED],
        pending=counts[BookingStatus.PENDING],
        cancelled=counts[BookingStatus.CANCELLED],
    )
