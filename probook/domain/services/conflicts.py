"""Double-booking detection for bookings of the same service."""

from __future__ import annotations

from collections.abc import Iterable

from probook.domain.entities.booking import Booking


def overlaps(candidate: Booking, other: Booking) -> bool:
    """Return True when both bookings compete for the same service slot.

    Intervals are half-open ``[start, start + duration)`` in minutes since
    midnight, so touching boundaries and zero-length bookings never overlap.
    """
    if other.id == candidate.id:
        return False
    if other.service_id != candidate.service_id:
        return False
    if other.date != candidate.date:
        return False
    if candidate.duration_minutes <= 0 or other.duration_minutes <= 0:
        return False
    return candidate.start_minutes < other.end_minutes and other.start_minutes < candidate.end_minutes


def find_conflicts(candidate: Booking, existing: Iterable[Booking]) -> list[Booking]:
    return [booking for booking in existing if overlaps(candidate, booking)]


def has_conflict(candidate: Booking, existing: Iterable[Booking]) -> bool:
    return any(overlaps(candidate, booking) for booking in existing)
