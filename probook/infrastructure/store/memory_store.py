from __future__ import annotations

from dataclasses import replace

from probook.application.ports.booking_store import BookingStorePort
from probook.domain.entities.booking import Booking


class MemoryBookingStore(BookingStorePort):
    def __init__(self, bookings: list[Booking] | None = None) -> None:
        self._bookings: list[Booking] = [replace(b) for b in bookings or []]
        self.save_count = 0

    def load(self) -> list[Booking]:
        # Hand out copies so callers cannot change stored state without save().
        return [replace(b) for b in self._bookings]

    def save(self, bookings: list[Booking]) -> None:
        self._bookings = [replace(b) for b in bookings]
        self.save_count += 1
