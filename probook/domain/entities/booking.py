from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum


class BookingStatus(str, Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    CANCELLED = "Cancelled"


@dataclass
class Booking:
    id: str
    name: str
    email: str
    phone: str
    service_id: str
    service_name: str  # snapshot taken when booked
    duration_minutes: int  # snapshot taken when booked
    date: date
    time: time
    status: BookingStatus = BookingStatus.PENDING
    notes: str = ""
    created_at: datetime | None = None

    @property
    def start_minutes(self) -> int:
        return self.time.hour * 60 + self.time.minute

    @property
    def end_minutes(self) -> int:
        return self.start_minutes + self.duration_minutes

    @property
    def sort_key(self) -> str:
        return f"{self.date.isoformat()} {self.time.strftime('%H:%M')}"


@dataclass(frozen=True)
class BookingDraft:
    """Unvalidated booking fields as submitted by a form or API client."""

    name: str = ""
    email: str = ""
    phone: str = ""
    service_id: str = ""
    date: str | date | None = None
    time: str | time | None = None
    notes: str = ""
    status: BookingStatus = BookingStatus.PENDING


@dataclass(frozen=True)
class ConflictWarning:
    """Advisory signal: the candidate overlaps an existing booking."""

    booking_id: str
    service_id: str
    date: date
    time: time
    duration_minutes: int

    @classmethod
    def from_booking(cls, booking: Booking) -> "ConflictWarning":
        return cls(
            booking_id=booking.id,
            service_id=booking.service_id,
            date=booking.date,
            time=booking.time,
            duration_minutes=booking.duration_minutes,
        )
