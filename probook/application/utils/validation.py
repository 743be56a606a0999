from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time

from probook.application.exceptions import ValidationError
from probook.application.ports.service_catalog import ServiceCatalogPort
from probook.domain.entities.booking import BookingDraft
from probook.domain.entities.service import Service

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PHONE_PATTERN = re.compile(r"\+?[0-9\s\-]{7,20}")


@dataclass(frozen=True)
class ValidDraft:
    """A draft that passed every rule, with its fields parsed and trimmed."""

    name: str
    email: str
    phone: str
    service: Service
    date: date
    time: time
    notes: str


def parse_date(value: str | date | None) -> date | None:
    """Parse a YYYY-MM-DD value. Returns None if the value is not a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value.strip())
    except (AttributeError, ValueError):
        return None


def parse_time(value: str | time | None) -> time | None:
    """Parse an HH:MM value (seconds dropped). Returns None if the value is not a time."""
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    try:
        return datetime.strptime(value.strip(), "%H:%M").time()
    except (AttributeError, ValueError):
        return None


def _is_blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_draft(draft: BookingDraft, catalog: ServiceCatalogPort, now: datetime) -> ValidDraft:
    """
    Check a draft rule by rule and stop at the first failure.
    Order: name, email, phone, service, date, time, not-in-the-past.
    Raises ValidationError with a single human-readable reason.
    """
    name = (draft.name or "").strip()
    email = (draft.email or "").strip()
    phone = (draft.phone or "").strip()

    if not name:
        raise ValidationError("Name is required")
    if not EMAIL_PATTERN.fullmatch(email):
        raise ValidationError("Enter a valid email")
    if not PHONE_PATTERN.fullmatch(phone):
        raise ValidationError("Enter a valid phone")

    if _is_blank(draft.service_id):
        raise ValidationError("Select a service")
    service = catalog.get_service(draft.service_id)
    if service is None:
        raise ValidationError("Unknown service")

    if _is_blank(draft.date):
        raise ValidationError("Choose a date")
    booking_date = parse_date(draft.date)
    if booking_date is None:
        raise ValidationError("Enter a valid date")

    if _is_blank(draft.time):
        raise ValidationError("Choose a time")
    booking_time = parse_time(draft.time)
    if booking_time is None:
        raise ValidationError("Enter a valid time")

    if datetime.combine(booking_date, booking_time) < now:
        raise ValidationError("Date/time must not be in the past")

    return ValidDraft(
        name=name,
        email=email,
        phone=phone,
        service=service,
        date=booking_date,
        time=booking_time,
        notes=(draft.notes or "").strip(),
    )
