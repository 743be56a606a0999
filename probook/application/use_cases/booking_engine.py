from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from probook.application.exceptions import NotFoundError
from probook.application.ports.booking_store import BookingStorePort
from probook.application.ports.service_catalog import ServiceCatalogPort
from probook.application.use_cases.query import BookingQuery, query_bookings
from probook.application.utils.validation import ValidDraft, validate_draft
from probook.domain.entities.booking import Booking, BookingDraft, BookingStatus, ConflictWarning
from probook.domain.services.conflicts import find_conflicts


@dataclass(frozen=True)
class BookingResult:
    action: str  # "created", "updated" or "conflict"
    booking: Booking | None
    conflicts: list[ConflictWarning] = field(default_factory=list)

    @property
    def saved(self) -> bool:
        return self.action in ("created", "updated")


def generate_booking_id() -> str:
    return uuid.uuid4().hex


class BookingEngine:
    """
    Sole writer of the booking collection.

    Every mutation loads the full collection, applies one change and saves the
    full collection back, so the store never sees a partial update.
    """

    def __init__(
        self,
        store: BookingStorePort,
        catalog: ServiceCatalogPort,
        clock: Callable[[], datetime] = datetime.now,
        id_factory: Callable[[], str] = generate_booking_id,
        log_conflict_overrides: bool = True,
    ) -> None:
        self._store = store
        self._catalog = catalog
        self._clock = clock
        self._id_factory = id_factory
        self._log_conflict_overrides = log_conflict_overrides
        self._logger = logging.getLogger(__name__)

    def list_bookings(self) -> list[Booking]:
        return self._store.load()

    def get(self, booking_id: str) -> Booking:
        for booking in self._store.load():
            if booking.id == booking_id:
                return booking
        raise NotFoundError(booking_id)

    def query(self, params: BookingQuery) -> list[Booking]:
        return query_bookings(self._store.load(), params)

    def check_conflicts(self, draft: BookingDraft, booking_id: str | None = None) -> list[ConflictWarning]:
        """Validate a draft and report the bookings it would collide with, without saving."""
        valid = validate_draft(draft, self._catalog, self._clock())
        candidate = self._build_booking(valid, booking_id or "", BookingStatus.PENDING, None)
        return self._conflicts_for(candidate, self._store.load())

    def create(self, draft: BookingDraft, override_conflicts: bool = False) -> BookingResult:
        now = self._clock()
        valid = validate_draft(draft, self._catalog, now)
        bookings = self._store.load()

        candidate = self._build_booking(valid, self._new_id(bookings), BookingStatus.PENDING, now)
        conflicts = self._conflicts_for(candidate, bookings)
        if conflicts and not override_conflicts:
            return BookingResult(action="conflict", booking=None, conflicts=conflicts)

        bookings.append(candidate)
        self._store.save(bookings)
        self._log_saved("Booking created", candidate, conflicts)
        return BookingResult(action="created", booking=candidate, conflicts=conflicts)

    def update(self, booking_id: str, draft: BookingDraft, override_conflicts: bool = False) -> BookingResult:
        valid = validate_draft(draft, self._catalog, self._clock())
        bookings = self._store.load()
        index = self._index_of(bookings, booking_id)

        current = bookings[index]
        candidate = self._build_booking(valid, current.id, draft.status, current.created_at)
        conflicts = self._conflicts_for(candidate, bookings)
        if conflicts and not override_conflicts:
            return BookingResult(action="conflict", booking=None, conflicts=conflicts)

        bookings[index] = candidate
        self._store.save(bookings)
        self._log_saved("Booking updated", candidate, conflicts)
        return BookingResult(action="updated", booking=candidate, conflicts=conflicts)

    def delete(self, booking_id: str) -> None:
        """
        Remove a booking by id.
        Deleting an id that does not exist is a successful no-op, so repeated
        deletes from a stale view never fail.
        """
        bookings = self._store.load()
        remaining = [b for b in bookings if b.id != booking_id]
        if len(remaining) == len(bookings):
            self._logger.debug("Delete of unknown booking ignored", extra={"booking_id": booking_id})
            return
        self._store.save(remaining)
        self._logger.info("Booking deleted", extra={"booking_id": booking_id})

    def set_status(self, booking_id: str, status: BookingStatus) -> Booking:
        status = BookingStatus(status)
        bookings = self._store.load()
        booking = bookings[self._index_of(bookings, booking_id)]
        booking.status = status
        self._store.save(bookings)
        self._logger.info("Booking status changed", extra={"booking_id": booking_id, "status": status.value})
        return booking

    def clear_all(self) -> None:
        self._store.save([])
        self._logger.info("All bookings cleared")

    def _build_booking(
        self,
        valid: ValidDraft,
        booking_id: str,
        status: BookingStatus,
        created_at: datetime | None,
    ) -> Booking:
        return Booking(
            id=booking_id,
            name=valid.name,
            email=valid.email,
            phone=valid.phone,
            service_id=valid.service.id,
            service_name=valid.service.name,
            duration_minutes=valid.service.duration_minutes,
            date=valid.date,
            time=valid.time,
            status=BookingStatus(status),
            notes=valid.notes,
            created_at=created_at,
        )

    def _conflicts_for(self, candidate: Booking, bookings: list[Booking]) -> list[ConflictWarning]:
        return [ConflictWarning.from_booking(b) for b in find_conflicts(candidate, bookings)]

    def _new_id(self, bookings: list[Booking]) -> str:
        taken = {b.id for b in bookings}
        booking_id = self._id_factory()
        while booking_id in taken:
            booking_id = self._id_factory()
        return booking_id

    def _index_of(self, bookings: list[Booking], booking_id: str) -> int:
        for index, booking in enumerate(bookings):
            if booking.id == booking_id:
                return index
        raise NotFoundError(booking_id)

    def _log_saved(self, message: str, booking: Booking, conflicts: list[ConflictWarning]) -> None:
        context = {
            "booking_id": booking.id,
            "service_id": booking.service_id,
            "booking_date": booking.date.isoformat(),
            "booking_time": booking.time.strftime("%H:%M"),
        }
        self._logger.info(message, extra=context)
        if conflicts and self._log_conflict_overrides:
            self._logger.warning(
                "Conflict overridden by caller",
                extra={**context, "conflicts": ",".join(c.booking_id for c in conflicts)},
            )
