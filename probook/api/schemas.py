from datetime import date, datetime

from pydantic import BaseModel, Field

from probook.application.use_cases.query import BookingStats
from probook.domain.entities.booking import Booking, BookingDraft, BookingStatus, ConflictWarning
from probook.domain.entities.service import Service


class ServiceSchema(BaseModel):
    id: str
    name: str
    duration_minutes: int
    label: str

    @classmethod
    def from_entity(cls, service: Service) -> "ServiceSchema":
        return cls(
            id=service.id,
            name=service.name,
            duration_minutes=service.duration_minutes,
            label=service.label,
        )


class BookingDraftSchema(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    service_id: str = ""
    date: str | None = None
    time: str | None = None
    notes: str = ""
    status: BookingStatus = BookingStatus.PENDING
    override_conflicts: bool = False

    def to_draft(self) -> BookingDraft:
        return BookingDraft(
            name=self.name,
            email=self.email,
            phone=self.phone,
            service_id=self.service_id,
            date=self.date,
            time=self.time,
            notes=self.notes,
            status=self.status,
        )


class BookingSchema(BaseModel):
    id: str
    name: str
    email: str
    phone: str
    service_id: str
    service_name: str
    duration_minutes: int
    date: date
    time: str
    status: BookingStatus
    notes: str = ""
    created_at: datetime | None = None

    @classmethod
    def from_entity(cls, booking: Booking) -> "BookingSchema":
        return cls(
            id=booking.id,
            name=booking.name,
            email=booking.email,
            phone=booking.phone,
            service_id=booking.service_id,
            service_name=booking.service_name,
            duration_minutes=booking.duration_minutes,
            date=booking.date,
            time=booking.time.strftime("%H:%M"),
            status=booking.status,
            notes=booking.notes,
            created_at=booking.created_at,
        )


class ConflictSchema(BaseModel):
    booking_id: str
    service_id: str
    date: date
    time: str
    duration_minutes: int

    @classmethod
    def from_warning(cls, warning: ConflictWarning) -> "ConflictSchema":
        return cls(
            booking_id=warning.booking_id,
            service_id=warning.service_id,
            date=warning.date,
            time=warning.time.strftime("%H:%M"),
            duration_minutes=warning.duration_minutes,
        )


class StatsSchema(BaseModel):
    total: int
    confirmed: int
    pending: int
    cancelled: int

    @classmethod
    def from_stats(cls, stats: BookingStats) -> "StatsSchema":
        return cls(
            total=stats.total,
            confirmed=stats.confirmed,
            pending=stats.pending,
            cancelled=stats.cancelled,
        )


class BookingListSchema(BaseModel):
    bookings: list[BookingSchema] = Field(default_factory=list)
    stats: StatsSchema
    warnings: list[str] = Field(default_factory=list)


class SaveResponseSchema(BaseModel):
    booking: BookingSchema
    conflicts: list[ConflictSchema] = Field(default_factory=list)


class StatusUpdateSchema(BaseModel):
    status: BookingStatus
