from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, time, timedelta

from probook.application.ports.booking_store import BookingStorePort
from probook.application.use_cases.booking_engine import generate_booking_id
from probook.domain.entities.booking import Booking, BookingStatus

logger = logging.getLogger(__name__)


def demo_bookings(now: datetime, id_factory: Callable[[], str] = generate_booking_id) -> list[Booking]:
    tomorrow = now.date() + timedelta(days=1)
    day_after = now.date() + timedelta(days=2)
    return [
        Booking(
            id=id_factory(),
            name="Arjun Rao",
            email="arjun@example.com",
            phone="+91 90000 12345",
            service_id="svc-doctor",
            service_name="Doctor Consultation",
            duration_minutes=30,
            date=tomorrow,
            time=time(10, 0),
            status=BookingStatus.CONFIRMED,
            created_at=now,
        ),
        Booking(
            id=id_factory(),
            name="Sana Mehta",
            email="sana@example.com",
            phone="+91 98000 54321",
            service_id="svc-salon",
            service_name="Salon Haircut",
            duration_minutes=45,
            date=tomorrow,
            time=time(11, 0),
            status=BookingStatus.PENDING,
            created_at=now,
        ),
        Booking(
            id=id_factory(),
            name="Ravi Kumar",
            email="ravi@example.com",
            phone="+91 91234 56789",
            service_id="svc-yoga",
            service_name="Yoga Class",
            duration_minutes=60,
            date=day_after,
            time=time(9, 0),
            status=BookingStatus.PENDING,
            notes="Bring mat",
            created_at=now,
        ),
    ]


def seed_demo(store: BookingStorePort, clock: Callable[[], datetime] = datetime.now) -> bool:
    """Write demo bookings when the store is empty. Returns True if anything was written."""
    if store.load():
        return False
    seed = demo_bookings(clock())
    store.save(seed)
    logger.info("Seeded demo bookings", extra={"reason": f"{len(seed)} bookings"})
    return True
