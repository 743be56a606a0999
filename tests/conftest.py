from __future__ import annotations

from itertools import count

import pytest

from probook.application.use_cases.booking_engine import BookingEngine
from probook.infrastructure.catalog.service_catalog_store import ServiceCatalogStore
from probook.infrastructure.store.memory_store import MemoryBookingStore
from tests.factories import NOW


@pytest.fixture
def store() -> MemoryBookingStore:
    return MemoryBookingStore()


@pytest.fixture
def engine(store: MemoryBookingStore) -> BookingEngine:
    ids = count(1)
    return BookingEngine(
        store=store,
        catalog=ServiceCatalogStore(),
        clock=lambda: NOW,
        id_factory=lambda: f"bk-{next(ids)}",
    )
