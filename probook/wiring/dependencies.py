from functools import lru_cache
import logging

from probook.application.ports.booking_store import BookingStorePort
from probook.application.ports.service_catalog import ServiceCatalogPort
from probook.application.use_cases.booking_engine import BookingEngine
from probook.application.use_cases.seed_demo import seed_demo
from probook.core.config import settings
from probook.infrastructure.catalog.service_catalog_store import ServiceCatalogStore
from probook.infrastructure.store.json_store import JsonBookingStore
from probook.infrastructure.store.memory_store import MemoryBookingStore


logger = logging.getLogger(__name__)


@lru_cache
def get_booking_store() -> BookingStorePort:
    if settings.STORE_PROVIDER.lower() == "memory":
        logger.info("Using MemoryBookingStore")
        store: BookingStorePort = MemoryBookingStore()
    else:
        logger.info("Using JsonBookingStore in %s", settings.BOOKINGS_DATA_DIR)
        store = JsonBookingStore(
            data_dir=settings.BOOKINGS_DATA_DIR,
            storage_key=settings.BOOKINGS_STORAGE_KEY,
        )
    if settings.SEED_DEMO_DATA:
        seed_demo(store)
    return store


@lru_cache
def get_service_catalog() -> ServiceCatalogPort:
    return ServiceCatalogStore()


def get_booking_engine() -> BookingEngine:
    return BookingEngine(
        store=get_booking_store(),
        catalog=get_service_catalog(),
        log_conflict_overrides=settings.LOG_CONFLICT_OVERRIDES,
    )
