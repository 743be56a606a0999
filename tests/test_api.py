"""
Tests for the booking HTTP endpoints.
"""

from __future__ import annotations

import tempfile
from itertools import count

import pytest
from fastapi.testclient import TestClient

from probook.application.exceptions import PersistenceError
from probook.application.use_cases.booking_engine import BookingEngine
from probook.infrastructure.catalog.service_catalog_store import ServiceCatalogStore
from probook.infrastructure.store.json_store import JsonBookingStore
from probook.infrastructure.store.memory_store import MemoryBookingStore
from probook.main import app
from probook.wiring.dependencies import get_booking_engine
from tests.factories import NOW

PAYLOAD = {
    "name": "Ravi Kumar",
    "email": "ravi@example.com",
    "phone": "+91 91234 56789",
    "service_id": "svc-doctor",
    "date": "2025-06-10",
    "time": "10:00",
    "notes": "",
}


@pytest.fixture
def client():
    ids = count(1)
    engine = BookingEngine(
        store=MemoryBookingStore(),
        catalog=ServiceCatalogStore(),
        clock=lambda: NOW,
        id_factory=lambda: f"bk-{next(ids)}",
    )
    app.dependency_overrides[get_booking_engine] = lambda: engine
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_list_services(client):
    services = client.get("/services").json()

    assert [s["id"] for s in services] == ["svc-doctor", "svc-salon", "svc-restaurant", "svc-yoga"]
    assert services[0]["label"] == "Doctor Consultation (30m)"


def test_create_and_fetch_booking(client):
    response = client.post("/bookings", json=PAYLOAD)

    assert response.status_code == 201
    booking = response.json()["booking"]
    assert booking["id"] == "bk-1"
    assert booking["status"] == "Pending"
    assert booking["time"] == "10:00"
    assert booking["service_name"] == "Doctor Consultation"

    fetched = client.get("/bookings/bk-1").json()
    assert fetched == booking


def test_validation_error_returns_reason(client):
    response = client.post("/bookings", json={**PAYLOAD, "email": "not-an-email"})

    assert response.status_code == 422
    assert response.json() == {"detail": "Enter a valid email"}


def test_conflict_requires_override(client):
    client.post("/bookings", json=PAYLOAD)

    response = client.post("/bookings", json={**PAYLOAD, "time": "10:15"})
    assert response.status_code == 409
    conflicts = response.json()["detail"]["conflicts"]
    assert conflicts == [
        {"booking_id": "bk-1", "service_id": "svc-doctor", "date": "2025-06-10", "time": "10:00", "duration_minutes": 30}
    ]

    response = client.post("/bookings", json={**PAYLOAD, "time": "10:15", "override_conflicts": True})
    assert response.status_code == 201
    assert len(response.json()["conflicts"]) == 1
    assert client.get("/bookings").json()["stats"]["total"] == 2


def test_list_filters_and_stats(client):
    client.post("/bookings", json=PAYLOAD)
    client.post(
        "/bookings",
        json={**PAYLOAD, "name": "Sana Mehta", "email": "sana@example.com", "service_id": "svc-salon", "time": "09:30"},
    )
    client.post("/bookings/bk-2/status", json={"status": "Confirmed"})

    everything = client.get("/bookings").json()
    assert [b["id"] for b in everything["bookings"]] == ["bk-2", "bk-1"]
    assert everything["stats"] == {"total": 2, "confirmed": 1, "pending": 1, "cancelled": 0}

    ravi = client.get("/bookings", params={"q": "ravi"}).json()
    assert [b["name"] for b in ravi["bookings"]] == ["Ravi Kumar"]

    confirmed = client.get("/bookings", params={"status": "Confirmed", "date": "2025-06-10"}).json()
    assert [b["id"] for b in confirmed["bookings"]] == ["bk-2"]

    desc = client.get("/bookings", params={"sort": "date-desc"}).json()
    assert [b["id"] for b in desc["bookings"]] == ["bk-1", "bk-2"]


def test_unknown_sort_and_status_are_rejected(client):
    assert client.get("/bookings", params={"sort": "newest"}).status_code == 422
    assert client.get("/bookings", params={"status": "Done"}).status_code == 422


def test_update_booking(client):
    client.post("/bookings", json=PAYLOAD)

    response = client.put("/bookings/bk-1", json={**PAYLOAD, "time": "16:45", "notes": "late slot"})

    assert response.status_code == 200
    booking = response.json()["booking"]
    assert (booking["id"], booking["time"], booking["notes"]) == ("bk-1", "16:45", "late slot")
    assert client.put("/bookings/missing", json=PAYLOAD).status_code == 404


def test_status_on_unknown_booking_is_404(client):
    response = client.post("/bookings/missing/status", json={"status": "Cancelled"})

    assert response.status_code == 404


def test_delete_is_idempotent(client):
    client.post("/bookings", json=PAYLOAD)

    assert client.delete("/bookings/bk-1").status_code == 204
    assert client.delete("/bookings/bk-1").status_code == 204
    assert client.get("/bookings/bk-1").status_code == 404


def test_clear_all(client):
    client.post("/bookings", json=PAYLOAD)
    client.post("/bookings", json={**PAYLOAD, "time": "12:00"})

    assert client.delete("/bookings").status_code == 204
    assert client.get("/bookings").json()["bookings"] == []


def test_export_csv(client):
    client.post("/bookings", json={**PAYLOAD, "notes": 'He said "hi"'})

    response = client.get("/bookings/export.csv")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert response.headers["content-disposition"].startswith('attachment; filename="bookings_')
    lines = response.text.split("\n")
    assert lines[0] == "id,name,email,phone,serviceId,serviceName,duration,date,time,status,notes,createdAt"
    assert '"He said ""hi"""' in lines[1]


class _BrokenStore(MemoryBookingStore):
    def load(self):
        raise PersistenceError("disk unavailable")


def test_storage_failure_returns_500():
    engine = BookingEngine(store=_BrokenStore(), catalog=ServiceCatalogStore(), clock=lambda: NOW)
    app.dependency_overrides[get_booking_engine] = lambda: engine
    try:
        response = TestClient(app).get("/bookings")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"detail": "Booking storage is unavailable"}


def test_corrupted_store_is_reported_to_client():
    """An unreadable bookings file still lists as empty, with a warning the client can see."""
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonBookingStore(data_dir=tmpdir)
        store.file_path.write_bytes(b'[{"name": "\xff\xfe"}]')
        engine = BookingEngine(store=store, catalog=ServiceCatalogStore(), clock=lambda: NOW)
        app.dependency_overrides[get_booking_engine] = lambda: engine
        try:
            client = TestClient(app)
            listing = client.get("/bookings")
            export = client.get("/bookings/export.csv")
        finally:
            app.dependency_overrides.clear()

    assert listing.status_code == 200
    data = listing.json()
    assert data["bookings"] == []
    assert len(data["warnings"]) == 1
    assert "could not be parsed" in data["warnings"][0]

    assert export.status_code == 200
    assert export.headers["x-store-recovered"] == "true"


def test_healthy_store_reports_no_warnings(client):
    client.post("/bookings", json=PAYLOAD)

    assert client.get("/bookings").json()["warnings"] == []
    assert "x-store-recovered" not in client.get("/bookings/export.csv").headers
