from __future__ import annotations

from probook.domain.entities.service import Service

SERVICE_CATALOG: dict[str, Service] = {
    "svc-doctor": Service(id="svc-doctor", name="Doctor Consultation", duration_minutes=30),
    "svc-salon": Service(id="svc-salon", name="Salon Haircut", duration_minutes=45),
    "svc-restaurant": Service(id="svc-restaurant", name="Restaurant Table", duration_minutes=120),
    "svc-yoga": Service(id="svc-yoga", name="Yoga Class", duration_minutes=60),
}
