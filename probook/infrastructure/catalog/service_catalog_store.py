from __future__ import annotations

from probook.application.ports.service_catalog import ServiceCatalogPort
from probook.domain.entities.service import Service
from probook.infrastructure.catalog.service_catalog_data import SERVICE_CATALOG


class ServiceCatalogStore(ServiceCatalogPort):
    def __init__(self, catalog: dict[str, Service] | None = None) -> None:
        self._catalog = SERVICE_CATALOG if catalog is None else catalog

    def get_service(self, service_id: str) -> Service | None:
        normalized_id = service_id.lower().strip()
        return self._catalog.get(normalized_id)

    def list_services(self) -> list[Service]:
        return list(self._catalog.values())
