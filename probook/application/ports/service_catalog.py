from __future__ import annotations

from abc import ABC, abstractmethod

from probook.domain.entities.service import Service


class ServiceCatalogPort(ABC):
    @abstractmethod
    def get_service(self, service_id: str) -> Service | None:
        """Get service by id. Returns None if the id is not in the catalog."""
        raise NotImplementedError

    @abstractmethod
    def list_services(self) -> list[Service]:
        """List bookable services in display order."""
        raise NotImplementedError
