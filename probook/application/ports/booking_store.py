from abc import ABC, abstractmethod

from probook.domain.entities.booking import Booking


class BookingStorePort(ABC):
    @abstractmethod
    def load(self) -> list[Booking]:
        """
        Load the full booking collection.
        Returns an empty list when nothing was stored yet, or when the stored
        content cannot be parsed (a StoreRecoveryWarning is emitted then).
        """
        raise NotImplementedError

    @abstractmethod
    def save(self, bookings: list[Booking]) -> None:
        """Replace the entire persisted collection."""
        raise NotImplementedError
