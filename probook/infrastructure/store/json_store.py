from __future__ import annotations

import json
import logging
import warnings
from datetime import date, datetime
from pathlib import Path
from typing import Any

from probook.application.exceptions import PersistenceError, StoreRecoveryWarning
from probook.application.ports.booking_store import BookingStorePort
from probook.domain.entities.booking import Booking, BookingStatus

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "probook_bookings_v1"


class JsonBookingStore(BookingStorePort):
    """Keeps the whole booking collection in a single JSON file, one file per storage key."""

    def __init__(self, data_dir: str = "./data", storage_key: str = DEFAULT_STORAGE_KEY) -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._storage_key = storage_key

    @property
    def file_path(self) -> Path:
        return self._data_dir / f"{self._storage_key}.json"

    def load(self) -> list[Booking]:
        """Load bookings from the JSON file, return an empty list if missing or corrupted."""
        file_path = self.file_path
        if not file_path.exists():
            return []

        try:
            raw = file_path.read_bytes()
        except OSError as e:
            raise PersistenceError(f"Could not read {file_path}: {e}") from e

        try:
            data = json.loads(raw.decode("utf-8") or "[]")
            if not isinstance(data, list):
                raise ValueError("stored bookings must be a JSON array")
            return [self._deserialize_booking(item) for item in data]
        except (ValueError, KeyError, TypeError) as e:
            # Corruption means "start empty", but the caller has to hear about it.
            logger.warning(
                "Stored bookings are unreadable, starting with an empty collection",
                extra={"path": str(file_path), "reason": str(e)},
            )
            warnings.warn(
                f"Stored bookings in {file_path} could not be parsed: {e}",
                StoreRecoveryWarning,
                stacklevel=2,
            )
            return []

    def save(self, bookings: list[Booking]) -> None:
        """Save bookings to the JSON file atomically."""
        file_path = self.file_path
        temp_path = file_path.with_suffix(".json.tmp")
        data = [self._serialize_booking(booking) for booking in bookings]

        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(file_path)
        except OSError as e:
            if temp_path.exists():
                temp_path.unlink(missing_ok=True)
            raise PersistenceError(f"Could not write {file_path}: {e}") from e

    def _serialize_booking(self, booking: Booking) -> dict[str, Any]:
        """Serialize Booking to the camelCase record layout used on disk."""
        return {
            "id": booking.id,
            "name": booking.name,
            "email": booking.email,
            "phone": booking.phone,
            "serviceId": booking.service_id,
            "serviceName": booking.service_name,
            "duration": booking.duration_minutes,
            "date": booking.date.isoformat(),
            "time": booking.time.strftime("%H:%M"),
            "status": booking.status.value,
            "notes": booking.notes,
            "createdAt": booking.created_at.isoformat() if booking.created_at else None,
        }

    def _deserialize_booking(self, data: dict[str, Any]) -> Booking:
        """Deserialize a stored record. Raises ValueError/KeyError/TypeError on malformed input."""
        if not isinstance(data, dict):
            raise TypeError(f"booking record must be an object, got {type(data).__name__}")

        created_at = None
        if data.get("createdAt"):
            created_at = datetime.fromisoformat(data["createdAt"])

        return Booking(
            id=str(data["id"]),
            name=data["name"],
            email=data["email"],
            phone=data["phone"],
            service_id=data["serviceId"],
            service_name=data["serviceName"],
            duration_minutes=int(data["duration"]),
            date=date.fromisoformat(data["date"]),
            time=datetime.strptime(data["time"], "%H:%M").time(),
            status=BookingStatus(data["status"]),
            notes=data.get("notes") or "",
            created_at=created_at,
        )
