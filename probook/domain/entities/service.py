from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Service:
    id: str
    name: str
    duration_minutes: int

    @property
    def label(self) -> str:
        return f"{self.name} ({self.duration_minutes}m)"
