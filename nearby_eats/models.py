"""Core data models shared by the dashboard, the vendors and the renderers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True, slots=True)
class Coordinates:
    """A latitude/longitude pair produced by one location acquisition."""

    latitude: float
    longitude: float

    def as_dict(self) -> Dict[str, float]:
        return {"latitude": self.latitude, "longitude": self.longitude}


@dataclass(slots=True)
class RestaurantCard:
    """Display-ready projection of a restaurant record returned by Spoonacular."""

    name: str
    address: str
    photo: Optional[str] = None
    photo_alt: str = ""

    def as_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "address": self.address, "photo": self.photo, "photo_alt": self.photo_alt}
