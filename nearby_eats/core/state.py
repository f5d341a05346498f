"""UI state owned by a dashboard and the views derived from it."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Callable, Dict, List, Optional

from nearby_eats.models import Coordinates

VIEW_LOADING = "loading"
VIEW_RESULTS = "results"
VIEW_EMPTY = "empty"

HEADING = "North America Fusion Restaurants"
LOADING_TEXT = "Loading restaurants..."
EMPTY_TEXT = "No restaurants found. Try adjusting your location or search criteria."

Listener = Callable[["UIState", Dict[str, Any]], None]


@dataclass
class UIState:
    """Mutable UI state.

    Changes go through :meth:`update` so listeners see every transition, for
    instance the ``is_loading`` window around a search.
    """

    restaurants: List[Dict[str, Any]] = field(default_factory=list)
    location: Optional[Coordinates] = None
    is_loading: bool = False
    error: Optional[str] = None
    _listeners: List[Listener] = field(default_factory=list, repr=False, compare=False)

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def update(self, **changes: Any) -> None:
        known = {f.name for f in fields(self) if not f.name.startswith("_")}
        unknown = set(changes) - known
        if unknown:
            raise AttributeError(f"unknown state fields: {', '.join(sorted(unknown))}")
        for name, value in changes.items():
            setattr(self, name, value)
        for listener in list(self._listeners):
            listener(self, changes)

    @property
    def view(self) -> str:
        if self.is_loading:
            return VIEW_LOADING
        if self.restaurants:
            return VIEW_RESULTS
        return VIEW_EMPTY

    @property
    def show_location_button(self) -> bool:
        return self.location is None and self.error is None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "restaurants": list(self.restaurants),
            "location": self.location.as_dict() if self.location else None,
            "is_loading": self.is_loading,
            "error": self.error,
            "view": self.view,
            "show_location_button": self.show_location_button,
        }
