"""Location acquisition: turn a geolocation provider into dashboard coordinates."""

import logging
from typing import Optional

import requests

from nearby_eats.core.config import Settings
from nearby_eats.core.events import COORDINATES_SET, EventBus
from nearby_eats.core.state import UIState
from nearby_eats.models import Coordinates
from nearby_eats.vendors import ip_geolocation

logger = logging.getLogger(__name__)

UNSUPPORTED_MESSAGE = "Geolocation is not supported by your browser."
FAILED_MESSAGE = "Failed to get your location. Please try again."


class GeolocationError(RuntimeError):
    """Raised by a provider when the position cannot be determined."""


class GeolocationProvider:
    """Platform capability that reports the current position."""

    def current_position(self) -> Coordinates:
        raise NotImplementedError


class FixedGeolocationProvider(GeolocationProvider):
    def __init__(self, latitude: float, longitude: float):
        self._coordinates = Coordinates(latitude=float(latitude), longitude=float(longitude))

    def current_position(self) -> Coordinates:
        return self._coordinates


class IpGeolocationProvider(GeolocationProvider):
    """Locates the caller (or a given client address) through ip-api.com."""

    def __init__(self, ip_address: Optional[str] = None, timeout: Optional[float] = 10):
        self._ip_address = ip_address
        self._timeout = timeout

    def current_position(self) -> Coordinates:
        try:
            latitude, longitude = ip_geolocation.locate(self._ip_address, timeout=self._timeout)
        except (requests.RequestException, ValueError, KeyError, ip_geolocation.IpGeolocationError) as exc:
            raise GeolocationError(str(exc)) from exc
        return Coordinates(latitude=latitude, longitude=longitude)


def provider_from_settings(settings: Settings, ip_address: Optional[str] = None) -> Optional[GeolocationProvider]:
    """Build the configured provider; ``None`` means geolocation is unavailable."""
    if settings.geolocation_provider == "fixed":
        return FixedGeolocationProvider(settings.default_latitude, settings.default_longitude)
    if settings.geolocation_provider == "ip":
        return IpGeolocationProvider(ip_address=ip_address)
    return None


class LocationAcquirer:
    """Single-attempt location lookup that publishes ``coordinates-set`` on success."""

    def __init__(self, provider: Optional[GeolocationProvider], state: UIState, bus: EventBus):
        self._provider = provider
        self._state = state
        self._bus = bus

    def acquire(self) -> Optional[Coordinates]:
        if self._provider is None:
            self._state.update(error=UNSUPPORTED_MESSAGE)
            return None

        try:
            coordinates = self._provider.current_position()
        except GeolocationError as exc:
            logger.error("Error getting user location: %s", exc)
            self._state.update(error=FAILED_MESSAGE)
            return None

        logger.info("Acquired location lat=%s lng=%s", coordinates.latitude, coordinates.longitude)
        self._state.update(error=None, location=coordinates)
        self._bus.publish(COORDINATES_SET, coordinates)
        return coordinates
