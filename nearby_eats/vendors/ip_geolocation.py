"""Client utilities for the ip-api.com geolocation service."""

import logging
from typing import Optional, Tuple

import requests

logger = logging.getLogger(__name__)
_SESSION = requests.Session()
_BASE_URL = "http://ip-api.com/json/"


class IpGeolocationError(RuntimeError):
    """Raised when ip-api.com cannot locate the caller."""


def locate(ip_address: Optional[str] = None, timeout: Optional[float] = 10) -> Tuple[float, float]:
    """Return ``(latitude, longitude)`` for ``ip_address`` or for the caller's own address."""
    url = f"{_BASE_URL}{ip_address or ''}"
    response = _SESSION.get(url, params={"fields": "status,message,lat,lon"}, timeout=timeout)
    response.raise_for_status()
    payload = response.json()
    if not isinstance(payload, dict):
        raise IpGeolocationError(f"unexpected response body: {payload!r:.200}")
    if payload.get("status") != "success":
        logger.error("locate failed: status=%s, message=%s", payload.get("status"), payload.get("message"))
        raise IpGeolocationError(payload.get("message") or "lookup failed")

    latitude = payload.get("lat")
    longitude = payload.get("lon")
    if not _is_number(latitude) or not _is_number(longitude):
        logger.error("locate returned no coordinates: lat=%r, lon=%r", latitude, longitude)
        raise IpGeolocationError("response carries no coordinates")
    return float(latitude), float(longitude)


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
