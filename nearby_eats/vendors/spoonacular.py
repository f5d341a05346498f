"""Client utilities for the Spoonacular restaurant search API."""

import logging
from typing import Any, Dict, List, Optional

import requests

from nearby_eats.core.config import DEFAULT_BASE_URL

logger = logging.getLogger(__name__)
_SESSION = requests.Session()


class SpoonacularError(RuntimeError):
    """Base class for classified Spoonacular failures."""


class SpoonacularServiceError(SpoonacularError):
    """Raised when the API answers with a non-successful HTTP status."""

    def __init__(self, status_code: int, message: Optional[str] = None):
        super().__init__(message or f"HTTP {status_code}")
        self.status_code = status_code
        self.message = message


class UnexpectedFormatError(SpoonacularError):
    """Raised when a successful response does not carry a restaurants list."""


def search_restaurants(
    latitude: float,
    longitude: float,
    api_key: str,
    base_url: str = DEFAULT_BASE_URL,
    timeout: Optional[float] = None,
) -> List[Dict[str, Any]]:
    """Search restaurants around a point and return the records in API order.

    The body is decoded before the status is looked at, so a non-JSON or
    ``null`` body surfaces as ``ValueError`` whatever the status. Transport problems surface
    as ``requests.RequestException``.
    """
    params = {"apiKey": api_key, "lat": latitude, "lng": longitude}
    logger.info("Searching restaurants near lat=%s lng=%s", latitude, longitude)
    response = _SESSION.get(base_url, params=params, timeout=timeout)
    payload = response.json()
    if payload is None:
        raise ValueError("response body is JSON null")

    if not response.ok:
        message = payload.get("message") if isinstance(payload, dict) else None
        logger.error("search_restaurants failed: status=%s, message=%s", response.status_code, message)
        raise SpoonacularServiceError(response.status_code, message or None)

    restaurants = payload.get("restaurants") if isinstance(payload, dict) else None
    if not isinstance(restaurants, list):
        logger.error("search_restaurants returned no restaurants list: %.200r", payload)
        raise UnexpectedFormatError("response does not contain a restaurants list")

    logger.info("Fetched %d restaurants", len(restaurants))
    return restaurants
