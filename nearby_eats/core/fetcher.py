"""Restaurant search step of the dashboard.

The fetcher owns the translation from vendor outcomes to the single error
string the UI shows. ``is_loading`` is raised only once the credential check
has passed, and is always lowered again before :meth:`RestaurantFetcher.fetch`
returns.
"""

import logging
from typing import Optional

import requests

from nearby_eats.core.config import DEFAULT_BASE_URL
from nearby_eats.core.events import COORDINATES_SET, EventBus
from nearby_eats.core.state import UIState
from nearby_eats.models import Coordinates
from nearby_eats.vendors import spoonacular

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "API key is missing. Please check your environment variables."
UNEXPECTED_FORMAT_MESSAGE = "Unexpected data format received from the API."
SERVICE_FAILURE_MESSAGE = "Failed to fetch restaurants. Please try again."
TRANSPORT_FAILURE_MESSAGE = "An error occurred while fetching restaurants. Please try again."


class RestaurantFetcher:
    def __init__(
        self,
        api_key: Optional[str],
        state: UIState,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = None,
    ):
        self._api_key = api_key
        self._state = state
        self._base_url = base_url
        self._timeout = timeout

    def attach(self, bus: EventBus) -> None:
        """Run a search every time new coordinates are published."""
        bus.subscribe(COORDINATES_SET, self.fetch)

    def fetch(self, coordinates: Coordinates) -> None:
        if not self._api_key:
            self._state.update(error=MISSING_KEY_MESSAGE)
            return

        self._state.update(is_loading=True, error=None)
        try:
            restaurants = spoonacular.search_restaurants(
                coordinates.latitude,
                coordinates.longitude,
                api_key=self._api_key,
                base_url=self._base_url,
                timeout=self._timeout,
            )
        except spoonacular.UnexpectedFormatError:
            self._state.update(error=UNEXPECTED_FORMAT_MESSAGE)
        except spoonacular.SpoonacularServiceError as exc:
            self._state.update(error=exc.message or SERVICE_FAILURE_MESSAGE)
        except (requests.RequestException, ValueError) as exc:
            logger.error("Error fetching restaurants: %s", exc)
            self._state.update(error=TRANSPORT_FAILURE_MESSAGE)
        else:
            self._state.update(restaurants=restaurants)
        finally:
            self._state.update(is_loading=False)
