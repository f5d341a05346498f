"""Wires location acquisition and restaurant search around one UI state."""

import logging
from typing import Optional

from nearby_eats.core.config import DEFAULT_BASE_URL, Settings, get_settings
from nearby_eats.core.events import EventBus
from nearby_eats.core.fetcher import RestaurantFetcher
from nearby_eats.core.geolocation import GeolocationProvider, LocationAcquirer, provider_from_settings
from nearby_eats.core.state import UIState

logger = logging.getLogger(__name__)


class RestaurantDashboard:
    """One dashboard session: an empty state, an acquirer and a subscribed fetcher.

    ``mount`` runs the automatic first acquisition; ``request_location`` is the
    "Get My Location" action and may be called any number of times.
    """

    def __init__(
        self,
        provider: Optional[GeolocationProvider],
        api_key: Optional[str],
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.state = UIState()
        self.bus = EventBus()
        self.acquirer = LocationAcquirer(provider, self.state, self.bus)
        self.fetcher = RestaurantFetcher(api_key, self.state, base_url=base_url or DEFAULT_BASE_URL, timeout=timeout)
        self.fetcher.attach(self.bus)
        self._mounted = False

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        provider: Optional[GeolocationProvider] = None,
        ip_address: Optional[str] = None,
        use_configured_provider: bool = True,
    ) -> "RestaurantDashboard":
        """Build a dashboard from settings.

        A ``None`` provider falls back to the configured one unless
        ``use_configured_provider`` is false, in which case geolocation is
        treated as unsupported.
        """
        settings = settings or get_settings()
        if provider is None and use_configured_provider:
            provider = provider_from_settings(settings, ip_address=ip_address)
        return cls(
            provider,
            settings.spoonacular_api_key,
            base_url=settings.spoonacular_base_url,
            timeout=settings.fetch_timeout,
        )

    def mount(self) -> UIState:
        if not self._mounted:
            self._mounted = True
            logger.info("Mounting dashboard")
            self.acquirer.acquire()
        return self.state

    def request_location(self) -> UIState:
        logger.info("Location requested manually")
        self._mounted = True
        self.acquirer.acquire()
        return self.state
