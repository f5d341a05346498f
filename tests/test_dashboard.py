import pytest

from conftest import DummyResponse, DummySession
from nearby_eats.core import geolocation
from nearby_eats.core.config import Settings
from nearby_eats.core.dashboard import RestaurantDashboard
from nearby_eats.models import Coordinates
from nearby_eats.vendors import spoonacular


class SequenceProvider(geolocation.GeolocationProvider):
    """Yields the queued outcomes one call at a time."""

    def __init__(self, *outcomes):
        self._outcomes = list(outcomes)

    def current_position(self):
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def session(monkeypatch):
    dummy = DummySession(response=DummyResponse(payload={"restaurants": [{"name": "A"}]}))
    monkeypatch.setattr(spoonacular, "_SESSION", dummy)
    return dummy


def test_mount_acquires_once_and_fetches_with_those_coordinates(session):
    dashboard = RestaurantDashboard(geolocation.FixedGeolocationProvider(40.7, -74.0), "key")

    state = dashboard.mount()
    dashboard.mount()

    assert state.location == Coordinates(40.7, -74.0)
    assert state.restaurants == [{"name": "A"}]
    assert state.view == "results"
    assert len(session.calls) == 1
    _, params, _ = session.calls[0]
    assert (params["lat"], params["lng"]) == (40.7, -74.0)


def test_no_fetch_when_location_fails(session):
    denied = geolocation.GeolocationError("denied")
    dashboard = RestaurantDashboard(SequenceProvider(denied), "key")

    state = dashboard.mount()

    assert session.calls == []
    assert state.error == geolocation.FAILED_MESSAGE
    assert state.restaurants == []
    assert state.show_location_button is False


def test_unsupported_geolocation(session):
    state = RestaurantDashboard(None, "key").mount()
    assert state.error == geolocation.UNSUPPORTED_MESSAGE
    assert session.calls == []


def test_manual_retry_after_failure_fetches(session):
    dashboard = RestaurantDashboard(
        SequenceProvider(geolocation.GeolocationError("denied"), Coordinates(1.0, 2.0)),
        "key",
    )
    dashboard.mount()

    state = dashboard.request_location()

    assert state.error is None
    assert state.location == Coordinates(1.0, 2.0)
    assert len(session.calls) == 1


def test_each_acquisition_triggers_exactly_one_fetch(session):
    dashboard = RestaurantDashboard(SequenceProvider(Coordinates(1.0, 2.0), Coordinates(3.0, 4.0)), "key")

    dashboard.mount()
    dashboard.request_location()

    assert [(p["lat"], p["lng"]) for _, p, _ in session.calls] == [(1.0, 2.0), (3.0, 4.0)]


def test_missing_key_sets_configuration_error(session):
    state = RestaurantDashboard(geolocation.FixedGeolocationProvider(1.0, 2.0), "").mount()

    assert state.error == "API key is missing. Please check your environment variables."
    assert state.location == Coordinates(1.0, 2.0)
    assert state.is_loading is False
    assert session.calls == []


def test_from_settings_uses_configured_provider_and_endpoint(session):
    settings = Settings(
        spoonacular_api_key="key",
        spoonacular_base_url="https://x.test/s",
        geolocation_provider="fixed",
        default_latitude=5.0,
        default_longitude=6.0,
        fetch_timeout=2.0,
    )

    state = RestaurantDashboard.from_settings(settings).mount()

    assert state.location == Coordinates(5.0, 6.0)
    assert session.calls == [("https://x.test/s", {"apiKey": "key", "lat": 5.0, "lng": 6.0}, 2.0)]


def test_from_settings_prefers_explicit_provider(session):
    settings = Settings(spoonacular_api_key="key", geolocation_provider="none")

    state = RestaurantDashboard.from_settings(settings, provider=geolocation.FixedGeolocationProvider(7.0, 8.0)).mount()

    assert state.location == Coordinates(7.0, 8.0)


def test_from_settings_can_skip_configured_provider(session):
    settings = Settings(spoonacular_api_key="key", geolocation_provider="fixed", default_latitude=5.0, default_longitude=6.0)

    state = RestaurantDashboard.from_settings(settings, provider=None, use_configured_provider=False).mount()

    assert state.error == geolocation.UNSUPPORTED_MESSAGE
    assert session.calls == []
