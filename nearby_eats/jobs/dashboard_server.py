"""HTTP entrypoint that serves the restaurant dashboard."""

from __future__ import annotations

import ipaddress
import logging
from typing import Any, Dict, Optional, Tuple

from flask import Flask, jsonify, render_template_string, request

from nearby_eats.core.config import get_settings
from nearby_eats.core.dashboard import RestaurantDashboard
from nearby_eats.core.geolocation import FixedGeolocationProvider
from nearby_eats.core.state import EMPTY_TEXT, HEADING, LOADING_TEXT
from nearby_eats.etl.transform import to_restaurant_cards

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

# ---------- App ----------
app = Flask(__name__)

PAGE_TEMPLATE = """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{{ heading }}</title>
  <style>
    body { max-width: 1200px; margin: 0 auto; padding: 1rem; font-family: sans-serif; }
    .error { background: #FEE2E2; border: 1px solid #F87171; border-radius: .375rem; padding: 1rem; margin-bottom: 1rem; color: #DC2626; }
    .grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(300px, 1fr)); gap: 1rem; }
    .card { border: 1px solid #E5E7EB; border-radius: .375rem; overflow: hidden; padding: 1rem; }
    .card img { width: 100%; height: 12rem; object-fit: cover; border-radius: .375rem; }
    .address { color: #6B7280; font-size: .875rem; }
  </style>
</head>
<body>
  <h1>{{ heading }}</h1>
  {% if state.error %}
  <div class="error">
    <p><strong>Error</strong></p>
    <p>{{ state.error }}</p>
  </div>
  {% endif %}
  {% if state.show_location_button %}
  <form method="post" action="{{ url_for('locate') }}">
    <button type="submit">Get My Location</button>
  </form>
  {% endif %}
  {% if state.view == "loading" %}
  <p>{{ loading_text }}</p>
  {% elif state.view == "results" %}
  <div class="grid">
    {% for card in cards %}
    <div class="card">
      <h2>{{ card.name }}</h2>
      <p class="address">{{ card.address }}</p>
      {% if card.photo %}<img src="{{ card.photo }}" alt="{{ card.photo_alt }}">{% endif %}
    </div>
    {% endfor %}
  </div>
  {% else %}
  <p>{{ empty_text }}</p>
  {% endif %}
</body>
</html>
"""

# ---------- Routes ----------


@app.get("/")
def index() -> Any:
    """Mount a dashboard (automatic first location attempt) and render it."""
    dashboard, error = _build_dashboard(request.args)
    if error:
        return jsonify({"error": error}), 400
    dashboard.mount()
    return _render(dashboard), 200


@app.post("/locate")
def locate() -> Any:
    """The "Get My Location" action: run a fresh location attempt and render."""
    dashboard, error = _build_dashboard(request.form)
    if error:
        return jsonify({"error": error}), 400
    dashboard.request_location()
    return _render(dashboard), 200


@app.get("/api/state")
def state() -> Any:
    """JSON snapshot of a freshly mounted dashboard."""
    dashboard, error = _build_dashboard(request.args)
    if error:
        return jsonify({"error": error}), 400
    dashboard.mount()
    payload = dashboard.state.as_dict()
    payload["cards"] = [card.as_dict() for card in to_restaurant_cards(dashboard.state.restaurants)]
    return jsonify({"data": payload}), 200


@app.get("/healthz")
def healthcheck() -> Any:
    settings = get_settings()
    return (
        jsonify(
            {
                "status": "ok",
                "api_key_configured": bool(settings.spoonacular_api_key),
                "geolocation_provider": settings.geolocation_provider,
            }
        ),
        200,
    )


# ---------- Internals ----------


def _parse_coordinates(values: Dict[str, Any]) -> Tuple[Optional[FixedGeolocationProvider], Optional[str]]:
    lat_raw = values.get("lat")
    lng_raw = values.get("lng")
    if lat_raw in (None, "") and lng_raw in (None, ""):
        return None, None
    if lat_raw in (None, "") or lng_raw in (None, ""):
        return None, "lat and lng must be provided together"
    try:
        latitude = float(lat_raw)
        longitude = float(lng_raw)
    except (TypeError, ValueError):
        return None, "lat and lng must be numeric"
    if not (-90 <= latitude <= 90 and -180 <= longitude <= 180):
        return None, "lat/lng out of range"
    return FixedGeolocationProvider(latitude, longitude), None


def _client_ip() -> Optional[str]:
    """Public address of the caller, if any; private ranges cannot be geolocated."""
    forwarded = request.headers.get("X-Forwarded-For", "")
    candidate = forwarded.split(",")[0].strip() or request.remote_addr
    if not candidate:
        return None
    try:
        return candidate if ipaddress.ip_address(candidate).is_global else None
    except ValueError:
        return None


def _build_dashboard(values: Dict[str, Any]) -> Tuple[Optional[RestaurantDashboard], Optional[str]]:
    provider, error = _parse_coordinates(values)
    if error:
        return None, error
    dashboard = RestaurantDashboard.from_settings(get_settings(), provider=provider, ip_address=_client_ip())
    return dashboard, None


def _render(dashboard: RestaurantDashboard) -> str:
    return render_template_string(
        PAGE_TEMPLATE,
        heading=HEADING,
        loading_text=LOADING_TEXT,
        empty_text=EMPTY_TEXT,
        state=dashboard.state,
        cards=to_restaurant_cards(dashboard.state.restaurants),
    )


def main() -> None:
    port = get_settings().port
    logger.info("[BOOT] Binding on 0.0.0.0:%d", port)
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
