"""CLI job that locates the user, searches nearby restaurants and prints them."""

import argparse
import json
import logging
import sys
from typing import List, Optional, TextIO

from nearby_eats.core.config import get_settings
from nearby_eats.core.dashboard import RestaurantDashboard
from nearby_eats.core.geolocation import (
    FixedGeolocationProvider,
    GeolocationProvider,
    IpGeolocationProvider,
    provider_from_settings,
)
from nearby_eats.core.state import EMPTY_TEXT, HEADING, LOADING_TEXT, VIEW_LOADING, VIEW_RESULTS, UIState
from nearby_eats.etl.transform import to_restaurant_cards

logger = logging.getLogger(__name__)


def resolve_provider(
    provider_name: Optional[str],
    latitude: Optional[float],
    longitude: Optional[float],
) -> Optional[GeolocationProvider]:
    """Pick the provider from CLI flags, falling back to settings when none is given."""
    if (latitude is None) != (longitude is None):
        raise ValueError("--lat and --lng must be given together")
    if latitude is not None:
        return FixedGeolocationProvider(latitude, longitude)
    if provider_name == "ip":
        return IpGeolocationProvider()
    if provider_name == "none":
        return None

    return provider_from_settings(get_settings())


def render_text(state: UIState) -> str:
    lines: List[str] = [HEADING, "=" * len(HEADING)]
    if state.error:
        lines.extend(["Error", state.error, ""])
    if state.view == VIEW_LOADING:
        lines.append(LOADING_TEXT)
    elif state.view == VIEW_RESULTS:
        for card in to_restaurant_cards(state.restaurants):
            lines.append(f"- {card.name}")
            if card.address:
                lines.append(f"  {card.address}")
            if card.photo:
                lines.append(f"  {card.photo}")
    else:
        lines.append(EMPTY_TEXT)
    return "\n".join(lines)


def run_find_restaurants(
    *,
    provider_name: Optional[str] = None,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
) -> UIState:
    provider = resolve_provider(provider_name, latitude, longitude)
    dashboard = RestaurantDashboard.from_settings(get_settings(), provider=provider, use_configured_provider=False)
    return dashboard.mount()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Find restaurants near your location")
    parser.add_argument("--lat", dest="latitude", type=float, help="Latitude, skips geolocation")
    parser.add_argument("--lng", dest="longitude", type=float, help="Longitude, skips geolocation")
    parser.add_argument(
        "--provider",
        dest="provider_name",
        choices=["ip", "none"],
        help="Geolocation provider (defaults to GEOLOCATION_PROVIDER)",
    )
    parser.add_argument("--json", dest="as_json", action="store_true", help="Print the UI state as JSON")
    return parser


def main(argv: Optional[List[str]] = None, out: Optional[TextIO] = None) -> int:
    out = out or sys.stdout
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        state = run_find_restaurants(
            provider_name=args.provider_name,
            latitude=args.latitude,
            longitude=args.longitude,
        )
    except ValueError as exc:
        parser.error(str(exc))

    logger.info("Finished with view=%s error=%s", state.view, state.error)
    if args.as_json:
        out.write(json.dumps(state.as_dict(), indent=2) + "\n")
    else:
        out.write(render_text(state) + "\n")
    return 1 if state.error else 0


if __name__ == "__main__":
    sys.exit(main())
