"""Utilities for transforming Spoonacular restaurant records into display cards."""

import logging
from typing import Any, Dict, Iterable, List, Optional

from nearby_eats.models import RestaurantCard

logger = logging.getLogger(__name__)


def format_address(address: Any) -> str:
    """Render ``street, city, state zipcode`` skipping the parts that are missing."""
    if not isinstance(address, dict):
        return ""
    street = address.get("street_addr") or address.get("street")
    state_zip = " ".join(str(part) for part in (address.get("state"), address.get("zipcode")) if part)
    parts = [str(part) for part in (street, address.get("city")) if part]
    if state_zip:
        parts.append(state_zip)
    return ", ".join(parts)


def first_photo(photos: Any) -> Optional[str]:
    """First entry of a photo list as given, or None when there is no list."""
    if not isinstance(photos, list) or not photos:
        return None
    photo = photos[0]
    return photo if isinstance(photo, str) else None


def to_restaurant_card(record: Dict[str, Any]) -> RestaurantCard:
    name = record.get("name")
    name = name if isinstance(name, str) else ""
    photos = record.get("food_photos")
    if photos is None:
        photos = record.get("photos")
    photo = first_photo(photos)
    return RestaurantCard(
        name=name,
        address=format_address(record.get("address")),
        photo=photo,
        photo_alt=f"Food from {name}" if photo else "",
    )


def to_restaurant_cards(records: Iterable[Dict[str, Any]]) -> List[RestaurantCard]:
    cards = []
    for record in records:
        if not isinstance(record, dict):
            logger.debug("Skipping non-object restaurant record: %r", record)
            continue
        cards.append(to_restaurant_card(record))
    return cards
