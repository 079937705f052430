"""Metadata parser — reads the structured payload some blocks store in description_html.

The same column holds either rich text or a JSON object. A JSON object with a
``travel_mode`` key is transport metadata; one with an ``accommodation_id`` is
accommodation metadata. Anything else is display text and parses to None.
None of these functions raise.
"""

import json
import logging
import re

from pydantic import ValidationError

from app.schemas.itinerary import AccommodationMeta, TransportMeta

logger = logging.getLogger(__name__)

BlockMeta = TransportMeta | AccommodationMeta

_MEALS_MARKER = re.compile(r"<!--meals:\{[^}]*\}-->")


def _load_object(description_html: str | None) -> dict | None:
    if not description_html or not isinstance(description_html, str):
        return None
    try:
        parsed = json.loads(description_html)
    except (ValueError, TypeError, RecursionError):
        return None
    if not isinstance(parsed, dict):
        return None
    return parsed


def parse_transport_meta(description_html: str | None) -> TransportMeta | None:
    data = _load_object(description_html)
    if data is None or not data.get("travel_mode"):
        return None
    try:
        return TransportMeta.model_validate(data)
    except ValidationError as e:
        logger.debug(f"Malformed transport metadata ignored: {e.error_count()} errors")
        return None


def parse_accommodation_meta(description_html: str | None) -> AccommodationMeta | None:
    data = _load_object(description_html)
    if data is None or data.get("accommodation_id") is None:
        return None
    try:
        return AccommodationMeta.model_validate(data)
    except ValidationError as e:
        logger.debug(f"Malformed accommodation metadata ignored: {e.error_count()} errors")
        return None


def parse_metadata(description_html: str | None) -> BlockMeta | None:
    """Classify the payload: transport first, then accommodation, else None."""
    return parse_transport_meta(description_html) or parse_accommodation_meta(description_html)


def display_text(description_html: str | None) -> str | None:
    """Text to show for a block, or None when the field is structured data or blank."""
    if not description_html or _load_object(description_html) is not None:
        return None
    text = _MEALS_MARKER.sub("", description_html, count=1)
    return text if text.strip() else None
