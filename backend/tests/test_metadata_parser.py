import json

import pytest

from app.schemas.itinerary import AccommodationMeta, TransportMeta
from app.services.itinerary.metadata_parser import (
    display_text,
    parse_accommodation_meta,
    parse_metadata,
    parse_transport_meta,
)

GARBAGE = [
    None,
    "",
    "not json at all",
    "<p>Une belle journée</p>",
    "{",
    "[1, 2, 3]",
    "42",
    "null",
    "true",
    '"a string"',
    "{}",
    '{"name": "no discriminator"}',
    '{"travel_mode": ""}',
    '{"travel_mode": 12}',
    '{"accommodation_id": null}',
    '{"accommodation_id": "not-a-number"}',
    "[" * 5000,
]


@pytest.mark.parametrize("value", GARBAGE)
def test_parser_never_raises_and_returns_none(value):
    assert parse_metadata(value) is None
    assert parse_transport_meta(value) is None
    assert parse_accommodation_meta(value) is None


def test_transport_payload():
    payload = json.dumps({
        "travel_mode": "flight",
        "location_from_name": "Paris",
        "location_to_name": "Cairo",
        "duration_minutes": 290,
        "extra_field": "ignored",
    })

    meta = parse_metadata(payload)

    assert isinstance(meta, TransportMeta)
    assert meta.travel_mode == "flight"
    assert meta.duration_minutes == 290
    assert parse_accommodation_meta(payload) is None


def test_accommodation_payload():
    payload = json.dumps({
        "accommodation_id": 10,
        "selected_room_category_id": 5,
        "nights": 2,
        "breakfast_included": True,
    })

    meta = parse_metadata(payload)

    assert isinstance(meta, AccommodationMeta)
    assert meta.accommodation_id == 10
    assert meta.selected_room_category_id == 5
    assert meta.breakfast_included is True
    assert parse_transport_meta(payload) is None


def test_display_text_hides_structured_payloads():
    assert display_text('{"travel_mode": "driving"}') is None
    assert display_text("<p>Visit the souk</p>") == "<p>Visit the souk</p>"
    assert display_text("   ") is None
    assert display_text(None) is None


def test_display_text_strips_meals_marker():
    text = '<!--meals:{"lunch":true}--><p>Picnic by the river</p>'
    assert display_text(text) == "<p>Picnic by the river</p>"
    assert display_text('<!--meals:{"lunch":true}-->') is None


def test_bad_accommodation_detail_keeps_the_record():
    meta = parse_accommodation_meta(json.dumps({
        "accommodation_id": 10,
        "selected_room_category_id": "",
        "nights": "many",
        "breakfast_included": True,
    }))

    assert isinstance(meta, AccommodationMeta)
    assert meta.accommodation_id == 10
    assert meta.selected_room_category_id is None
    assert meta.nights is None
    assert meta.breakfast_included is True


def test_bad_transport_detail_keeps_the_record():
    meta = parse_transport_meta(json.dumps({
        "travel_mode": "flight",
        "location_from_name": "Paris",
        "location_to_name": "Rome",
        "distance_km": "1100 km",
        "duration_minutes": {"h": 2},
    }))

    assert isinstance(meta, TransportMeta)
    assert meta.location_from_name == "Paris"
    assert meta.distance_km is None
    assert meta.duration_minutes is None


def test_invalid_discriminator_still_rejects():
    assert parse_accommodation_meta('{"accommodation_id": "ten", "breakfast_included": true}') is None
    assert parse_transport_meta('{"travel_mode": ["flight"], "location_from_name": "Paris"}') is None
