"""Accommodation aggregator — hotel cards per block and merged stays across days."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from app.schemas.itinerary import (
    AccommodationLookups,
    AccommodationMeta,
    AccommodationPhotoRecord,
    AccommodationRecord,
    FormulaBlock,
    RoomCategoryRecord,
    TripDayRecord,
)
from app.services.itinerary.block_classifier import classify_blocks, is_generic_name
from app.services.itinerary.config import ACCOMMODATION_ICON, BED_TYPE_LABELS
from app.services.itinerary.metadata_parser import parse_accommodation_meta

logger = logging.getLogger(__name__)


@dataclass
class AccommodationCard:
    """What the traveler sees for one accommodation block."""

    formula_id: int
    name: str | None
    icon: str = ACCOMMODATION_ICON
    accommodation: AccommodationRecord | None = None
    room_category: RoomCategoryRecord | None = None
    photo: AccommodationPhotoRecord | None = None
    bed_type_label: str | None = None
    star_rating: int | None = None
    nights: int | None = None

    @property
    def is_rich(self) -> bool:
        return self.accommodation is not None


@dataclass
class Stay:
    accommodation_id: int
    room_category_id: int | None
    day_from: int
    day_to: int
    total_nights: int
    location: str | None = None
    formula_name: str | None = None
    accommodation: AccommodationRecord | None = None
    room_category: RoomCategoryRecord | None = None
    photo: AccommodationPhotoRecord | None = None
    bed_type_label: str | None = None


def find_room_category(
    lookups: AccommodationLookups, accommodation_id: int, room_category_id: int | None
) -> RoomCategoryRecord | None:
    if room_category_id is None:
        return None
    for room in lookups.room_categories.get(accommodation_id, []):
        if room.id == room_category_id:
            return room
    logger.debug(
        f"Room category {room_category_id} not found for accommodation {accommodation_id}"
    )
    return None


def select_photo(
    lookups: AccommodationLookups, accommodation_id: int, room_category_id: int | None
) -> AccommodationPhotoRecord | None:
    """The main photo, else the first; room photos are listed before hotel photos."""
    photos = lookups.photos.get(accommodation_id, [])
    hotel_photos = [p for p in photos if p.room_category_id is None]
    room_photos = (
        [p for p in photos if p.room_category_id == room_category_id]
        if room_category_id is not None
        else []
    )
    candidates = room_photos + hotel_photos
    if not candidates:
        return None
    return next((p for p in candidates if p.is_main), candidates[0])


def bed_type_label(room: RoomCategoryRecord | None) -> str | None:
    if not room or not room.available_bed_types:
        return None
    return " / ".join(BED_TYPE_LABELS.get(code, code) for code in room.available_bed_types)


def build_accommodation_card(
    block: FormulaBlock,
    lookups: AccommodationLookups,
    meta: AccommodationMeta | None = None,
) -> AccommodationCard | None:
    """Resolve a block against the lookup tables.

    Returns None only when there is nothing to show at all (no metadata and a
    placeholder name). Dangling ids degrade to a name-only card.
    """
    if meta is None:
        meta = parse_accommodation_meta(block.description_html)
    display_name = None if is_generic_name(block.name) else block.name

    if meta is None:
        if display_name is None:
            return None
        return AccommodationCard(formula_id=block.id, name=display_name)

    accommodation = lookups.accommodations.get(meta.accommodation_id)
    if accommodation is None:
        logger.info(f"Block {block.id} references unknown accommodation {meta.accommodation_id}")
        return AccommodationCard(formula_id=block.id, name=display_name, nights=meta.nights)

    room = find_room_category(lookups, meta.accommodation_id, meta.selected_room_category_id)
    return AccommodationCard(
        formula_id=block.id,
        name=accommodation.name,
        accommodation=accommodation,
        room_category=room,
        photo=select_photo(lookups, meta.accommodation_id, meta.selected_room_category_id),
        bed_type_label=bed_type_label(room),
        star_rating=accommodation.star_rating if accommodation.star_rating else None,
        nights=meta.nights,
    )


def build_stays(days: Iterable[TripDayRecord], lookups: AccommodationLookups) -> list[Stay]:
    """Merge consecutive nights at the same hotel and room into stays.

    Single left-to-right pass over days in ascending day_number. Only the last
    emitted stay can be extended, so returning to a hotel later in the trip
    starts a new stay. Blocks without accommodation metadata are skipped.
    """
    stays: list[Stay] = []

    for day in sorted(days, key=lambda d: d.day_number):
        day_end = day.day_number_end or day.day_number
        for block in classify_blocks(day.formulas).accommodation:
            meta = parse_accommodation_meta(block.description_html)
            if meta is None:
                continue

            nights = meta.nights if meta.nights is not None else 1
            last = stays[-1] if stays else None
            if (
                last is not None
                and last.accommodation_id == meta.accommodation_id
                and last.room_category_id == meta.selected_room_category_id
            ):
                last.day_to = max(last.day_to, day_end)
                last.total_nights += nights
                continue

            stays.append(Stay(
                accommodation_id=meta.accommodation_id,
                room_category_id=meta.selected_room_category_id,
                day_from=day.day_number,
                day_to=day_end,
                total_nights=nights,
                location=day.location_from or day.location_to,
                formula_name=block.name,
            ))

    for stay in stays:
        stay.accommodation = lookups.accommodations.get(stay.accommodation_id)
        stay.room_category = find_room_category(lookups, stay.accommodation_id, stay.room_category_id)
        stay.photo = select_photo(lookups, stay.accommodation_id, stay.room_category_id)
        stay.bed_type_label = bed_type_label(stay.room_category)

    return stays
