import json

from app.schemas.itinerary import (
    AccommodationLookups,
    AccommodationPhotoRecord,
    AccommodationRecord,
    FormulaBlock,
    RoomCategoryRecord,
    TripDayRecord,
)
from app.services.itinerary.accommodation_aggregator import (
    bed_type_label,
    build_accommodation_card,
    build_stays,
    select_photo,
)


def _acc_block(id: int, accommodation_id: int, room_id: int | None = None, nights: int | None = 1,
               name: str = "Hotel block", **extra) -> FormulaBlock:
    meta = {"accommodation_id": accommodation_id, "selected_room_category_id": room_id, "nights": nights}
    meta.update(extra)
    return FormulaBlock(id=id, name=name, block_type="accommodation", description_html=json.dumps(meta))


def _day(day_number: int, *blocks: FormulaBlock, day_number_end: int | None = None,
         location_from: str | None = None) -> TripDayRecord:
    return TripDayRecord(
        id=100 + day_number,
        day_number=day_number,
        day_number_end=day_number_end,
        location_from=location_from,
        formulas=list(blocks),
    )


def _lookups() -> AccommodationLookups:
    return AccommodationLookups(
        accommodations={10: AccommodationRecord(id=10, name="Riad Dar Anika", star_rating=4)},
        room_categories={10: [
            RoomCategoryRecord(id=5, accommodation_id=10, name="Patio room", available_bed_types=["DBL", "TWN"]),
            RoomCategoryRecord(id=6, accommodation_id=10, name="Terrace suite", available_bed_types=["KNG"]),
        ]},
        photos={10: [
            AccommodationPhotoRecord(id=1, accommodation_id=10, url="hotel-1.jpg"),
            AccommodationPhotoRecord(id=2, accommodation_id=10, url="hotel-main.jpg", is_main=True),
            AccommodationPhotoRecord(id=3, accommodation_id=10, room_category_id=5, url="room-5.jpg"),
        ]},
    )


def test_consecutive_nights_merge_into_one_stay():
    days = [_day(n, _acc_block(n, 10, 5)) for n in (1, 2, 3)]

    stays = build_stays(days, _lookups())

    assert len(stays) == 1
    assert (stays[0].day_from, stays[0].day_to, stays[0].total_nights) == (1, 3, 3)
    assert stays[0].accommodation.name == "Riad Dar Anika"
    assert stays[0].room_category.name == "Patio room"


def test_room_change_breaks_the_run():
    days = [
        _day(1, _acc_block(1, 10, 5)),
        _day(2, _acc_block(2, 10, 6)),
        _day(3, _acc_block(3, 10, 6)),
    ]

    stays = build_stays(days, _lookups())

    assert [(s.day_from, s.day_to, s.total_nights) for s in stays] == [(1, 1, 1), (2, 3, 2)]
    assert [s.room_category_id for s in stays] == [5, 6]


def test_single_day_room_change_gives_three_stays():
    days = [
        _day(1, _acc_block(1, 10, 5)),
        _day(2, _acc_block(2, 10, 6)),
        _day(3, _acc_block(3, 10, 5)),
    ]

    stays = build_stays(days, _lookups())

    assert [(s.day_from, s.day_to) for s in stays] == [(1, 1), (2, 2), (3, 3)]


def test_returning_to_a_hotel_later_starts_a_new_stay():
    days = [
        _day(1, _acc_block(1, 10, 5)),
        _day(2, _acc_block(2, 20)),
        _day(3, _acc_block(3, 10, 5)),
    ]

    stays = build_stays(days, _lookups())

    assert [s.accommodation_id for s in stays] == [10, 20, 10]
    assert stays[1].accommodation is None


def test_days_are_processed_in_day_number_order():
    days = [
        _day(3, _acc_block(3, 10, 5)),
        _day(1, _acc_block(1, 10, 5)),
        _day(2, _acc_block(2, 10, 5)),
    ]

    stays = build_stays(days, _lookups())

    assert [(s.day_from, s.day_to, s.total_nights) for s in stays] == [(1, 3, 3)]


def test_multi_day_block_and_missing_nights():
    days = [
        _day(1, _acc_block(1, 10, 5, nights=3), day_number_end=3, location_from="Marrakech"),
        _day(4, _acc_block(4, 10, 5, nights=None)),
    ]

    stays = build_stays(days, _lookups())

    assert len(stays) == 1
    assert (stays[0].day_from, stays[0].day_to, stays[0].total_nights) == (1, 4, 4)
    assert stays[0].location == "Marrakech"


def test_blocks_without_metadata_do_not_create_stays():
    days = [
        _day(1, FormulaBlock(id=1, name="Guesthouse", block_type="accommodation",
                             description_html="not json at all")),
        _day(2, FormulaBlock(id=2, name="Lodge", block_type="accommodation",
                             description_html='{"nights": 2}')),
    ]

    assert build_stays(days, _lookups()) == []


def test_main_photo_is_preferred():
    lookups = _lookups()

    assert select_photo(lookups, 10, 5).url == "hotel-main.jpg"
    assert select_photo(lookups, 10, None).url == "hotel-main.jpg"
    assert select_photo(lookups, 99, None) is None


def test_room_photo_comes_first_without_main():
    lookups = AccommodationLookups(photos={10: [
        AccommodationPhotoRecord(id=7, accommodation_id=10, url="hotel.jpg"),
        AccommodationPhotoRecord(id=8, accommodation_id=10, room_category_id=5, url="room-5.jpg"),
        AccommodationPhotoRecord(id=9, accommodation_id=10, room_category_id=6, url="room-6.jpg"),
    ]})

    assert select_photo(lookups, 10, 5).url == "room-5.jpg"
    assert select_photo(lookups, 10, None).url == "hotel.jpg"
    assert select_photo(lookups, 10, 77).url == "hotel.jpg"


def test_bed_type_label():
    room = RoomCategoryRecord(id=1, accommodation_id=1, name="Room", available_bed_types=["DBL", "XYZ"])
    assert bed_type_label(room) == "Double / XYZ"
    assert bed_type_label(None) is None


def test_rich_card():
    card = build_accommodation_card(_acc_block(1, 10, 5, nights=2), _lookups())

    assert card.is_rich
    assert card.name == "Riad Dar Anika"
    assert card.room_category.id == 5
    assert card.photo.url == "hotel-main.jpg"
    assert card.bed_type_label == "Double / Twin"
    assert card.star_rating == 4
    assert card.nights == 2


def test_unparseable_metadata_renders_name_only():
    block = FormulaBlock(id=1, name="Desert camp", block_type="accommodation",
                         description_html="not json at all")

    card = build_accommodation_card(block, _lookups())

    assert card is not None
    assert card.name == "Desert camp"
    assert not card.is_rich
    assert card.photo is None
    assert card.room_category is None


def test_dangling_accommodation_id_degrades_to_name_only():
    card = build_accommodation_card(_acc_block(1, 404, 5, name="Kasbah"), _lookups())

    assert card.name == "Kasbah"
    assert not card.is_rich
    assert card.photo is None


def test_dangling_room_keeps_hotel_data():
    card = build_accommodation_card(_acc_block(1, 10, 77), _lookups())

    assert card.is_rich
    assert card.room_category is None
    assert card.photo.url == "hotel-main.jpg"


def test_placeholder_block_without_metadata_is_hidden():
    block = FormulaBlock(id=1, name="Accommodation not set", block_type="accommodation")
    assert build_accommodation_card(block, _lookups()) is None
