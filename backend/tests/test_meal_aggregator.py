import json

from app.schemas.itinerary import AccommodationLookups, AccommodationMeta, FormulaBlock, TripDayRecord
from app.services.itinerary.accommodation_aggregator import build_stays
from app.services.itinerary.meal_aggregator import aggregate_meals
from app.services.itinerary.program_builder import build_day


def test_accommodation_breakfast_counts_for_the_day():
    day = TripDayRecord(id=1, day_number=1)
    metas = [AccommodationMeta(accommodation_id=10, breakfast_included=True)]

    meals = aggregate_meals(day, metas)

    assert meals.breakfast
    assert not meals.lunch
    assert not meals.dinner
    assert meals.any


def test_union_over_day_flags_and_all_variants():
    day = TripDayRecord(id=1, day_number=1, lunch_included=True)
    metas = [
        AccommodationMeta(accommodation_id=10, dinner_included=True),
        None,
        AccommodationMeta(accommodation_id=11, breakfast_included=False),
    ]

    meals = aggregate_meals(day, metas)

    assert (meals.breakfast, meals.lunch, meals.dinner) == (False, True, True)


def test_no_meals():
    day = TripDayRecord(id=1, day_number=1, breakfast_included=None)
    assert not aggregate_meals(day, []).any


def test_breakfast_survives_a_bad_room_id():
    day = TripDayRecord(id=1, day_number=1, formulas=[
        FormulaBlock(id=1, name="Riad", block_type="accommodation", description_html=json.dumps({
            "accommodation_id": 10, "selected_room_category_id": "", "breakfast_included": True,
        })),
    ])

    view = build_day(day)

    assert view.meals.breakfast
    assert [s.accommodation_id for s in build_stays([day], AccommodationLookups())] == [10]
