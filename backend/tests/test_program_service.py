import asyncio
import json
from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.models import (
    Accommodation,
    AccommodationPhoto,
    Condition,
    ConditionOption,
    Formula,
    FormulaConditionOption,
    RoomCategory,
    Trip,
    TripCondition,
    TripDay,
)
from app.services.program_service import ProgramService


def _result(obj=None, items=None) -> MagicMock:
    result = MagicMock()
    result.scalar_one_or_none.return_value = obj
    result.scalars.return_value.all.return_value = items or []
    return result


def _trip_day() -> TripDay:
    return TripDay(
        id=1,
        trip_id=5,
        day_number=1,
        breakfast_included=False,
        formulas=[
            Formula(id=11, trip_day_id=1, name="Riad", block_type="accommodation", sort_order=1,
                    condition_id=3,
                    description_html=json.dumps({"accommodation_id": 10, "selected_room_category_id": 4})),
            Formula(id=12, trip_day_id=1, name="Camp", block_type="accommodation", sort_order=2,
                    condition_id=3, description_html=json.dumps({"accommodation_id": 20})),
        ],
    )


def test_load_program():
    trip = Trip(id=5, name="Atlas", status="sent", start_date=date(2025, 3, 15))
    db = AsyncMock()
    db.execute.side_effect = [
        _result(trip),
        _result(items=[_trip_day()]),
        _result(items=[Accommodation(id=10, name="Riad Kniza", star_rating=5)]),
        _result(items=[RoomCategory(id=4, accommodation_id=10, name="Suite", available_bed_types=["KNG"])]),
        _result(items=[AccommodationPhoto(id=1, accommodation_id=10, url="riad.jpg", is_main=True, sort_order=0)]),
        _result(items=[TripCondition(id=1, trip_id=5, condition_id=3, selected_option_id=31, is_active=True)]),
        _result(items=[Condition(id=3, name="Comfort level")]),
        _result(items=[
            ConditionOption(id=30, condition_id=3, label="Classic", sort_order=1),
            ConditionOption(id=31, condition_id=3, label="Wild", sort_order=2),
        ]),
        _result(items=[
            FormulaConditionOption(formula_id=11, condition_option_id=30),
            FormulaConditionOption(formula_id=12, condition_option_id=31),
        ]),
    ]

    program = asyncio.run(ProgramService().load_program(db, 5))

    day = program.days[0]
    assert day.date_label == "15 March 2025"
    slot = day.variant_slots[0]
    assert slot.condition_name == "Comfort level"
    assert [t.label for t in slot.tabs] == ["Classic", "Wild"]
    assert slot.display_index == 1
    assert slot.tabs[0].card.room_category.name == "Suite"
    assert slot.tabs[0].card.photo.url == "riad.jpg"
    # Accommodation 20 is missing from the lookups
    assert not slot.tabs[1].card.is_rich
    assert [s.accommodation_id for s in program.stays] == [10, 20]


def test_load_program_unknown_trip():
    db = AsyncMock()
    db.execute.side_effect = [_result(None)]

    with pytest.raises(ValueError, match="Trip not found"):
        asyncio.run(ProgramService().load_program(db, 99))
