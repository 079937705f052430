from datetime import date

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


# ------- Stored records (read-only inputs) -------
class FormulaBlock(BaseModel):
    id: int
    name: str | None = ""
    block_type: str | None = None
    description_html: str | None = None
    sort_order: int | None = None
    condition_id: int | None = None
    parent_block_id: int | None = None

    model_config = {"from_attributes": True}


class TripDayRecord(BaseModel):
    id: int
    day_number: int
    day_number_end: int | None = None
    title: str | None = None
    description: str | None = None
    location_from: str | None = None
    location_to: str | None = None
    breakfast_included: bool | None = False
    lunch_included: bool | None = False
    dinner_included: bool | None = False
    formulas: list[FormulaBlock] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class AccommodationRecord(BaseModel):
    id: int
    name: str
    star_rating: int | None = None

    model_config = {"from_attributes": True}


class RoomCategoryRecord(BaseModel):
    id: int
    accommodation_id: int
    name: str
    available_bed_types: list[str] | None = None
    size_sqm: float | None = None
    max_occupancy: int | None = None

    model_config = {"from_attributes": True}


class AccommodationPhotoRecord(BaseModel):
    id: int
    accommodation_id: int
    room_category_id: int | None = None
    url: str
    url_medium: str | None = None
    url_large: str | None = None
    lqip_data_url: str | None = None
    caption: str | None = None
    alt_text: str | None = None
    is_main: bool = False
    sort_order: int = 0

    model_config = {"from_attributes": True}


class AccommodationLookups(BaseModel):
    """Lookup maps; room categories and photos are keyed by accommodation id."""

    accommodations: dict[int, AccommodationRecord] = Field(default_factory=dict)
    room_categories: dict[int, list[RoomCategoryRecord]] = Field(default_factory=dict)
    photos: dict[int, list[AccommodationPhotoRecord]] = Field(default_factory=dict)


class ConditionRecord(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}


class ConditionOptionRecord(BaseModel):
    id: int
    condition_id: int
    label: str
    sort_order: int = 0

    model_config = {"from_attributes": True}


class TripConditionRecord(BaseModel):
    id: int
    condition_id: int
    selected_option_id: int | None = None
    is_active: bool = True

    model_config = {"from_attributes": True}


class ConditionData(BaseModel):
    trip_conditions: list[TripConditionRecord] = Field(default_factory=list)
    conditions: list[ConditionRecord] = Field(default_factory=list)
    condition_options: list[ConditionOptionRecord] = Field(default_factory=list)
    # formula id -> condition option id
    item_condition_map: dict[int, int | None] = Field(default_factory=dict)


# ------- Metadata embedded in description_html -------
class TransportMeta(BaseModel):
    model_config = ConfigDict(extra="ignore")

    travel_mode: str = Field(..., min_length=1)
    location_from_name: str | None = None
    location_to_name: str | None = None
    distance_km: float | None = None
    duration_minutes: float | None = None
    narrative_text: str | None = None

    @field_validator(
        "location_from_name", "location_to_name", "distance_km", "duration_minutes", "narrative_text",
        mode="wrap",
    )
    @classmethod
    def _drop_invalid(cls, value, handler):
        # A bad detail is dropped on its own; the record survives
        try:
            return handler(value)
        except ValidationError:
            return None


class AccommodationMeta(BaseModel):
    model_config = ConfigDict(extra="ignore")

    accommodation_id: int
    selected_room_category_id: int | None = None
    nights: int | None = None
    breakfast_included: bool | None = None
    lunch_included: bool | None = None
    dinner_included: bool | None = None

    @field_validator(
        "selected_room_category_id", "nights",
        "breakfast_included", "lunch_included", "dinner_included",
        mode="wrap",
    )
    @classmethod
    def _drop_invalid(cls, value, handler):
        try:
            return handler(value)
        except ValidationError:
            return None


# ------- Request models -------
class RenderProgramRequest(BaseModel):
    days: list[TripDayRecord]
    lookups: AccommodationLookups = Field(default_factory=AccommodationLookups)
    condition_data: ConditionData | None = None
    start_date: date | None = None
