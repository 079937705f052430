from collections.abc import Iterable
from dataclasses import dataclass

from app.schemas.itinerary import AccommodationMeta, TripDayRecord


@dataclass(frozen=True)
class MealSummary:
    breakfast: bool = False
    lunch: bool = False
    dinner: bool = False

    @property
    def any(self) -> bool:
        return self.breakfast or self.lunch or self.dinner


def aggregate_meals(day: TripDayRecord, metas: Iterable[AccommodationMeta | None]) -> MealSummary:
    """OR of the day's own flags and every accommodation block's flags.

    When variants exist all of them contribute, so a meal is never reported
    missing because one particular option was picked.
    """
    breakfast = bool(day.breakfast_included)
    lunch = bool(day.lunch_included)
    dinner = bool(day.dinner_included)
    for meta in metas:
        if meta is None:
            continue
        breakfast = breakfast or bool(meta.breakfast_included)
        lunch = lunch or bool(meta.lunch_included)
        dinner = dinner or bool(meta.dinner_included)
    return MealSummary(breakfast=breakfast, lunch=lunch, dinner=dinner)
