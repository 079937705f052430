"""Program builder — runs the engine over every day of a trip."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date

from app.schemas.itinerary import (
    AccommodationLookups,
    ConditionData,
    TripDayRecord,
)
from app.services.itinerary.accommodation_aggregator import (
    AccommodationCard,
    Stay,
    build_accommodation_card,
    build_stays,
)
from app.services.itinerary.block_classifier import block_display, classify_blocks, is_generic_name
from app.services.itinerary.day_labels import day_badge, format_day_label, location_line
from app.services.itinerary.meal_aggregator import MealSummary, aggregate_meals
from app.services.itinerary.metadata_parser import display_text, parse_accommodation_meta
from app.services.itinerary.transport_enricher import TransportSummary, enrich_transport
from app.services.itinerary.variant_resolver import VariantSlot, resolve_variants

logger = logging.getLogger(__name__)


@dataclass
class RegularBlockView:
    formula_id: int
    block_type: str | None
    icon: str
    label: str
    name: str | None  # None when the name is a placeholder
    text_html: str | None


@dataclass
class DayView:
    trip_day_id: int
    day_number: int
    day_number_end: int | None
    day_label: str
    date_label: str | None
    badge: str
    title: str | None
    location: str | None
    description: str | None
    transports: list[TransportSummary] = field(default_factory=list)
    regular: list[RegularBlockView] = field(default_factory=list)
    accommodations: list[AccommodationCard] = field(default_factory=list)
    variant_slots: list[VariantSlot] = field(default_factory=list)
    meals: MealSummary = field(default_factory=MealSummary)

    @property
    def has_accommodation(self) -> bool:
        return bool(self.accommodations or self.variant_slots)


@dataclass
class ProgramView:
    days: list[DayView] = field(default_factory=list)
    stays: list[Stay] = field(default_factory=list)

    @property
    def has_stays(self) -> bool:
        return bool(self.stays)


def build_day(
    day: TripDayRecord,
    lookups: AccommodationLookups | None = None,
    condition_data: ConditionData | None = None,
    start_date: date | None = None,
) -> DayView:
    lookups = lookups or AccommodationLookups()
    blocks = classify_blocks(day.formulas)
    accommodation_metas = {
        b.id: parse_accommodation_meta(b.description_html) for b in blocks.accommodation
    }

    resolved = resolve_variants(blocks.accommodation, condition_data, lookups)
    cards = [
        card
        for card in (
            build_accommodation_card(b, lookups, accommodation_metas[b.id])
            for b in resolved.standalone
        )
        if card is not None
    ]

    regular = []
    for block in blocks.regular:
        display = block_display(block.block_type)
        regular.append(RegularBlockView(
            formula_id=block.id,
            block_type=block.block_type,
            icon=display.icon,
            label=display.label,
            name=None if is_generic_name(block.name) else block.name,
            text_html=display_text(block.description_html),
        ))

    day_label, date_label = format_day_label(day.day_number, day.day_number_end, start_date)
    return DayView(
        trip_day_id=day.id,
        day_number=day.day_number,
        day_number_end=day.day_number_end,
        day_label=day_label,
        date_label=date_label,
        badge=day_badge(day.day_number, day.day_number_end),
        title=day.title,
        location=location_line(day.location_from, day.location_to),
        description=day.description,
        transports=[enrich_transport(b) for b in blocks.transport],
        regular=regular,
        accommodations=cards,
        variant_slots=resolved.slots,
        meals=aggregate_meals(day, accommodation_metas.values()),
    )


def build_program(
    days: Iterable[TripDayRecord],
    lookups: AccommodationLookups | None = None,
    condition_data: ConditionData | None = None,
    start_date: date | None = None,
) -> ProgramView:
    """Render every day (ascending day_number) and the merged stays summary."""
    lookups = lookups or AccommodationLookups()
    ordered = sorted(days, key=lambda d: d.day_number)
    program = ProgramView(
        days=[build_day(d, lookups, condition_data, start_date) for d in ordered],
        stays=build_stays(ordered, lookups),
    )
    logger.debug(f"Built program: {len(program.days)} days, {len(program.stays)} stays")
    return program
