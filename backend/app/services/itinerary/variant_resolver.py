"""Variant resolver — turns accommodation blocks sharing a condition into a tab set."""

import logging
from dataclasses import dataclass, field

from app.schemas.itinerary import (
    AccommodationLookups,
    ConditionData,
    ConditionOptionRecord,
    FormulaBlock,
    TripConditionRecord,
)
from app.services.itinerary.accommodation_aggregator import (
    AccommodationCard,
    build_accommodation_card,
)
from app.services.itinerary.block_classifier import in_display_order
from app.services.itinerary.config import UNLABELED_OPTION_SORT_ORDER

logger = logging.getLogger(__name__)


@dataclass
class VariantTab:
    formula_id: int
    label: str
    option_id: int | None
    sort_order: int
    is_default: bool = False
    card: AccommodationCard | None = None


@dataclass
class VariantSlot:
    condition_id: int
    condition_name: str | None
    tabs: list[VariantTab] = field(default_factory=list)
    selected_option_id: int | None = None
    # Variant standing in for the slot when only one can apply: the selected one, else the first
    active_formula_id: int | None = None

    @property
    def is_tabbed(self) -> bool:
        """Tabs only render for two or more options."""
        return len(self.tabs) >= 2

    @property
    def default_index(self) -> int | None:
        return next((i for i, t in enumerate(self.tabs) if t.is_default), None)

    @property
    def display_index(self) -> int:
        """Tab shown first: the default one, or the first tab when nothing matches."""
        index = self.default_index
        return index if index is not None else 0


@dataclass
class ResolvedAccommodations:
    standalone: list[FormulaBlock] = field(default_factory=list)
    slots: list[VariantSlot] = field(default_factory=list)


def partition_variants(
    blocks: list[FormulaBlock],
) -> tuple[list[FormulaBlock], dict[int, list[FormulaBlock]]]:
    """Split into standalone blocks and groups keyed by condition_id (first-seen order)."""
    standalone: list[FormulaBlock] = []
    by_condition: dict[int, list[FormulaBlock]] = {}
    for block in in_display_order(blocks):
        if block.condition_id:
            by_condition.setdefault(block.condition_id, []).append(block)
        else:
            standalone.append(block)
    return standalone, by_condition


def _find_trip_condition(data: ConditionData, condition_id: int) -> TripConditionRecord | None:
    return next((tc for tc in data.trip_conditions if tc.condition_id == condition_id), None)


def _find_option(data: ConditionData, option_id: int | None) -> ConditionOptionRecord | None:
    if option_id is None:
        return None
    return next((o for o in data.condition_options if o.id == option_id), None)


def resolve_slot(
    condition_id: int,
    variants: list[FormulaBlock],
    data: ConditionData,
    lookups: AccommodationLookups | None = None,
) -> VariantSlot:
    trip_condition = _find_trip_condition(data, condition_id)
    selected_option_id = trip_condition.selected_option_id if trip_condition else None
    condition = next((c for c in data.conditions if c.id == condition_id), None)

    tabs: list[VariantTab] = []
    for block in variants:
        option_id = data.item_condition_map.get(block.id)
        option = _find_option(data, option_id)
        tabs.append(VariantTab(
            formula_id=block.id,
            label=(option.label if option else None) or block.name or "Option",
            option_id=option_id,
            sort_order=option.sort_order if option else UNLABELED_OPTION_SORT_ORDER,
            card=build_accommodation_card(block, lookups) if lookups is not None else None,
        ))
    tabs.sort(key=lambda t: t.sort_order)
    active = find_active_variant(variants, condition_id, data)

    # At most one default, and only on an actual option match
    if selected_option_id is not None:
        for tab in tabs:
            if tab.option_id == selected_option_id:
                tab.is_default = True
                break
        else:
            logger.info(
                f"Selected option {selected_option_id} matches no variant of condition "
                f"{condition_id}; falling back to first tab"
            )

    return VariantSlot(
        condition_id=condition_id,
        condition_name=condition.name if condition else None,
        tabs=tabs,
        selected_option_id=selected_option_id,
        active_formula_id=active.id if active else None,
    )


def resolve_variants(
    accommodation_blocks: list[FormulaBlock],
    data: ConditionData | None,
    lookups: AccommodationLookups | None = None,
) -> ResolvedAccommodations:
    standalone, by_condition = partition_variants(accommodation_blocks)
    data = data or ConditionData()
    slots = [
        resolve_slot(condition_id, variants, data, lookups)
        for condition_id, variants in by_condition.items()
    ]
    return ResolvedAccommodations(standalone=standalone, slots=slots)


def find_active_variant(
    variants: list[FormulaBlock], condition_id: int, data: ConditionData | None
) -> FormulaBlock | None:
    """The variant matching the trip's selection, else the first one."""
    if not variants:
        return None
    if data is None:
        return variants[0]
    tc = _find_trip_condition(data, condition_id)
    if tc is None or not tc.is_active or not tc.selected_option_id:
        return variants[0]
    match = next(
        (v for v in variants if data.item_condition_map.get(v.id) == tc.selected_option_id),
        None,
    )
    return match or variants[0]
