"""Route headline, duration and distance labels for transport blocks."""

from dataclasses import dataclass

from app.schemas.itinerary import FormulaBlock, TransportMeta
from app.services.itinerary.block_classifier import is_generic_name
from app.services.itinerary.config import DEFAULT_TRANSPORT_DISPLAY, TRANSPORT_MODES, BlockDisplay
from app.services.itinerary.metadata_parser import parse_transport_meta


@dataclass
class TransportSummary:
    formula_id: int
    icon: str
    mode_label: str
    headline: str
    travel_mode: str | None = None
    duration_label: str | None = None
    distance_label: str | None = None
    narrative_html: str | None = None


def transport_display(travel_mode: str | None) -> BlockDisplay:
    if not travel_mode:
        return DEFAULT_TRANSPORT_DISPLAY
    return TRANSPORT_MODES.get(travel_mode, DEFAULT_TRANSPORT_DISPLAY)


def format_duration(minutes: float) -> str:
    """90 -> '1h30', 120 -> '2h', 45 -> '45min'."""
    total = int(round(minutes))
    hours, mins = divmod(total, 60)
    if hours > 0 and mins > 0:
        return f"{hours}h{mins:02d}"
    if hours > 0:
        return f"{hours}h"
    return f"{mins}min"


def format_distance(distance_km: float) -> str:
    value = int(distance_km) if float(distance_km).is_integer() else round(distance_km, 1)
    return f"{value} km"


def enrich_transport(block: FormulaBlock, meta: TransportMeta | None = None) -> TransportSummary:
    """Headline: explicit route, else the block's own name, else the mode label."""
    if meta is None:
        meta = parse_transport_meta(block.description_html)
    display = transport_display(meta.travel_mode if meta else None)

    if meta and meta.location_from_name and meta.location_to_name:
        headline = f"{meta.location_from_name} → {meta.location_to_name}"
    elif not is_generic_name(block.name):
        headline = block.name
    else:
        headline = display.label

    return TransportSummary(
        formula_id=block.id,
        icon=display.icon,
        mode_label=display.label,
        headline=headline,
        travel_mode=meta.travel_mode if meta else None,
        duration_label=(
            format_duration(meta.duration_minutes)
            if meta and meta.duration_minutes and round(meta.duration_minutes) > 0
            else None
        ),
        distance_label=(
            format_distance(meta.distance_km)
            if meta and meta.distance_km and meta.distance_km > 0
            else None
        ),
        narrative_html=meta.narrative_text if meta and meta.narrative_text else None,
    )
