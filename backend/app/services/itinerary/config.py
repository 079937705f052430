"""Display tables shared by the itinerary engine."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BlockDisplay:
    icon: str
    label: str


BLOCK_TYPE_DISPLAY: dict[str, BlockDisplay] = {
    "activity": BlockDisplay("compass", "Activity"),
    "text": BlockDisplay("file-text", "Note"),
    "service": BlockDisplay("compass", "Service"),
}

DEFAULT_BLOCK_DISPLAY = BlockDisplay("file-text", "Note")

TRANSPORT_MODES: dict[str, BlockDisplay] = {
    "driving": BlockDisplay("car", "Road"),
    "flight": BlockDisplay("airplane-tilt", "Flight"),
    "transit": BlockDisplay("train", "Train"),
    "boat": BlockDisplay("boat", "Boat"),
    "walking": BlockDisplay("person-simple-walk", "Trek"),
    "horse": BlockDisplay("horse", "Horse"),
    "camel": BlockDisplay("horse", "Camel"),
    "bicycle": BlockDisplay("bicycle", "Bike"),
    "kayak": BlockDisplay("boat", "Kayak"),
}

DEFAULT_TRANSPORT_DISPLAY = BlockDisplay("car", "Transport")

ACCOMMODATION_ICON = "bed"

# Placeholder names the editor gives new blocks; hidden from travelers.
# French labels come from the advisor-side editor.
GENERIC_BLOCK_NAMES = frozenset({
    "New block",
    "New activity",
    "Untitled text",
    "Free text",
    "Text",
    "Transfer",
    "Accommodation",
    "Accommodation not set",
    "Service",
    "Note",
    "Déplacement",
    "Nouvelle activité",
    "Texte",
    "Texte libre",
    "Hébergement",
    "Hébergement non défini",
    "Nouveau bloc",
})

BED_TYPE_LABELS: dict[str, str] = {
    "DBL": "Double",
    "TWN": "Twin",
    "SGL": "Single",
    "TPL": "Triple",
    "TRP": "Triple",
    "QUD": "Quadruple",
    "KNG": "King",
    "QUE": "Queen",
    "FAM": "Family",
    "FTN": "Futon",
    "EXB": "Extra bed",
    "CNT": "Cot",
}

UNLABELED_OPTION_SORT_ORDER = 999
