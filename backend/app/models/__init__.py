from app.models.accommodation import Accommodation, AccommodationPhoto, RoomCategory
from app.models.dossier import Cotation, Dossier, DossierEvent, Participant
from app.models.itinerary import (
    Condition,
    ConditionOption,
    Formula,
    FormulaConditionOption,
    Trip,
    TripCondition,
    TripDay,
)

__all__ = [
    "Accommodation",
    "AccommodationPhoto",
    "Condition",
    "ConditionOption",
    "Cotation",
    "Dossier",
    "DossierEvent",
    "Formula",
    "FormulaConditionOption",
    "Participant",
    "RoomCategory",
    "Trip",
    "TripCondition",
    "TripDay",
]
