import uuid
from datetime import date

from pydantic import BaseModel


class ChooseProposalRequest(BaseModel):
    participant_id: uuid.UUID
    trip_id: int
    cotation_id: int | None = None


class UnchooseProposalRequest(BaseModel):
    participant_id: uuid.UUID


class ProposalSummary(BaseModel):
    id: int
    name: str
    status: str
    destination: str | None
    start_date: date | None
    total_sell: float | None
    currency: str

    model_config = {"from_attributes": True}


class ProposalsResponse(BaseModel):
    dossier_status: str
    effective_confirmed_id: int | None
    selected_cotation_id: int | None
    confirmed: ProposalSummary | None
    others: list[ProposalSummary]
    archived: list[ProposalSummary]
    can_deselect: bool


class SelectionResponse(BaseModel):
    dossier_id: uuid.UUID
    selected_trip_id: int | None
    dossier_status: str
    cotation_name: str | None = None
    trips_restored: int | None = None
