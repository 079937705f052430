"""Proposal selection — which of a dossier's proposals is the client's chosen one.

States, per dossier: unselected → selected (choose) → deselected (unchoose) →
selected again on a new choice. ``Dossier.selected_trip_id`` is the persisted
pointer; choosing simply overwrites it, so at most one proposal is ever
selected. Deselection is locked once the dossier reaches an irrevocable status.
"""

import logging
import uuid
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, settings
from app.models.dossier import Cotation, Dossier, DossierEvent, Participant
from app.models.itinerary import Trip

logger = logging.getLogger(__name__)


class SelectionError(ValueError):
    """Base class for rejected choose/unchoose operations."""


class SelectionForbidden(SelectionError):
    pass


class SelectionNotFound(SelectionError):
    pass


class SelectionConflict(SelectionError):
    pass


class SelectionNetworkError(SelectionError):
    """The choose/unchoose request never got a usable answer from the server."""


@dataclass(frozen=True)
class SelectionPolicy:
    irrevocable_statuses: frozenset[str]
    closed_statuses: frozenset[str]
    pre_selection_statuses: frozenset[str]
    selection_status: str = "option"
    default_revert_status: str = "quote_sent"

    @classmethod
    def from_settings(cls, cfg: Settings) -> "SelectionPolicy":
        return cls(
            irrevocable_statuses=frozenset(cfg.irrevocable_status_set),
            closed_statuses=frozenset(cfg.closed_status_set),
            pre_selection_statuses=frozenset(cfg.pre_selection_status_set),
            selection_status=cfg.selection_status,
            default_revert_status=cfg.default_revert_status,
        )

    def can_choose(self, dossier_status: str | None) -> bool:
        return (dossier_status or "") not in self.closed_statuses

    def can_unchoose(self, dossier_status: str | None) -> bool:
        return (dossier_status or "") not in self.irrevocable_statuses


@dataclass
class ChoiceOutcome:
    trip_id: int
    previous_trip_id: int | None
    cancelled_trip_ids: list[int] = field(default_factory=list)
    cotation_name: str | None = None


@dataclass
class UnchoiceOutcome:
    trip_id: int
    restored_trip_ids: list[int] = field(default_factory=list)

    @property
    def trips_restored(self) -> int:
        return len(self.restored_trip_ids)


def apply_choice(
    dossier: Dossier,
    trips: Sequence[Trip],
    trip_id: int,
    policy: SelectionPolicy,
    cotation: Cotation | None = None,
    now: datetime | None = None,
) -> ChoiceOutcome:
    """Point the dossier at ``trip_id``. Validates everything before mutating."""
    if not policy.can_choose(dossier.status):
        raise SelectionForbidden(f"Dossier cannot select a proposal in status '{dossier.status}'")

    chosen = next((t for t in trips if t.id == trip_id), None)
    if chosen is None:
        raise SelectionNotFound("This trip is not linked to the dossier")

    outcome = ChoiceOutcome(trip_id=trip_id, previous_trip_id=dossier.selected_trip_id)

    if chosen.status != "confirmed":
        chosen.status = "option"
    for trip in trips:
        if trip.id == trip_id or trip.status in ("cancelled", "archived"):
            continue
        trip.status = "cancelled"
        outcome.cancelled_trip_ids.append(trip.id)

    if dossier.status in policy.pre_selection_statuses:
        dossier.status_before_selection = dossier.status
        dossier.status = policy.selection_status

    dossier.selected_trip_id = trip_id
    dossier.selected_at = now or datetime.now(timezone.utc)
    if cotation is not None:
        outcome.cotation_name = cotation.client_label or cotation.name
        dossier.selected_cotation_id = cotation.id
        dossier.selected_cotation_name = outcome.cotation_name
    else:
        dossier.selected_cotation_id = None
        dossier.selected_cotation_name = None

    return outcome


def apply_unchoice(
    dossier: Dossier, trips: Sequence[Trip], policy: SelectionPolicy
) -> UnchoiceOutcome:
    """Clear the dossier's selection and put every withdrawn proposal back on offer."""
    if not policy.can_unchoose(dossier.status):
        raise SelectionForbidden(
            f"Selection can no longer be changed in status '{dossier.status}'"
        )
    if dossier.selected_trip_id is None:
        raise SelectionConflict("No proposal is currently selected")

    outcome = UnchoiceOutcome(trip_id=dossier.selected_trip_id)
    for trip in trips:
        if trip.id == dossier.selected_trip_id or trip.status == "cancelled":
            trip.status = "sent"
            outcome.restored_trip_ids.append(trip.id)

    if dossier.status == policy.selection_status:
        dossier.status = dossier.status_before_selection or policy.default_revert_status

    dossier.selected_trip_id = None
    dossier.selected_at = None
    dossier.selected_cotation_id = None
    dossier.selected_cotation_name = None
    dossier.status_before_selection = None
    return outcome


def split_proposals(
    trips: Sequence[Trip], confirmed_id: int | None
) -> tuple[Trip | None, list[Trip], list[Trip]]:
    """(confirmed, others, archived). Archived ones are only listed once a choice exists.

    The confirmed trip is looked up among all trips, so a selection that was
    archived afterwards is still reported as the confirmed one.
    """
    confirmed = next((t for t in trips if t.id == confirmed_id), None) if confirmed_id else None
    rest = [t for t in trips if confirmed is None or t.id != confirmed.id]
    active = [t for t in rest if t.status != "archived"]
    if confirmed is None:
        return None, active, []
    return confirmed, active, [t for t in rest if t.status == "archived"]


class ProposalSelectionService:
    """Persists choose/unchoose on a dossier and records the matching events."""

    def __init__(self, policy: SelectionPolicy | None = None):
        self.policy = policy or SelectionPolicy.from_settings(settings)

    async def choose(
        self,
        db: AsyncSession,
        dossier_id: uuid.UUID,
        participant_id: uuid.UUID,
        trip_id: int,
        cotation_id: int | None = None,
    ) -> dict:
        dossier = await self._get_dossier(db, dossier_id)
        participant = await self._get_lead(db, dossier, participant_id)
        trips = await self._get_trips(db, dossier)

        cotation = None
        if cotation_id is not None:
            result = await db.execute(
                select(Cotation).where(Cotation.id == cotation_id, Cotation.trip_id == trip_id)
            )
            cotation = result.scalar_one_or_none()
            if cotation is None:
                raise SelectionNotFound("Cotation not found for this trip")

        outcome = apply_choice(dossier, trips, trip_id, self.policy, cotation)

        payload = {
            "trip_id": trip_id,
            "selected_by": participant.name,
            "previous_trip_id": outcome.previous_trip_id,
            "cancelled_trip_ids": outcome.cancelled_trip_ids,
        }
        if cotation is not None:
            payload["cotation_id"] = cotation.id
            payload["cotation_name"] = outcome.cotation_name
        db.add(DossierEvent(
            dossier_id=dossier.id,
            event_type="proposal_selected_by_client",
            payload=payload,
        ))
        await db.commit()

        logger.info(f"Dossier {dossier.id}: proposal {trip_id} selected by {participant.name}")
        return {
            "dossier_id": dossier.id,
            "selected_trip_id": dossier.selected_trip_id,
            "dossier_status": dossier.status,
            "cotation_name": outcome.cotation_name,
        }

    async def unchoose(
        self, db: AsyncSession, dossier_id: uuid.UUID, participant_id: uuid.UUID
    ) -> dict:
        dossier = await self._get_dossier(db, dossier_id)
        participant = await self._get_lead(db, dossier, participant_id)
        trips = await self._get_trips(db, dossier)

        try:
            outcome = apply_unchoice(dossier, trips, self.policy)
        except SelectionForbidden:
            logger.warning(
                f"Dossier {dossier.id}: deselection refused in status '{dossier.status}'"
            )
            raise

        db.add(DossierEvent(
            dossier_id=dossier.id,
            event_type="proposal_deselected_by_client",
            payload={
                "trip_id": outcome.trip_id,
                "deselected_by": participant.name,
                "trips_restored": outcome.trips_restored,
            },
        ))
        await db.commit()

        logger.info(
            f"Dossier {dossier.id}: proposal {outcome.trip_id} deselected, "
            f"{outcome.trips_restored} proposals restored"
        )
        return {
            "dossier_id": dossier.id,
            "selected_trip_id": None,
            "dossier_status": dossier.status,
            "trips_restored": outcome.trips_restored,
        }

    async def list_proposals(
        self,
        db: AsyncSession,
        dossier_id: uuid.UUID,
        participant_id: uuid.UUID | None = None,
    ) -> dict:
        dossier = await self._get_dossier(db, dossier_id)
        trips = await self._get_trips(db, dossier)

        is_lead = False
        if participant_id is not None:
            result = await db.execute(
                select(Participant).where(
                    Participant.id == participant_id, Participant.dossier_id == dossier.id
                )
            )
            participant = result.scalar_one_or_none()
            is_lead = bool(participant and participant.is_lead)

        confirmed, others, archived = split_proposals(trips, dossier.selected_trip_id)
        return {
            "dossier_status": dossier.status,
            "effective_confirmed_id": confirmed.id if confirmed else None,
            "selected_cotation_id": dossier.selected_cotation_id,
            "confirmed": confirmed,
            "others": others,
            "archived": archived,
            "can_deselect": (
                is_lead
                and confirmed is not None
                and self.policy.can_unchoose(dossier.status)
            ),
        }

    async def _get_dossier(self, db: AsyncSession, dossier_id: uuid.UUID) -> Dossier:
        result = await db.execute(select(Dossier).where(Dossier.id == dossier_id))
        dossier = result.scalar_one_or_none()
        if dossier is None:
            raise SelectionNotFound("Dossier not found")
        return dossier

    async def _get_lead(
        self, db: AsyncSession, dossier: Dossier, participant_id: uuid.UUID
    ) -> Participant:
        result = await db.execute(
            select(Participant).where(
                Participant.id == participant_id, Participant.dossier_id == dossier.id
            )
        )
        participant = result.scalar_one_or_none()
        if participant is None or not participant.is_lead:
            raise SelectionForbidden("Only the lead traveler can change the selected proposal")
        return participant

    async def _get_trips(self, db: AsyncSession, dossier: Dossier) -> list[Trip]:
        result = await db.execute(
            select(Trip).where(Trip.dossier_id == dossier.id).order_by(Trip.id)
        )
        return list(result.scalars().all())


proposal_selection_service = ProposalSelectionService()
