"""Proposals router — list a dossier's proposals, choose or withdraw one."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.proposal import (
    ChooseProposalRequest,
    ProposalsResponse,
    SelectionResponse,
    UnchooseProposalRequest,
)
from app.services.proposal_selection import (
    SelectionConflict,
    SelectionError,
    SelectionForbidden,
    SelectionNotFound,
    proposal_selection_service,
)

router = APIRouter()


def _http_error(e: SelectionError) -> HTTPException:
    if isinstance(e, SelectionForbidden):
        return HTTPException(status_code=403, detail=str(e))
    if isinstance(e, SelectionNotFound):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, SelectionConflict):
        return HTTPException(status_code=409, detail=str(e))
    return HTTPException(status_code=422, detail=str(e))


@router.get("/{dossier_id}/proposals", response_model=ProposalsResponse)
async def list_proposals(
    dossier_id: uuid.UUID,
    participant_id: uuid.UUID | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """Confirmed proposal first, then the others; archived ones once a choice exists."""
    try:
        result = await proposal_selection_service.list_proposals(db, dossier_id, participant_id)
    except SelectionError as e:
        raise _http_error(e)
    return result


@router.post("/{dossier_id}/proposals/choose", response_model=SelectionResponse)
async def choose_proposal(
    dossier_id: uuid.UUID,
    req: ChooseProposalRequest,
    db: AsyncSession = Depends(get_db),
):
    """Select a proposal (optionally a specific cotation) for the dossier."""
    try:
        return await proposal_selection_service.choose(
            db, dossier_id, req.participant_id, req.trip_id, req.cotation_id
        )
    except SelectionError as e:
        await db.rollback()
        raise _http_error(e)


@router.post("/{dossier_id}/proposals/unchoose", response_model=SelectionResponse)
async def unchoose_proposal(
    dossier_id: uuid.UUID,
    req: UnchooseProposalRequest,
    db: AsyncSession = Depends(get_db),
):
    """Withdraw the current selection; refused once the dossier is locked."""
    try:
        return await proposal_selection_service.unchoose(db, dossier_id, req.participant_id)
    except SelectionError as e:
        await db.rollback()
        raise _http_error(e)
