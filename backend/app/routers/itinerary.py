"""Itinerary router — client-facing day-by-day program."""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.encoders import jsonable_encoder
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.itinerary import RenderProgramRequest
from app.services.itinerary.program_builder import ProgramView, build_program
from app.services.program_service import program_service

router = APIRouter()


def _program_payload(program: ProgramView) -> dict:
    """Serialize the program, adding the derived display flags."""
    payload = jsonable_encoder(program)
    for day_payload, day in zip(payload["days"], program.days):
        day_payload["has_accommodation"] = day.has_accommodation
        day_payload["meals"]["any"] = day.meals.any
        for slot_payload, slot in zip(day_payload["variant_slots"], day.variant_slots):
            slot_payload["is_tabbed"] = slot.is_tabbed
            slot_payload["default_index"] = slot.default_index
            slot_payload["display_index"] = slot.display_index
    payload["has_stays"] = program.has_stays
    return payload


@router.post("/itinerary/render")
async def render_program(req: RenderProgramRequest):
    """Render already-fetched days and lookups, without touching the database."""
    program = build_program(req.days, req.lookups, req.condition_data, req.start_date)
    return _program_payload(program)


@router.get("/trips/{trip_id}/program")
async def get_trip_program(trip_id: int, db: AsyncSession = Depends(get_db)):
    """Day-by-day program and accommodation summary for a stored trip."""
    try:
        program = await program_service.load_program(db, trip_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _program_payload(program)
