"""Program service — loads a trip's stored itinerary and renders it."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.accommodation import Accommodation, AccommodationPhoto, RoomCategory
from app.models.itinerary import (
    Condition,
    ConditionOption,
    FormulaConditionOption,
    Trip,
    TripCondition,
    TripDay,
)
from app.schemas.itinerary import (
    AccommodationLookups,
    AccommodationPhotoRecord,
    AccommodationRecord,
    ConditionData,
    ConditionOptionRecord,
    ConditionRecord,
    RoomCategoryRecord,
    TripConditionRecord,
    TripDayRecord,
)
from app.services.itinerary.metadata_parser import parse_accommodation_meta
from app.services.itinerary.program_builder import ProgramView, build_program

logger = logging.getLogger(__name__)


class ProgramService:
    """Fetches days, blocks and lookup tables for a trip, then runs the engine."""

    async def load_program(self, db: AsyncSession, trip_id: int) -> ProgramView:
        result = await db.execute(select(Trip).where(Trip.id == trip_id))
        trip = result.scalar_one_or_none()
        if not trip:
            raise ValueError("Trip not found")

        day_result = await db.execute(
            select(TripDay)
            .where(TripDay.trip_id == trip_id)
            .options(selectinload(TripDay.formulas))
            .order_by(TripDay.day_number)
        )
        days = [TripDayRecord.model_validate(d) for d in day_result.scalars().all()]

        lookups = await self._load_lookups(db, days)
        condition_data = await self._load_conditions(db, trip_id, days)

        return build_program(days, lookups, condition_data, trip.start_date)

    async def _load_lookups(
        self, db: AsyncSession, days: list[TripDayRecord]
    ) -> AccommodationLookups:
        accommodation_ids: set[int] = set()
        for day in days:
            for formula in day.formulas:
                if formula.block_type != "accommodation":
                    continue
                meta = parse_accommodation_meta(formula.description_html)
                if meta:
                    accommodation_ids.add(meta.accommodation_id)

        if not accommodation_ids:
            return AccommodationLookups()

        acc_result = await db.execute(
            select(Accommodation).where(Accommodation.id.in_(accommodation_ids))
        )
        room_result = await db.execute(
            select(RoomCategory).where(RoomCategory.accommodation_id.in_(accommodation_ids))
        )
        photo_result = await db.execute(
            select(AccommodationPhoto)
            .where(AccommodationPhoto.accommodation_id.in_(accommodation_ids))
            .order_by(AccommodationPhoto.sort_order)
        )

        lookups = AccommodationLookups(
            accommodations={
                a.id: AccommodationRecord.model_validate(a) for a in acc_result.scalars().all()
            },
        )
        for room in room_result.scalars().all():
            lookups.room_categories.setdefault(room.accommodation_id, []).append(
                RoomCategoryRecord.model_validate(room)
            )
        for photo in photo_result.scalars().all():
            lookups.photos.setdefault(photo.accommodation_id, []).append(
                AccommodationPhotoRecord.model_validate(photo)
            )

        missing = accommodation_ids - set(lookups.accommodations)
        if missing:
            logger.info(f"Accommodations referenced but not found: {sorted(missing)}")
        return lookups

    async def _load_conditions(
        self, db: AsyncSession, trip_id: int, days: list[TripDayRecord]
    ) -> ConditionData:
        tc_result = await db.execute(select(TripCondition).where(TripCondition.trip_id == trip_id))
        trip_conditions = tc_result.scalars().all()

        condition_ids = {tc.condition_id for tc in trip_conditions}
        formula_ids = set()
        for day in days:
            for formula in day.formulas:
                formula_ids.add(formula.id)
                if formula.condition_id:
                    condition_ids.add(formula.condition_id)

        if not condition_ids:
            return ConditionData()

        cond_result = await db.execute(select(Condition).where(Condition.id.in_(condition_ids)))
        opt_result = await db.execute(
            select(ConditionOption).where(ConditionOption.condition_id.in_(condition_ids))
        )
        map_result = await db.execute(
            select(FormulaConditionOption).where(FormulaConditionOption.formula_id.in_(formula_ids))
        )

        return ConditionData(
            trip_conditions=[TripConditionRecord.model_validate(tc) for tc in trip_conditions],
            conditions=[ConditionRecord.model_validate(c) for c in cond_result.scalars().all()],
            condition_options=[
                ConditionOptionRecord.model_validate(o) for o in opt_result.scalars().all()
            ],
            item_condition_map={
                m.formula_id: m.condition_option_id for m in map_result.scalars().all()
            },
        )


program_service = ProgramService()
