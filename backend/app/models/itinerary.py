import uuid
from datetime import date
from decimal import Decimal

from sqlalchemy import Boolean, Date, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Trip(Base):
    """One proposal (candidate itinerary) offered on a dossier."""

    __tablename__ = "trips"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    dossier_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("dossiers.id", ondelete="SET NULL")
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # draft | sent | option | confirmed | cancelled | archived
    status: Mapped[str] = mapped_column(String(20), default="draft")
    destination: Mapped[str | None] = mapped_column(String(255))
    start_date: Mapped[date | None] = mapped_column(Date)
    total_sell: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    currency: Mapped[str] = mapped_column(String(3), default="EUR")

    days: Mapped[list["TripDay"]] = relationship(
        back_populates="trip", cascade="all, delete-orphan", order_by="TripDay.day_number"
    )


class TripDay(Base):
    __tablename__ = "trip_days"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    trip_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False
    )
    day_number: Mapped[int] = mapped_column(Integer, nullable=False)
    day_number_end: Mapped[int | None] = mapped_column(Integer)
    title: Mapped[str | None] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text)
    location_from: Mapped[str | None] = mapped_column(String(255))
    location_to: Mapped[str | None] = mapped_column(String(255))
    breakfast_included: Mapped[bool] = mapped_column(Boolean, default=False)
    lunch_included: Mapped[bool] = mapped_column(Boolean, default=False)
    dinner_included: Mapped[bool] = mapped_column(Boolean, default=False)

    trip: Mapped["Trip"] = relationship(back_populates="days")
    formulas: Mapped[list["Formula"]] = relationship(
        back_populates="trip_day", cascade="all, delete-orphan", order_by="Formula.sort_order"
    )


class Formula(Base):
    """A block inside a day: accommodation, transport, activity, text, service or roadbook."""

    __tablename__ = "formulas"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    trip_day_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("trip_days.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), default="")
    block_type: Mapped[str | None] = mapped_column(String(30))
    # Free text, or a JSON payload for accommodation/transport blocks
    description_html: Mapped[str | None] = mapped_column(Text)
    sort_order: Mapped[int | None] = mapped_column(Integer, default=0)
    condition_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("conditions.id", ondelete="SET NULL")
    )
    parent_block_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("formulas.id", ondelete="SET NULL")
    )

    trip_day: Mapped["TripDay"] = relationship(back_populates="formulas")


class Condition(Base):
    __tablename__ = "conditions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    options: Mapped[list["ConditionOption"]] = relationship(
        back_populates="condition", cascade="all, delete-orphan", order_by="ConditionOption.sort_order"
    )


class ConditionOption(Base):
    __tablename__ = "condition_options"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    condition_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("conditions.id", ondelete="CASCADE"), nullable=False
    )
    label: Mapped[str] = mapped_column(String(255), nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, default=0)

    condition: Mapped["Condition"] = relationship(back_populates="options")


class TripCondition(Base):
    __tablename__ = "trip_conditions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    trip_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False
    )
    condition_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("conditions.id", ondelete="CASCADE"), nullable=False
    )
    selected_option_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("condition_options.id", ondelete="SET NULL")
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)


class FormulaConditionOption(Base):
    """Links a variant block to the condition option it represents."""

    __tablename__ = "formula_condition_options"

    formula_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("formulas.id", ondelete="CASCADE"), primary_key=True
    )
    condition_option_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("condition_options.id", ondelete="SET NULL")
    )
