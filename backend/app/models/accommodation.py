from sqlalchemy import JSON, Boolean, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Accommodation(Base):
    __tablename__ = "accommodations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    star_rating: Mapped[int | None] = mapped_column(Integer)

    room_categories: Mapped[list["RoomCategory"]] = relationship(
        back_populates="accommodation", cascade="all, delete-orphan"
    )
    photos: Mapped[list["AccommodationPhoto"]] = relationship(
        back_populates="accommodation",
        cascade="all, delete-orphan",
        order_by="AccommodationPhoto.sort_order",
    )


class RoomCategory(Base):
    __tablename__ = "room_categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    accommodation_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("accommodations.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    available_bed_types: Mapped[list | None] = mapped_column(JSON, default=list)
    size_sqm: Mapped[float | None] = mapped_column(Numeric(6, 1))
    max_occupancy: Mapped[int | None] = mapped_column(Integer)

    accommodation: Mapped["Accommodation"] = relationship(back_populates="room_categories")


class AccommodationPhoto(Base):
    __tablename__ = "accommodation_photos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    accommodation_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("accommodations.id", ondelete="CASCADE"), nullable=False
    )
    # Null for hotel-level photos
    room_category_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("room_categories.id", ondelete="SET NULL")
    )
    url: Mapped[str] = mapped_column(Text, nullable=False)
    url_medium: Mapped[str | None] = mapped_column(Text)
    url_large: Mapped[str | None] = mapped_column(Text)
    lqip_data_url: Mapped[str | None] = mapped_column(Text)
    caption: Mapped[str | None] = mapped_column(String(500))
    alt_text: Mapped[str | None] = mapped_column(String(500))
    is_main: Mapped[bool] = mapped_column(Boolean, default=False)
    sort_order: Mapped[int] = mapped_column(Integer, default=0)

    accommodation: Mapped["Accommodation"] = relationship(back_populates="photos")
