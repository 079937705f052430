"""Portal: dossiers, proposals, itinerary blocks, accommodations, conditions

Revision ID: portal_001
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision = "portal_001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # --- dossiers ---
    op.create_table(
        "dossiers",
        sa.Column("id", UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("title", sa.String(255)),
        sa.Column("status", sa.String(30), server_default="lead", nullable=False),
        sa.Column("selected_trip_id", sa.Integer),
        sa.Column("selected_at", sa.DateTime(timezone=True)),
        sa.Column("selected_cotation_id", sa.Integer),
        sa.Column("selected_cotation_name", sa.String(255)),
        sa.Column("status_before_selection", sa.String(30)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("idx_dossiers_status", "dossiers", ["status"])

    op.create_table(
        "participants",
        sa.Column("id", UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("dossier_id", UUID(as_uuid=True), sa.ForeignKey("dossiers.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255)),
        sa.Column("is_lead", sa.Boolean, server_default="false"),
    )
    op.create_index("idx_participants_dossier", "participants", ["dossier_id"])

    op.create_table(
        "dossier_events",
        sa.Column("id", UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("dossier_id", UUID(as_uuid=True), sa.ForeignKey("dossiers.id", ondelete="CASCADE"), nullable=False),
        sa.Column("event_type", sa.String(50), nullable=False),
        sa.Column("payload", sa.JSON),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("idx_dossier_events_dossier", "dossier_events", ["dossier_id", "created_at"])

    # --- accommodations ---
    op.create_table(
        "accommodations",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("star_rating", sa.Integer),
    )
    op.create_table(
        "room_categories",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("accommodation_id", sa.Integer, sa.ForeignKey("accommodations.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("available_bed_types", sa.JSON, server_default="[]"),
        sa.Column("size_sqm", sa.Numeric(6, 1)),
        sa.Column("max_occupancy", sa.Integer),
    )
    op.create_table(
        "accommodation_photos",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("accommodation_id", sa.Integer, sa.ForeignKey("accommodations.id", ondelete="CASCADE"), nullable=False),
        sa.Column("room_category_id", sa.Integer, sa.ForeignKey("room_categories.id", ondelete="SET NULL")),
        sa.Column("url", sa.Text, nullable=False),
        sa.Column("url_medium", sa.Text),
        sa.Column("url_large", sa.Text),
        sa.Column("lqip_data_url", sa.Text),
        sa.Column("caption", sa.String(500)),
        sa.Column("alt_text", sa.String(500)),
        sa.Column("is_main", sa.Boolean, server_default="false"),
        sa.Column("sort_order", sa.Integer, server_default="0"),
    )
    op.create_index("idx_accommodation_photos_acc", "accommodation_photos", ["accommodation_id", "sort_order"])

    # --- conditions ---
    op.create_table(
        "conditions",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
    )
    op.create_table(
        "condition_options",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("condition_id", sa.Integer, sa.ForeignKey("conditions.id", ondelete="CASCADE"), nullable=False),
        sa.Column("label", sa.String(255), nullable=False),
        sa.Column("sort_order", sa.Integer, server_default="0"),
    )

    # --- trips (proposals) and their days ---
    op.create_table(
        "trips",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("dossier_id", UUID(as_uuid=True), sa.ForeignKey("dossiers.id", ondelete="SET NULL")),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("status", sa.String(20), server_default="draft", nullable=False),
        sa.Column("destination", sa.String(255)),
        sa.Column("start_date", sa.Date),
        sa.Column("total_sell", sa.Numeric(12, 2)),
        sa.Column("currency", sa.String(3), server_default="EUR"),
    )
    op.create_index("idx_trips_dossier", "trips", ["dossier_id"])

    op.create_table(
        "trip_cotations",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("trip_id", sa.Integer, sa.ForeignKey("trips.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("client_label", sa.String(255)),
    )
    op.create_table(
        "trip_conditions",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("trip_id", sa.Integer, sa.ForeignKey("trips.id", ondelete="CASCADE"), nullable=False),
        sa.Column("condition_id", sa.Integer, sa.ForeignKey("conditions.id", ondelete="CASCADE"), nullable=False),
        sa.Column("selected_option_id", sa.Integer, sa.ForeignKey("condition_options.id", ondelete="SET NULL")),
        sa.Column("is_active", sa.Boolean, server_default="true"),
    )
    op.create_index("idx_trip_conditions_trip", "trip_conditions", ["trip_id", "condition_id"], unique=True)

    op.create_table(
        "trip_days",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("trip_id", sa.Integer, sa.ForeignKey("trips.id", ondelete="CASCADE"), nullable=False),
        sa.Column("day_number", sa.Integer, nullable=False),
        sa.Column("day_number_end", sa.Integer),
        sa.Column("title", sa.String(255)),
        sa.Column("description", sa.Text),
        sa.Column("location_from", sa.String(255)),
        sa.Column("location_to", sa.String(255)),
        sa.Column("breakfast_included", sa.Boolean, server_default="false"),
        sa.Column("lunch_included", sa.Boolean, server_default="false"),
        sa.Column("dinner_included", sa.Boolean, server_default="false"),
    )
    op.create_index("idx_trip_days_trip_day", "trip_days", ["trip_id", "day_number"], unique=True)

    op.create_table(
        "formulas",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("trip_day_id", sa.Integer, sa.ForeignKey("trip_days.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(255), server_default=""),
        sa.Column("block_type", sa.String(30)),
        sa.Column("description_html", sa.Text),
        sa.Column("sort_order", sa.Integer, server_default="0"),
        sa.Column("condition_id", sa.Integer, sa.ForeignKey("conditions.id", ondelete="SET NULL")),
        sa.Column("parent_block_id", sa.Integer, sa.ForeignKey("formulas.id", ondelete="SET NULL")),
    )
    op.create_index("idx_formulas_day", "formulas", ["trip_day_id", "sort_order"])

    op.create_table(
        "formula_condition_options",
        sa.Column("formula_id", sa.Integer, sa.ForeignKey("formulas.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("condition_option_id", sa.Integer, sa.ForeignKey("condition_options.id", ondelete="SET NULL")),
    )


def downgrade() -> None:
    op.drop_table("formula_condition_options")
    op.drop_table("formulas")
    op.drop_table("trip_days")
    op.drop_table("trip_conditions")
    op.drop_table("trip_cotations")
    op.drop_table("trips")
    op.drop_table("condition_options")
    op.drop_table("conditions")
    op.drop_table("accommodation_photos")
    op.drop_table("room_categories")
    op.drop_table("accommodations")
    op.drop_table("dossier_events")
    op.drop_table("participants")
    op.drop_table("dossiers")
