"""create timetable core

Revision ID: 20251001_0001
Revises: None
Create Date: 2025-10-01 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

revision = "20251001_0001"
down_revision = None
branch_labels = None
depends_on = None


calendar_override_type = sa.Enum("work", "off", name="calendar_override_type")


def upgrade() -> None:
    op.create_table(
        "rooms",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=False, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False, server_default="30"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_rooms_name", "rooms", ["name"], unique=True)

    op.create_table(
        "classes",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("major", sa.String(length=200), nullable=True),
        sa.Column("student_count", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_classes_name", "classes", ["name"], unique=True)

    op.create_table(
        "sessions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("room_id", sa.Integer(), sa.ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("period", sa.Integer(), nullable=False),
        sa.Column("course", sa.String(length=200), nullable=False),
        sa.Column("teacher", sa.String(length=100), nullable=False),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("planned", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("allow_overflow", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("duration", sa.Integer(), nullable=False, server_default="2"),
        sa.Column("class_names", sa.Text(), nullable=True),
        sa.UniqueConstraint("room_id", "date", "period", name="uq_sessions_slot"),
        sa.CheckConstraint("period BETWEEN 1 AND 8", name="ck_sessions_period_range"),
        sa.CheckConstraint("duration >= 1", name="ck_sessions_duration_positive"),
        sa.CheckConstraint("planned >= 0", name="ck_sessions_planned_non_negative"),
        sa.CheckConstraint("capacity >= 0", name="ck_sessions_capacity_non_negative"),
    )
    op.create_index("ix_sessions_room_id", "sessions", ["room_id"])
    op.create_index("ix_sessions_date", "sessions", ["date"])

    op.create_table(
        "calendar_overrides",
        sa.Column("date", sa.Date(), primary_key=True, nullable=False),
        sa.Column("type", calendar_override_type, nullable=False),
    )

    op.create_table(
        "scheduling_settings",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("semester_start_monday", sa.Date(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("scheduling_settings")
    op.drop_table("calendar_overrides")
    calendar_override_type.drop(op.get_bind(), checkfirst=True)
    op.drop_index("ix_sessions_date", table_name="sessions")
    op.drop_index("ix_sessions_room_id", table_name="sessions")
    op.drop_table("sessions")
    op.drop_index("ix_classes_name", table_name="classes")
    op.drop_table("classes")
    op.drop_index("ix_rooms_name", table_name="rooms")
    op.drop_table("rooms")
