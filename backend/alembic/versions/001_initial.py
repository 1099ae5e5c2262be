"""Initial schema: users, athlete_profiles, daily_logs, ops_snapshots

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "athlete_profiles",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("data", sa.JSON(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", name="uq_athlete_profiles_user_id"),
    )
    op.create_index(op.f("ix_athlete_profiles_user_id"), "athlete_profiles", ["user_id"], unique=True)

    op.create_table(
        "daily_logs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("workout_score", sa.Float(), nullable=False),
        sa.Column("nutrition_score", sa.Float(), nullable=False),
        sa.Column("sleep_hours", sa.Float(), nullable=True),
        sa.Column("sleep_quality", sa.Float(), nullable=True),
        sa.Column("energy_level", sa.Float(), nullable=True),
        sa.Column("stress_index", sa.Float(), nullable=True),
        sa.Column("resting_heart_rate", sa.Float(), nullable=True),
        sa.Column("water_intake", sa.Float(), nullable=True),
        sa.Column("steps", sa.Integer(), nullable=True),
        sa.Column("body_weight", sa.Float(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "date", name="uq_daily_logs_user_id_date"),
    )
    op.create_index(op.f("ix_daily_logs_user_id"), "daily_logs", ["user_id"], unique=False)
    op.create_index(op.f("ix_daily_logs_date"), "daily_logs", ["date"], unique=False)

    op.create_table(
        "ops_snapshots",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("total", sa.Integer(), nullable=False),
        sa.Column("trend", sa.String(16), nullable=False),
        sa.Column("delta", sa.Float(), nullable=False),
        sa.Column("recorded_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_ops_snapshots_user_id"), "ops_snapshots", ["user_id"], unique=False)
    op.create_index(op.f("ix_ops_snapshots_recorded_at"), "ops_snapshots", ["recorded_at"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_ops_snapshots_recorded_at"), table_name="ops_snapshots")
    op.drop_index(op.f("ix_ops_snapshots_user_id"), table_name="ops_snapshots")
    op.drop_table("ops_snapshots")
    op.drop_index(op.f("ix_daily_logs_date"), table_name="daily_logs")
    op.drop_index(op.f("ix_daily_logs_user_id"), table_name="daily_logs")
    op.drop_table("daily_logs")
    op.drop_index(op.f("ix_athlete_profiles_user_id"), table_name="athlete_profiles")
    op.drop_table("athlete_profiles")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_table("users")
